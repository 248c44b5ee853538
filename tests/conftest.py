import io

import pytest


class RecordingSink:
    """Seekable in-memory sink that records close() calls."""

    def __init__(self):
        self.buffer = io.BytesIO()
        self.close_calls = 0
        self.fail_close = False
        self.fail_writes = False
        self.events = []

    def write(self, data):
        if self.fail_writes:
            raise OSError("write refused")
        return self.buffer.write(data)

    def tell(self):
        return self.buffer.tell()

    def seek(self, offset, whence=0):
        return self.buffer.seek(offset, whence)

    def flush(self):
        pass

    def close(self):
        self.close_calls += 1
        self.events.append("sink")
        if self.fail_close:
            raise OSError("close refused")

    def getvalue(self):
        return self.buffer.getvalue()


class WriteOnlySink:
    """Sink that supports nothing but write() and flush()."""

    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(bytes(data))
        return len(data)

    def flush(self):
        pass

    def getvalue(self):
        return b"".join(self.chunks)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def write_only_sink():
    return WriteOnlySink()


@pytest.fixture
def tree(tmp_path):
    """Small directory tree:

    root/
        a.txt
        empty/
        sub/
            b.txt
            deeper/
                c.txt
    """
    root = tmp_path / "root"
    (root / "empty").mkdir(parents=True)
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"A")
    (root / "sub" / "b.txt").write_bytes(b"B")
    (root / "sub" / "deeper" / "c.txt").write_bytes(b"C")
    return root
