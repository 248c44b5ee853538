import gzip
import io
import tarfile
import time

import pytest

from archivex import (
    ArchiveCopyError,
    ArchiveCreateError,
    ArchiveFinalizeError,
    ArchiveHeaderError,
    ArchiveStateError,
    TarWriter,
)


def _members(data):
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tf:
        return [(m, tf.extractfile(m).read() if m.isreg() else None) for m in tf.getmembers()]


def test_create_zip_name_becomes_compressed_tar(tmp_path):
    t = TarWriter.create(tmp_path / "out.zip")
    assert t.name == str(tmp_path / "out.tar.gz")
    assert t.compressed
    t.add_bytes("a.txt", b"hello")
    t.close()

    with tarfile.open(tmp_path / "out.tar.gz", "r:gz") as tf:
        assert tf.getnames() == ["a.txt"]
        assert tf.extractfile("a.txt").read() == b"hello"


def test_create_plain_name_becomes_uncompressed_tar(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with TarWriter.create("out") as t:
        t.add_bytes("a.txt", b"hello")

    assert t.name == "out.tar"
    assert not t.compressed
    with tarfile.open(tmp_path / "out.tar", "r:") as tf:
        assert tf.extractfile("a.txt").read() == b"hello"


def test_create_fails_for_missing_directory(tmp_path):
    with pytest.raises(ArchiveCreateError):
        TarWriter.create(tmp_path / "missing" / "out.tar")


def test_file_header_fields(sink):
    before = time.time()
    t = TarWriter.create_writer("out.tar", sink, close_sink=False)
    t.add_file("f.bin", io.BytesIO(b"\x00\x01\x02"))
    t.close()

    [(member, content)] = _members(sink.getvalue())
    assert member.name == "f.bin"
    assert member.isreg()
    assert member.size == 3
    assert member.mode == 0o666
    assert before - 1 <= member.mtime <= time.time() + 1
    assert content == b"\x00\x01\x02"


def test_directory_then_file(sink):
    t = TarWriter.create_writer("out.tar", sink, close_sink=False)
    t.add_directory("sub")
    t.add_file("sub/f.txt", io.BytesIO(b"data"))
    t.close()

    data = sink.getvalue()
    # Name field of the first header block
    assert data[:100].rstrip(b"\x00") == b"sub/"

    (directory, _), (member, content) = _members(data)
    assert directory.isdir()
    assert directory.name == "sub"
    assert directory.size == 0
    assert directory.mode == 0o777
    assert member.name == "sub/f.txt"
    assert content == b"data"


def test_backslash_names_are_kept(sink):
    with TarWriter.create_writer("out.tar", sink, close_sink=False) as t:
        t.add_bytes("a\\b.txt", b"b")
        t.add_directory("c\\d")

    (member, content), (directory, _) = _members(sink.getvalue())
    assert member.name == "a\\b.txt"
    assert content == b"b"
    assert directory.isdir()
    assert directory.name == "c\\d"


def test_add_file_copies_whole_source_and_leaves_it_at_end(sink):
    source = io.BytesIO(b"0123456789")
    source.seek(4)

    t = TarWriter.create_writer("out.tar", sink, close_sink=False)
    t.add_file("digits.txt", source)
    t.close()

    assert source.tell() == 10
    [(_, content)] = _members(sink.getvalue())
    assert content == b"0123456789"


def test_compressed_output_is_gzip_wrapped_tar(sink):
    payload = b"compress me " * 1000

    t = TarWriter.create_writer("out.tar.gz", sink, close_sink=False)
    assert t.compressed
    t.add_directory("d")
    t.add_bytes("d/f.txt", payload)
    t.close()

    data = sink.getvalue()
    assert data[:2] == b"\x1f\x8b"
    assert len(data) < len(payload)

    raw = gzip.decompress(data)
    with tarfile.open(fileobj=io.BytesIO(raw), mode="r:") as tf:
        assert tf.getnames() == ["d", "d/f.txt"]
        assert tf.extractfile("d/f.txt").read() == payload


def test_uncompressed_writer_label(sink):
    t = TarWriter.create_writer("label", sink, close_sink=False)
    assert t.name == "label.tar"
    assert not t.compressed
    t.close()


def test_empty_archive_is_end_of_archive_padding(sink):
    TarWriter.create_writer("out.tar", sink, close_sink=False).close()

    data = sink.getvalue()
    assert len(data) == tarfile.RECORDSIZE
    assert data == b"\x00" * len(data)
    assert _members(data) == []


def test_empty_compressed_archive_is_valid(sink):
    TarWriter.create_writer("out.tar.gz", sink, close_sink=False).close()

    raw = gzip.decompress(sink.getvalue())
    assert raw == b"\x00" * tarfile.RECORDSIZE


def test_write_only_sink(write_only_sink):
    with TarWriter.create_writer("stream.tar.gz", write_only_sink) as t:
        t.add_bytes("f.txt", b"streamed")

    [(member, content)] = _members(write_only_sink.getvalue())
    assert member.name == "f.txt"
    assert content == b"streamed"


def test_unseekable_source_is_rejected(sink):
    class NoSeek(io.RawIOBase):
        def readable(self):
            return True

        def seekable(self):
            return False

    t = TarWriter.create_writer("out.tar", sink, close_sink=False)
    with pytest.raises(ArchiveCopyError):
        t.add_file("x", NoSeek())
    t.close()


def test_empty_entry_name_is_rejected(sink):
    t = TarWriter.create_writer("out.tar", sink, close_sink=False)
    with pytest.raises(ArchiveHeaderError):
        t.add_bytes("", b"")
    with pytest.raises(ArchiveHeaderError):
        t.add_directory("")
    t.close()


def test_close_order_is_tar_gzip_sink(sink, monkeypatch):
    t = TarWriter.create_writer("out.tar.gz", sink)

    def spy(label, close):
        def wrapper():
            sink.events.append(label)
            return close()

        return wrapper

    monkeypatch.setattr(t._tar, "close", spy("tar", t._tar.close))
    monkeypatch.setattr(t._gzip, "close", spy("gzip", t._gzip.close))
    t.close()

    assert sink.events == ["tar", "gzip", "sink"]
    assert sink.close_calls == 1


def test_gzip_failure_leaves_sink_open(sink, monkeypatch):
    t = TarWriter.create_writer("out.tar.gz", sink)
    gz = t._gzip

    def fail():
        raise OSError("trailer lost")

    monkeypatch.setattr(gz, "close", fail)
    with pytest.raises(ArchiveFinalizeError):
        t.close()
    assert sink.close_calls == 0

    monkeypatch.undo()
    gz.close()


def test_tar_failure_skips_gzip_and_sink(sink, monkeypatch):
    t = TarWriter.create_writer("out.tar.gz", sink)
    tar, gz = t._tar, t._gzip

    def fail():
        raise OSError("end blocks lost")

    def record_gzip():
        sink.events.append("gzip")

    monkeypatch.setattr(tar, "close", fail)
    monkeypatch.setattr(gz, "close", record_gzip)
    with pytest.raises(ArchiveFinalizeError, match="end blocks lost"):
        t.close()
    assert sink.events == []
    assert sink.close_calls == 0

    monkeypatch.undo()
    tar.close()
    gz.close()


def test_sink_release_error_is_raised(sink):
    sink.fail_close = True
    t = TarWriter.create_writer("out.tar", sink)

    with pytest.raises(ArchiveFinalizeError):
        t.close()
    assert sink.close_calls == 1


def test_close_keeps_sink_when_asked(sink):
    TarWriter.create_writer("out.tar", sink, close_sink=False).close()
    assert sink.close_calls == 0


def test_closed_archive_rejects_entries(sink):
    t = TarWriter.create_writer("out.tar", sink)
    t.close()
    t.close()  # no-op

    assert t.closed
    with pytest.raises(ArchiveStateError):
        t.add_bytes("a.txt", b"a")
    with pytest.raises(ArchiveStateError):
        t.add_directory("d")
    assert sink.close_calls == 1
