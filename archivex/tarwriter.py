"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
TAR archive writer implementation.

This module provides the TarWriter class, which drives a streaming tarfile
encoder, optionally layered on top of a gzip encoder:

    tarfile stream -> [gzip.GzipFile] -> output sink

Closing happens in the same order, innermost first.
"""

import gzip
import logging
import os
import tarfile
import time
from typing import BinaryIO, Optional

from .base import Archive
from .constants import COPY_BUFFER_SIZE, GZIP_COMPRESSION_LEVEL, TAR_DIR_MODE, TAR_FILE_MODE
from .errors import (
    ArchiveCopyError,
    ArchiveCreateError,
    ArchiveFinalizeError,
    ArchiveHeaderError,
)
from .naming import tar_archive_name
from .utils import directory_entry_name, entry_name, open_destination, release_sink

logger = logging.getLogger(__name__)


class TarWriter(Archive):
    """Writer for TAR and gzip-compressed TAR archives.

    File entries get mode 0o666 and directory entries mode 0o777; both carry
    the time at which they were added. Entry data is copied unmodified into
    the TAR stream and compressed by the gzip layer when one is present.

    Example:
        with TarWriter.create("out.zip") as t:  # writes out.tar.gz
            t.add_directory("sub")
            t.add_bytes("sub/f.txt", b"data")
    """

    def __init__(
        self,
        name: str,
        sink: BinaryIO,
        compressed: bool,
        *,
        close_sink: bool = True,
        compresslevel: int = GZIP_COMPRESSION_LEVEL,
    ):
        """Bind a new TAR encoder to sink, through gzip if compressed.

        Use create() or create_writer() rather than calling this directly.

        Args:
            name: Destination path or label.
            sink: Binary file-like object the archive is written to.
            compressed: Whether to gzip the TAR stream.
            close_sink: Whether close() also closes sink.
            compresslevel: gzip compression level.

        Raises:
            ArchiveCreateError: If the gzip header cannot be written.
        """
        self.name = name
        self.compressed = compressed
        self._sink = sink
        self._close_sink = close_sink
        self._closed = False
        self._gzip: Optional[gzip.GzipFile] = None

        out = sink
        if compressed:
            try:
                # No embedded file name or timestamp in the gzip header
                self._gzip = gzip.GzipFile(
                    filename="", mode="wb", compresslevel=compresslevel, fileobj=sink, mtime=0
                )
            except OSError as e:
                raise ArchiveCreateError(f"Cannot start gzip stream for {name}: {e}") from e
            out = self._gzip

        self._tar = tarfile.open(
            fileobj=out, mode="w|", format=tarfile.PAX_FORMAT, copybufsize=COPY_BUFFER_SIZE
        )

    @classmethod
    def create(
        cls, name: str | os.PathLike, *, compresslevel: int = GZIP_COMPRESSION_LEVEL
    ) -> "TarWriter":
        """Create a TAR file, gzip-compressed when the name asks for it.

        "x.tar.gz" is compressed and "x.tar" is not; "x.zip" becomes
        "x.tar.gz" and any other name gets ".tar" appended.

        Args:
            name: Requested destination path.
            compresslevel: gzip compression level.

        Returns:
            An open TarWriter.

        Raises:
            ArchiveCreateError: If the file cannot be created.
        """
        path, compressed = tar_archive_name(os.fspath(name))
        sink = open_destination(path)
        try:
            writer = cls(path, sink, compressed, close_sink=True, compresslevel=compresslevel)
        except ArchiveCreateError:
            sink.close()
            raise
        logger.debug("Created TAR archive %s (compressed=%s)", path, compressed)
        return writer

    @classmethod
    def create_writer(
        cls,
        name: str,
        sink: BinaryIO,
        *,
        close_sink: bool = True,
        compresslevel: int = GZIP_COMPRESSION_LEVEL,
    ) -> "TarWriter":
        """Create a TAR archive written to an existing binary stream.

        Compression is chosen from name exactly as in create(); nothing is
        opened on disk.
        """
        label, compressed = tar_archive_name(name)
        return cls(label, sink, compressed, close_sink=close_sink, compresslevel=compresslevel)

    @property
    def closed(self) -> bool:
        return self._closed

    def add_file(self, name: str, source: BinaryIO) -> None:
        """Add a regular file entry.

        The size is measured by seeking source to its end; the data is then
        copied from offset 0. The source is left positioned at its end.

        Args:
            name: Entry name (path within the TAR archive).
            source: Seekable binary file-like object.

        Raises:
            ArchiveStateError: If the archive is closed.
            ArchiveHeaderError: If the header cannot be encoded.
            ArchiveCopyError: If source cannot be seeked or read, or the
                output cannot be written.
        """
        self._check_open()
        name = entry_name(name)

        try:
            size = source.seek(0, os.SEEK_END)
            source.seek(0, os.SEEK_SET)
        except (OSError, ValueError) as e:
            raise ArchiveCopyError(f"Cannot seek source for {name}: {e}") from e

        info = tarfile.TarInfo(name)
        info.type = tarfile.REGTYPE
        info.size = size
        info.mode = TAR_FILE_MODE
        info.mtime = int(time.time())
        self._write(info, source)

        logger.debug("Added %s to %s (%d bytes)", name, self.name, size)

    def add_directory(self, name: str) -> None:
        """Add a directory entry.

        Args:
            name: Directory name; "/" is appended if missing.

        Raises:
            ArchiveStateError: If the archive is closed.
            ArchiveHeaderError: If the header cannot be encoded.
        """
        self._check_open()
        name = directory_entry_name(name)

        info = tarfile.TarInfo(name)
        info.type = tarfile.DIRTYPE
        info.size = 0
        info.mode = TAR_DIR_MODE
        info.mtime = int(time.time())
        self._write(info)

        logger.debug("Added directory %s to %s", name, self.name)

    def _write(self, info: tarfile.TarInfo, source: Optional[BinaryIO] = None) -> None:
        # tarfile raises ValueError while encoding a header, OSError while copying
        try:
            self._tar.addfile(info, source)
        except ValueError as e:
            raise ArchiveHeaderError(f"Cannot write header for {info.name}: {e}") from e
        except OSError as e:
            raise ArchiveCopyError(f"Cannot write data for {info.name}: {e}") from e

    def close(self) -> None:
        """Write the end-of-archive blocks, flush gzip, then release the sink.

        If finalizing the TAR stream or the gzip stream fails, the error is
        raised straight away and the sink is left open.

        Raises:
            ArchiveFinalizeError: If any of the three steps fails.
        """
        if self._closed:
            return
        self._closed = True

        try:
            self._tar.close()
        except (OSError, ValueError) as e:
            raise ArchiveFinalizeError(f"Cannot finalize {self.name}: {e}") from e

        if self._gzip is not None:
            try:
                self._gzip.close()
            except (OSError, ValueError) as e:
                raise ArchiveFinalizeError(f"Cannot finish gzip stream of {self.name}: {e}") from e

        if self._close_sink:
            try:
                release_sink(self._sink)
            except OSError as e:
                raise ArchiveFinalizeError(f"Cannot close output of {self.name}: {e}") from e

        logger.debug("Closed TAR archive %s", self.name)
