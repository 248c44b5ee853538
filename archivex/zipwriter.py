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
ZIP archive writer implementation.

This module provides the ZipWriter class, which drives the standard library
zipfile encoder: one local header and deflate stream per entry, and the
central directory on close.
"""

import logging
import os
import sys
import time
import zipfile
from typing import BinaryIO, Optional

from .base import Archive
from .constants import FLAG_UTF8, ZIP_DIR_ATTRS, ZIP_FILE_ATTRS
from .errors import ArchiveCopyError, ArchiveFinalizeError, ArchiveHeaderError
from .naming import zip_archive_name
from .utils import (
    copy_stream,
    directory_entry_name,
    entry_name,
    open_destination,
    release_sink,
    remaining_size,
)

logger = logging.getLogger(__name__)

# ZipInfo attribute read by ZipFile.open(..., "w"); renamed in 3.13
_COMPRESS_LEVEL_ATTR = "compress_level" if sys.version_info >= (3, 13) else "_compresslevel"


class _Utf8ZipInfo(zipfile.ZipInfo):
    """ZipInfo whose name is always stored as UTF-8 with flag bit 11 set.

    zipfile only sets the flag for non-ASCII names and resets flag_bits when
    an entry is opened for writing, so the flag is applied at encoding time.
    _encodeFilenameFlags is private; both the local header and the central
    directory call it on CPython 3.10 through 3.13.
    """

    __slots__ = ()

    def _encodeFilenameFlags(self):
        return self.filename.encode("utf-8"), self.flag_bits | FLAG_UTF8


class ZipWriter(Archive):
    """Writer for ZIP archives.

    Every file entry is deflate-compressed; directory entries are zero-length
    stored entries whose names end with "/".

    Example:
        with ZipWriter.create("out") as z:  # writes out.zip
            z.add_bytes("a.txt", b"hello")
            z.add_directory("sub")
    """

    def __init__(
        self,
        name: str,
        sink: BinaryIO,
        *,
        close_sink: bool = True,
        compresslevel: Optional[int] = None,
    ):
        """Bind a new ZIP encoder to sink.

        Use create() or create_writer() rather than calling this directly.

        Args:
            name: Destination path or label.
            sink: Binary file-like object the archive is written to.
            close_sink: Whether close() also closes sink.
            compresslevel: Deflate level (zlib default when None).
        """
        self.name = name
        self._sink = sink
        self._close_sink = close_sink
        self._closed = False
        self._zip = zipfile.ZipFile(
            sink, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel
        )

    @classmethod
    def create(cls, name: str | os.PathLike, *, compresslevel: Optional[int] = None) -> "ZipWriter":
        """Create a ZIP file, appending or fixing the ".zip" extension.

        Args:
            name: Requested destination path.
            compresslevel: Deflate level (zlib default when None).

        Returns:
            An open ZipWriter.

        Raises:
            ArchiveCreateError: If the file cannot be created.
        """
        path = zip_archive_name(os.fspath(name))
        sink = open_destination(path)
        logger.debug("Created ZIP archive %s", path)
        return cls(path, sink, close_sink=True, compresslevel=compresslevel)

    @classmethod
    def create_writer(
        cls,
        name: str,
        sink: BinaryIO,
        *,
        close_sink: bool = True,
        compresslevel: Optional[int] = None,
    ) -> "ZipWriter":
        """Create a ZIP archive written to an existing binary stream.

        The name is kept as a label only. The sink does not need to be
        seekable; unseekable sinks get data descriptors after each entry.

        Args:
            name: Label for the archive.
            sink: Writable binary file-like object.
            close_sink: Whether close() also closes sink.
            compresslevel: Deflate level (zlib default when None).
        """
        return cls(name, sink, close_sink=close_sink, compresslevel=compresslevel)

    @property
    def closed(self) -> bool:
        return self._closed

    def _new_info(self, name: str) -> zipfile.ZipInfo:
        info = _Utf8ZipInfo(name, date_time=time.localtime(time.time())[:6])
        setattr(info, _COMPRESS_LEVEL_ATTR, self._zip.compresslevel)
        return info

    def add_file(self, name: str, source: BinaryIO) -> None:
        """Add a deflated file entry.

        Copies source from its current position to its end. The source is
        left positioned at its end.

        Args:
            name: Entry name (path within the ZIP archive).
            source: Seekable binary file-like object.

        Raises:
            ArchiveStateError: If the archive is closed.
            ArchiveHeaderError: If the local header cannot be written.
            ArchiveCopyError: If the data cannot be read or written.
        """
        self._check_open()
        name = entry_name(name)

        info = self._new_info(name)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = ZIP_FILE_ATTRS
        # Size hint; zipfile switches to ZIP64 for large entries
        info.file_size = remaining_size(source)

        try:
            dest = self._zip.open(info, mode="w")
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveHeaderError(f"Cannot write header for {name}: {e}") from e

        try:
            with dest:
                copied = copy_stream(source, dest)
        except (OSError, RuntimeError) as e:
            raise ArchiveCopyError(f"Cannot write data for {name}: {e}") from e

        logger.debug("Added %s to %s (%d bytes)", name, self.name, copied)

    def add_directory(self, name: str) -> None:
        """Add a directory marker entry.

        Args:
            name: Directory name; "/" is appended if missing.

        Raises:
            ArchiveStateError: If the archive is closed.
            ArchiveHeaderError: If the header cannot be written.
        """
        self._check_open()
        name = directory_entry_name(name)

        info = self._new_info(name)
        info.compress_type = zipfile.ZIP_STORED
        info.external_attr = ZIP_DIR_ATTRS

        try:
            self._zip.open(info, mode="w").close()
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveHeaderError(f"Cannot write header for {name}: {e}") from e

        logger.debug("Added directory %s to %s", name, self.name)

    def close(self) -> None:
        """Write the central directory, then release the sink.

        A failure while releasing the sink is logged and not raised; the
        result of writing the central directory decides the outcome.

        Raises:
            ArchiveFinalizeError: If the central directory cannot be written.
        """
        if self._closed:
            return
        self._closed = True

        try:
            self._zip.close()
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveFinalizeError(f"Cannot finalize {self.name}: {e}") from e
        finally:
            if self._close_sink:
                try:
                    release_sink(self._sink)
                except Exception as e:
                    logger.warning("Ignoring error while closing output of %s: %s", self.name, e)

        logger.debug("Closed ZIP archive %s", self.name)
