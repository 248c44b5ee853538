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
Utility functions for archivex.

This module provides helpers for entry name validation and for measuring and
copying seekable byte sources into an encoder stream.
"""

import os
from typing import BinaryIO

from .constants import COPY_BUFFER_SIZE, ENTRY_SEPARATOR
from .errors import ArchiveCopyError, ArchiveCreateError, ArchiveHeaderError


def entry_name(name: str) -> str:
    """Validate an entry name; the name itself is stored unchanged.

    Args:
        name: Entry name as given by the caller.

    Returns:
        The same name.

    Raises:
        ArchiveHeaderError: If the name is empty or contains null bytes.
    """
    if not name:
        raise ArchiveHeaderError("Entry name cannot be empty")
    if "\x00" in name:
        raise ArchiveHeaderError("Entry name cannot contain null bytes")

    return name


def directory_entry_name(name: str) -> str:
    """Return a validated directory entry name ending with a slash."""
    name = entry_name(name)
    if not name.endswith(ENTRY_SEPARATOR):
        name += ENTRY_SEPARATOR
    return name


def remaining_size(source: BinaryIO) -> int:
    """Return the number of bytes between the current position and the end.

    The source is left at the position it had on entry.

    Args:
        source: Seekable binary file-like object.

    Returns:
        Remaining byte count (never negative).

    Raises:
        ArchiveCopyError: If the source cannot be seeked.
    """
    try:
        position = source.tell()
        end = source.seek(0, os.SEEK_END)
        source.seek(position, os.SEEK_SET)
    except (OSError, ValueError) as e:
        raise ArchiveCopyError(f"Cannot seek source: {e}") from e
    return max(end - position, 0)


def copy_stream(source: BinaryIO, dest: BinaryIO, buffer_size: int = COPY_BUFFER_SIZE) -> int:
    """Copy everything from source's current position to its end into dest.

    Args:
        source: Binary file-like object to read from.
        dest: Binary file-like object to write to.
        buffer_size: Size of each read.

    Returns:
        Number of bytes copied.

    Raises:
        ArchiveCopyError: If a read or write fails, or dest accepts fewer bytes
            than it was given.
    """
    copied = 0
    try:
        while True:
            chunk = source.read(buffer_size)
            if not chunk:
                break
            n = len(chunk)
            written = dest.write(chunk)
            if written is not None and written != n:
                raise ArchiveCopyError(f"Write operation failed: expected to write {n} bytes, wrote {written} bytes")
            copied += n
    except (OSError, ValueError) as e:
        raise ArchiveCopyError(f"Copy failed after {copied} bytes: {e}") from e
    return copied


def open_destination(path: str) -> BinaryIO:
    """Open (creating or truncating) a destination file for binary writing.

    Raises:
        ArchiveCreateError: If the file cannot be opened.
    """
    try:
        return open(path, "wb")
    except OSError as e:
        raise ArchiveCreateError(f"Cannot create archive {path}: {e}") from e


def release_sink(sink: object) -> None:
    """Close sink if it exposes a close() method; errors propagate."""
    close = getattr(sink, "close", None)
    if callable(close):
        close()
