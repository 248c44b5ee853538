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
Common contract for archive writers.

Archive is the interface shared by ZipWriter and TarWriter. It carries no
format state; it only defines the operations every writer supports and the
convenience methods built on top of them.
"""

import io
import os
from abc import ABC, abstractmethod
from typing import BinaryIO

from . import tree
from .errors import ArchiveCopyError, ArchiveStateError


class Archive(ABC):
    """Write-only archive handle.

    Handles are obtained from create() or create_writer() and are open from
    the moment they are returned. Entries are appended in call order until
    close() finalizes the archive.

    Example:
        with ZipWriter.create("backup") as archive:
            archive.add_directory("docs")
            with open("readme.txt", "rb") as f:
                archive.add_file("docs/readme.txt", f)
    """

    name: str

    @classmethod
    @abstractmethod
    def create(cls, name: str) -> "Archive":
        """Create an archive file at name, normalizing its extension."""

    @classmethod
    @abstractmethod
    def create_writer(cls, name: str, sink: BinaryIO, *, close_sink: bool = True) -> "Archive":
        """Create an archive that writes to an existing binary stream."""

    @abstractmethod
    def add_file(self, name: str, source: BinaryIO) -> None:
        """Add a file entry with the contents of a seekable byte source."""

    @abstractmethod
    def add_directory(self, name: str) -> None:
        """Add a directory entry; a trailing slash is appended if missing."""

    @abstractmethod
    def close(self) -> None:
        """Finalize the archive and release its output."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""

    def _check_open(self) -> None:
        if self.closed:
            raise ArchiveStateError(f"Archive {self.name} is closed")

    def add_bytes(self, name: str, data: bytes) -> None:
        """Add a file entry from in-memory data.

        Args:
            name: Entry name (path within the archive).
            data: Entry contents.
        """
        self.add_file(name, io.BytesIO(data))

    def add_path(self, name: str, path: str | os.PathLike) -> None:
        """Add a file entry from a file on disk.

        Args:
            name: Entry name (path within the archive).
            path: Path to the source file.

        Raises:
            ArchiveCopyError: If the source file cannot be opened.
        """
        self._check_open()
        try:
            source = open(path, "rb")
        except OSError as e:
            raise ArchiveCopyError(f"Error reading file {path}: {e}") from e
        with source:
            self.add_file(name, source)

    def add_all(self, root: str | os.PathLike, include_root: bool = False) -> None:
        """Add every directory and regular file below root.

        See archivex.tree.add_all.
        """
        tree.add_all(self, root, include_root=include_root)

    def __enter__(self) -> "Archive":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
