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
ARCHIVEX - write ZIP and TAR(.gz) archives through one interface.

Archives are built incrementally: create a destination, add file and
directory entries one by one, then close. ZipWriter and TarWriter share the
Archive interface, so code that fills an archive does not need to know which
format it is writing.
"""

from .base import Archive
from .errors import (
    ArchiveCopyError,
    ArchiveCreateError,
    ArchiveError,
    ArchiveFinalizeError,
    ArchiveHeaderError,
    ArchiveStateError,
    ArchiveTraversalError,
)
from .tarwriter import TarWriter
from .tree import ArchiveWriteFunc, add_all, walk
from .zipwriter import ZipWriter

__all__ = [
    "Archive",
    "ZipWriter",
    "TarWriter",
    "add_all",
    "walk",
    "ArchiveWriteFunc",
    "ArchiveError",
    "ArchiveCreateError",
    "ArchiveHeaderError",
    "ArchiveCopyError",
    "ArchiveFinalizeError",
    "ArchiveStateError",
    "ArchiveTraversalError",
]

__version__ = "0.1.0"
