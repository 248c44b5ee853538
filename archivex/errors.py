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
Custom exception classes for archivex.

This module defines specific exception types for the different stages at
which writing an archive can fail. The underlying cause (usually an OSError
or ValueError raised by zipfile, tarfile or gzip) is always chained.
"""


class ArchiveError(Exception):
    """Base exception class for all archive writing errors."""

    pass


class ArchiveCreateError(ArchiveError):
    """Raised when the archive destination cannot be created.

    This exception is raised when:
    - The destination file cannot be opened or truncated
    - The destination directory does not exist or is not writable
    """

    pass


class ArchiveHeaderError(ArchiveError):
    """Raised when an entry header cannot be written.

    This exception is raised when:
    - The entry name is empty or contains null bytes
    - The encoder rejects a header field (name or size out of range)
    """

    pass


class ArchiveCopyError(ArchiveError):
    """Raised when entry data cannot be copied into the archive.

    This exception is raised when:
    - The byte source cannot be read or seeked
    - The output sink rejects a write
    - The source ends before the size recorded in the header
    """

    pass


class ArchiveFinalizeError(ArchiveError):
    """Raised when an archive cannot be finalized.

    This exception is raised when:
    - The ZIP central directory cannot be written
    - The TAR end-of-archive blocks cannot be written
    - The gzip trailer cannot be flushed
    - A TAR output sink fails to close
    """

    pass


class ArchiveStateError(ArchiveError):
    """Raised when an entry is added to an archive that is already closed."""

    pass


class ArchiveTraversalError(ArchiveError):
    """Raised when a directory tree cannot be walked by add_all."""

    pass
