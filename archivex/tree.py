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
Archiving whole directory trees.

walk() visits a directory tree and hands every entry to a write function;
add_all() plugs an archive's add_directory/add_file into it so both formats
share the same traversal.
"""

import logging
import os
import posixpath
from typing import BinaryIO, Callable, Optional

from .errors import ArchiveTraversalError

logger = logging.getLogger(__name__)

# Called with (entry_name, None, stat) for directories and
# (entry_name, file, stat) for files
ArchiveWriteFunc = Callable[[str, Optional[BinaryIO], os.stat_result], None]


def _scan(directory: str) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise ArchiveTraversalError(f"Cannot read directory {directory}: {e}") from e


def _walk(directory: str, prefix: str, write_func: ArchiveWriteFunc) -> None:
    for entry in _scan(directory):
        name = posixpath.join(prefix, entry.name) if prefix else entry.name

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
            if is_dir or is_file:
                info = entry.stat(follow_symlinks=is_file)
        except OSError as e:
            raise ArchiveTraversalError(f"Cannot stat {entry.path}: {e}") from e

        if is_dir:
            write_func(name, None, info)
            _walk(entry.path, name, write_func)
        elif is_file:
            try:
                source = open(entry.path, "rb")
            except OSError as e:
                raise ArchiveTraversalError(f"Cannot open {entry.path}: {e}") from e
            with source:
                write_func(name, source, info)
        else:
            logger.debug("Skipping %s: not a regular file or directory", entry.path)


def walk(root: str | os.PathLike, write_func: ArchiveWriteFunc, include_root: bool = False) -> None:
    """Visit every directory and regular file below root, depth first.

    Entries of each directory are visited in name order, and a directory is
    visited before its contents. Entry names are relative to root and always
    use "/" as separator.

    Args:
        root: Directory to walk.
        write_func: Called with (entry_name, None, stat) for each directory
            and (entry_name, file, stat) for each regular file. The file is
            open for binary reading and is closed once write_func returns.
            stat is the os.stat_result of the entry (of the link target for
            symlinked files).
        include_root: If True, root itself is visited first and its base
            name prefixes every entry name.

    Raises:
        ArchiveTraversalError: If root or one of its subdirectories cannot
            be read, or a file cannot be opened.
    """
    root = os.path.normpath(os.fspath(root))
    if not os.path.isdir(root):
        raise ArchiveTraversalError(f"Not a directory: {root}")

    prefix = ""
    if include_root:
        prefix = os.path.basename(os.path.abspath(root))
        try:
            info = os.stat(root)
        except OSError as e:
            raise ArchiveTraversalError(f"Cannot stat {root}: {e}") from e
        write_func(prefix, None, info)

    _walk(root, prefix, write_func)


def add_all(archive, root: str | os.PathLike, include_root: bool = False) -> None:
    """Add a whole directory tree to an archive.

    Entry metadata is not copied; each writer applies its own modes and
    timestamps.

    Args:
        archive: Any open archive handle (ZipWriter or TarWriter).
        root: Directory to archive.
        include_root: If True, entry names start with the base name of root.

    Raises:
        ArchiveTraversalError: On the first traversal failure.
        ArchiveError: The first error raised by add_directory or add_file.
    """

    def write(name: str, source: Optional[BinaryIO], info: os.stat_result) -> None:
        if source is None:
            archive.add_directory(name)
        else:
            archive.add_file(name, source)

    walk(root, write, include_root=include_root)
    logger.debug("Added tree %s to %s", root, archive.name)
