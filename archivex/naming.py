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
Destination naming policy.

Callers often pass a base name, or a name implying the other format. These
functions make the destination extension agree with the chosen writer
instead of failing. Only a trailing suffix is ever rewritten.
"""

from .constants import SUFFIX_TAR, SUFFIX_TAR_GZ, SUFFIX_ZIP


def _replace_suffix(name: str, old: str, new: str) -> str:
    return name[: -len(old)] + new


def zip_archive_name(name: str) -> str:
    """Return the destination name for a ZIP archive.

    Examples:
        "out" -> "out.zip"
        "out.zip" -> "out.zip"
        "out.tar.gz" -> "out.zip"
    """
    if name.endswith(SUFFIX_ZIP):
        return name
    if name.endswith(SUFFIX_TAR_GZ):
        return _replace_suffix(name, SUFFIX_TAR_GZ, SUFFIX_ZIP)
    return name + SUFFIX_ZIP


def tar_archive_name(name: str) -> tuple[str, bool]:
    """Return the destination name for a TAR archive and whether to gzip it.

    Args:
        name: Requested destination name.

    Returns:
        Tuple of (name, compressed). A ".tar.gz" name is compressed, a ".tar"
        name is not. A ".zip" name becomes ".tar.gz" (compressed); any other
        name gets ".tar" appended (uncompressed).
    """
    compressed = name.endswith(SUFFIX_TAR_GZ)

    if not compressed and not name.endswith(SUFFIX_TAR):
        if name.endswith(SUFFIX_ZIP):
            name = _replace_suffix(name, SUFFIX_ZIP, SUFFIX_TAR_GZ)
            compressed = True
        else:
            name += SUFFIX_TAR

    return name, compressed
