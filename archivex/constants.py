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
Constants shared by the ZIP and TAR writers.

This module defines destination suffixes, header flags, entry modes and
buffer sizes used throughout archivex.
"""

# Destination suffixes
SUFFIX_ZIP = ".zip"
SUFFIX_TAR = ".tar"
SUFFIX_TAR_GZ = ".tar.gz"

# Directory entry names always end with this separator
ENTRY_SEPARATOR = "/"

# ZIP general purpose bit flags
FLAG_UTF8 = 0x0800  # UTF-8 encoding for filename/comment

# ZIP external attributes (Unix mode in the high 16 bits)
# 0x10 is the MS-DOS directory attribute
ZIP_FILE_ATTRS = 0o100644 << 16  # Regular file, rw-r--r--
ZIP_DIR_ATTRS = (0o040755 << 16) | 0x10  # Directory, rwxr-xr-x

# TAR entry modes
TAR_FILE_MODE = 0o666  # rw-rw-rw-
TAR_DIR_MODE = 0o777  # rwxrwxrwx

# Buffer used when copying entry data into an encoder
COPY_BUFFER_SIZE = 128 * 1024

# gzip compression level for .tar.gz destinations (gzip module default)
GZIP_COMPRESSION_LEVEL = 9
