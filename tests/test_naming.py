import pytest

from archivex.naming import tar_archive_name, zip_archive_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("out", "out.zip"),
        ("out.zip", "out.zip"),
        ("out.tar.gz", "out.zip"),
        ("out.tar", "out.tar.zip"),
        ("dir/backup", "dir/backup.zip"),
        ("a.tar.gz.d/out.tar.gz", "a.tar.gz.d/out.zip"),
    ],
)
def test_zip_archive_name(name, expected):
    assert zip_archive_name(name) == expected


@pytest.mark.parametrize(
    "name, expected, compressed",
    [
        ("out", "out.tar", False),
        ("out.tar", "out.tar", False),
        ("out.tar.gz", "out.tar.gz", True),
        ("out.zip", "out.tar.gz", True),
        ("out.gz", "out.gz.tar", False),
        ("a.zip.d/out.zip", "a.zip.d/out.tar.gz", True),
    ],
)
def test_tar_archive_name(name, expected, compressed):
    assert tar_archive_name(name) == (expected, compressed)


@pytest.mark.parametrize("name", ["out", "out.zip", "out.tar.gz", "x/y.tar"])
def test_naming_is_idempotent(name):
    once = zip_archive_name(name)
    assert zip_archive_name(once) == once

    tar_once, compressed = tar_archive_name(name)
    assert tar_archive_name(tar_once) == (tar_once, compressed)
