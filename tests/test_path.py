import os
import sys

import pytest

from rutkit.path import (
    PLATFORM_MAX_PATH,
    dir_exists,
    file_exists,
    format_path,
    get_file_name,
    get_suffix,
    make_dir_via_path,
    module_dir,
    module_name,
    module_path,
    remove_file_name,
    remove_suffix,
)


def test_get_file_name_mixed_separators():
    assert get_file_name("C:/dir/sub\\file.txt") == "file.txt"


def test_get_file_name_without_separator():
    assert get_file_name("file.txt") == "file.txt"


def test_get_file_name_trailing_separator():
    assert get_file_name("dir/sub/") == ""


def test_get_file_name_bytes_skips_double_byte_trail():
    assert get_file_name(b"dir/\x95\\name") == b"\x95\\name"


def test_remove_file_name():
    assert remove_file_name("a/b\\c.txt") == "a/b\\"


def test_remove_file_name_without_separator():
    assert remove_file_name("c.txt") == "c.txt"


def test_get_suffix_last_dot():
    assert get_suffix("a/b.c/file.tar.gz") == ".gz"


def test_get_suffix_dot_only_in_directory():
    assert get_suffix("a.b/file") == ""


def test_get_suffix_bytes():
    assert get_suffix(b"dir/file.bin") == b".bin"


def test_remove_suffix():
    assert remove_suffix("dir/file.txt") == "dir/file"


def test_remove_suffix_dot_only_in_directory():
    assert remove_suffix("dir.x\\file") == "dir.x\\file"


def test_suffix_split_round_trip():
    path = "some/where/name.ext"
    assert remove_suffix(path) + get_suffix(path) == path


def test_file_name_split_round_trip():
    path = "some\\where/name.ext"
    assert remove_file_name(path) + get_file_name(path) == path


def test_format_path_to_backslash():
    assert format_path("a/b\\c", "\\") == "a\\b\\c"


def test_format_path_to_slash():
    assert format_path("a/b\\c", "/") == "a/b/c"


def test_format_path_other_slash_unchanged():
    assert format_path("a/b\\c", "|") == "a/b\\c"


def test_format_path_bytes_skips_double_byte():
    assert format_path(b"\x95/x/y", "\\") == b"\x95/x\\y"


def test_format_path_bytes_to_slash():
    assert format_path(b"a\\b\\c", b"/") == b"a/b/c"


def test_make_dir_via_path_creates_parents(tmp_path):
    target = str(tmp_path) + "/x/y/file"
    assert make_dir_via_path(target) is True
    assert (tmp_path / "x" / "y").is_dir()
    assert not (tmp_path / "x" / "y" / "file").exists()


def test_make_dir_via_path_existing_is_fine(tmp_path):
    target = str(tmp_path) + "/d/"
    make_dir_via_path(target)
    assert make_dir_via_path(target) is True
    assert (tmp_path / "d").is_dir()


def test_make_dir_via_path_too_long():
    with pytest.raises(ValueError):
        make_dir_via_path("a/" * (PLATFORM_MAX_PATH // 2 + 1))


def test_file_and_dir_exists(tmp_path):
    file_path = tmp_path / "f.txt"
    file_path.write_text("x")
    assert file_exists(file_path) is True
    assert dir_exists(tmp_path) is True
    assert dir_exists(file_path) is False
    assert file_exists(tmp_path / "missing") is False


def test_module_dir_is_cwd():
    result = module_dir()
    assert result.endswith(os.sep)
    assert os.path.samefile(result, os.getcwd())


def test_module_path_and_name():
    assert module_path() == sys.executable
    assert module_name() == os.path.basename(sys.executable)