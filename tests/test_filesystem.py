import os
import stat

import pytest

from pd2mm import filesystem as fs
from pd2mm.filesystem import PathCheck, PathCheckAction, PathCheckType


def _touch(path, content=b"data"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def test_normalize_replaces_backslashes():
    assert fs.normalize("a\\b\\c") == "a/b/c"


def test_normalize_all_and_split():
    assert fs.normalize_all(["a\\b", "c/d"]) == ["a/b", "c/d"]
    assert fs.to_normalized_list("a\\b/c") == ["a", "b", "c"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("./mods", "mods"),
        (".\\mods", "mods"),
        ("/mods", "mods"),
        ("mods/.", "mods"),
        ("mods/", "mods"),
        ("mods\\", "mods"),
        ("mods", "mods"),
    ],
)
def test_trim_path(raw, expected):
    assert fs.trim_path(raw) == expected


def test_default_problem_paths_first_entry_and_copy():
    paths = fs.default_problem_paths()
    assert paths[0] == PathCheck(PathCheckType.ENDS_WITH, "SteamApps", PathCheckAction.WARN)
    paths.clear()
    assert fs.default_problem_paths()[0].target == "SteamApps"


def test_check_ends_with_desktop_is_denied():
    check = fs.check_path_for_problem_locations("C:\\Users\\me\\Desktop")
    assert check == PathCheck(PathCheckType.ENDS_WITH, "Desktop", PathCheckAction.DENY)


def test_check_contains_desktop_warns():
    check = fs.check_path_for_problem_locations("/home/me/desktop/project")
    assert check.type is PathCheckType.CONTAINS
    assert check.action is PathCheckAction.WARN


def test_check_program_files_x86():
    check = fs.check_path_for_problem_locations("C:/Program Files (x86)/Game")
    assert check.target == "Program Files (x86)"


def test_check_drive_root():
    check = fs.check_path_for_problem_locations("C://")
    assert check.type is PathCheckType.DRIVE_ROOT


def test_check_reserved_word():
    check = fs.check_path_for_problem_locations("games/CON")
    assert check.target == "CON"
    assert check.action is PathCheckAction.DENY


def test_check_clean_path():
    assert fs.check_path_for_problem_locations("games/mods") is None


def test_combine_cleans_and_skips_empty():
    assert fs.combine("a", "b", "c") == os.path.join("a", "b", "c")
    assert fs.combine("a", "", "b/../c") == os.path.join("a", "c")


def test_from_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert fs.from_cwd("x", "y") == os.path.join(os.getcwd(), "x", "y")


def test_directory_name():
    assert fs.get_directory_name(os.path.join("a", "b", "c.txt")) == os.path.join("a", "b")
    assert fs.get_directory_name("c.txt") == "."


def test_file_name_and_extension():
    name = os.path.join("dir", "archive.tar.gz")
    assert fs.get_file_name(name) == "archive.tar"
    assert fs.get_file_extension(name) == ".gz"
    assert fs.get_file_name(".bashrc") == ""
    assert fs.get_file_extension("dir.d/file") == ""


def test_relative_path():
    assert fs.get_relative_path("a") == "./a"
    assert fs.get_relative_path("a", "b", "c") == "a/b/c"
    with pytest.raises(ValueError):
        fs.get_relative_path()


def test_copy_file_and_tree(tmp_path):
    src = _touch(tmp_path / "src" / "sub" / "f.txt", b"hello")
    fs.copy(str(src), str(tmp_path / "out" / "deep" / "g.txt"))
    assert (tmp_path / "out" / "deep" / "g.txt").read_bytes() == b"hello"

    fs.copy(str(tmp_path / "src"), str(tmp_path / "tree"))
    assert (tmp_path / "tree" / "sub" / "f.txt").read_bytes() == b"hello"


def test_copy_file(tmp_path):
    src = _touch(tmp_path / "a.bin", b"\x00\x01")
    fs.copy_file(str(src), str(tmp_path / "b.bin"))
    assert (tmp_path / "b.bin").read_bytes() == b"\x00\x01"


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.copy_file(str(tmp_path / "missing"), str(tmp_path / "b"))


def test_copy_and_rename(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _touch(tmp_path / "old" / "modA" / "x.txt", b"x")
    fs.copy_and_rename(["old/modA/x.txt"], "./old", "new", "modA", "modB")
    assert (tmp_path / "new" / "modB" / "x.txt").read_bytes() == b"x"

    with pytest.raises(fs.DestinationExistsError):
        fs.copy_and_rename(["old/modA/x.txt"], "./old", "new", "modA", "modB")


def test_copy_and_rename_errors(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _touch(tmp_path / "old" / "modA" / "x.txt")
    with pytest.raises(fs.NoNameFoundError):
        fs.copy_and_rename(["old/modA/x.txt"], "old", "new", "missing", "modB")
    with pytest.raises(fs.NoPathFoundError):
        fs.copy_and_rename(["old/modA/x.txt"], "elsewhere", "new", "modA", "modB")


def test_exists(tmp_path):
    _touch(tmp_path / "f")
    assert fs.exists(str(tmp_path / "f"))
    assert not fs.exists(str(tmp_path / "nope"))


def test_read_file(tmp_path):
    _touch(tmp_path / "f", b"abc")
    assert fs.read_file(str(tmp_path / "f")) == b"abc"


def test_read_all_string_lines_skips_empty():
    assert fs.read_all_string_lines("a\r\n\nb\n\r\n") == ["a", "b"]
    assert fs.read_all_string_lines("") == []


def test_read_all_lines_text_and_binary(tmp_path):
    path = _touch(tmp_path / "lines.txt", b"one\n\ntwo\n")
    with open(path) as text_file:
        assert fs.read_all_lines(text_file) == ["one", "two"]
    with open(path, "rb") as binary_file:
        assert fs.read_all_lines(binary_file) == ["one", "two"]


def test_write_file_sets_content_and_perm(tmp_path):
    target = tmp_path / "w.bin"
    fs.write_file(str(target), b"payload", 0o600)
    assert target.read_bytes() == b"payload"
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o600
    fs.write_file(str(target), b"p", 0o600)
    assert target.read_bytes() == b"p"


def test_write_lines_and_overwrite(tmp_path):
    target = tmp_path / "log.txt"
    with open(target, "w+") as file:
        fs.write_lines_to_file(file, ["a\n", "b\n"])
        file.flush()
        assert target.read_text() == "a\nb\n"
        fs.overwrite_file(file)
        assert file.tell() == 0
        file.flush()
        assert target.read_text() == ""


def test_delete_base_directory(tmp_path):
    _touch(tmp_path / "d" / "e" / "f")
    fs.delete_base_directory(str(tmp_path / "d"))
    assert not (tmp_path / "d").exists()
    fs.delete_base_directory(str(tmp_path / "d"))
    assert not (tmp_path / "d").exists()


def test_delete_directory_with_skip(tmp_path):
    root = tmp_path / "root"
    _touch(root / "keep.cfg")
    _touch(root / "sub" / "drop.txt")
    fs.delete_directory(str(root), lambda path: path.endswith(".cfg"))
    assert (root / "keep.cfg").exists()
    assert not (root / "sub" / "drop.txt").exists()
    assert (root / "sub").is_dir()


def test_delete_directory_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.delete_directory(str(tmp_path / "missing"), lambda path: False)


def test_delete_empty_directories(tmp_path):
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    _touch(tmp_path / "full" / "f")
    errors = fs.delete_empty_directories(str(tmp_path))
    assert errors == []
    assert not (tmp_path / "a").exists()
    assert (tmp_path / "full" / "f").exists()
    assert tmp_path.exists()


def test_delete_empty_directories_reports_missing(tmp_path):
    errors = fs.delete_empty_directories(str(tmp_path / "missing"))
    assert len(errors) == 1
    assert isinstance(errors[0], FileNotFoundError)


def test_clear_read_only_attr(tmp_path):
    target = _touch(tmp_path / "ro.txt")
    os.chmod(target, 0o444)
    fs.clear_read_only_attr(str(tmp_path))
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644


def test_sort_file_names():
    paths = ["b/x", "a/z", "a/y"]
    result = fs.sort_file_names(paths)
    assert result == ["a/y", "a/z", "b/x"]
    assert result is paths


def test_get_files_and_directories(tmp_path):
    _touch(tmp_path / "b" / "2.txt")
    _touch(tmp_path / "a" / "1.txt")
    _touch(tmp_path / "0.txt")
    files = fs.get_files(str(tmp_path))
    assert sorted(files) == sorted(
        str(p) for p in (tmp_path / "0.txt", tmp_path / "a" / "1.txt", tmp_path / "b" / "2.txt")
    )
    assert files == fs.sort_file_names(list(files))
    dirs = fs.get_directories(str(tmp_path))
    assert set(dirs) == {str(tmp_path), str(tmp_path / "a"), str(tmp_path / "b")}


def test_get_files_missing_is_empty(tmp_path):
    assert fs.get_files(str(tmp_path / "missing")) == []
    assert fs.get_directories(str(tmp_path / "missing")) == []


def test_top_entries(tmp_path):
    (tmp_path / "d2").mkdir()
    (tmp_path / "d1").mkdir()
    _touch(tmp_path / "f1")
    _touch(tmp_path / "d1" / "inner")
    assert fs.get_top_directories(str(tmp_path)) == ["d1", "d2"]
    assert fs.get_top_files(str(tmp_path)) == ["f1"]
    with pytest.raises(FileNotFoundError):
        fs.get_top_files(str(tmp_path / "missing"))


def test_is_empty(tmp_path):
    (tmp_path / "empty").mkdir()
    _touch(tmp_path / "full" / "f")
    assert fs.is_empty(str(tmp_path / "empty")) is True
    assert fs.is_empty(str(tmp_path / "full")) is False
    with pytest.raises(FileNotFoundError):
        fs.is_empty(str(tmp_path / "missing"))


def test_bytes_to_map():
    assert fs.bytes_to_map(b'{"name": "mod", "list": [1, 2]}') == {"name": "mod", "list": [1, 2]}
    assert fs.bytes_to_map(b"null") == {}
    with pytest.raises(ValueError):
        fs.bytes_to_map(b"[1, 2]")
    with pytest.raises(ValueError):
        fs.bytes_to_map(b"{not json")


def test_filename_to_map_and_bytes(tmp_path):
    _touch(tmp_path / "conf.json", b'{"key": true}')
    prefix = str(tmp_path) + os.sep
    assert fs.filename_to_map(prefix, "conf.json") == {"key": True}
    assert fs.filename_to_bytes(prefix, "conf.json") == b'{"key": true}'


def test_filename_to_bytes_invalid(tmp_path):
    _touch(tmp_path / "bad.json", b"{oops")
    with pytest.raises(ValueError, match="invalid JSON format"):
        fs.filename_to_bytes(str(tmp_path) + os.sep, "bad.json")


@pytest.mark.parametrize(
    "hostname, valid",
    [
        ("my-host", True),
        ("", False),
        ("a" * 16, False),
        ("bad_host", False),
        ("host\n", False),
        ("com1", False),
        ("NUL", False),
        ("COM0", True),
    ],
)
def test_is_valid_hostname(hostname, valid):
    assert fs.is_valid_hostname(hostname) is valid