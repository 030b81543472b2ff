import io
import os

import pytest

from dynmenu.stest import StestOptions, filter_paths, main, parse_args, test_path as check_path


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "file.txt").write_text("data")
    (tmp_path / "empty").write_text("")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "sub").mkdir()
    return tmp_path


def test_parse_combined_flags():
    options, operands = parse_args(["-fx", "a", "b"])
    assert options.flags == frozenset("fx")
    assert operands == ["a", "b"]


def test_parse_double_dash_ends_options():
    options, operands = parse_args(["-d", "--", "-f"])
    assert options.flags == frozenset("d")
    assert operands == ["-f"]


def test_parse_single_dash_is_operand():
    options, operands = parse_args(["-"])
    assert options.flags == frozenset()
    assert operands == ["-"]


def test_parse_unknown_flag():
    with pytest.raises(ValueError, match="usage"):
        parse_args(["-z"])


def test_parse_missing_argument():
    with pytest.raises(ValueError, match="usage"):
        parse_args(["-n"])


def test_parse_newer_attached_and_separate(tree):
    ref = tree / "file.txt"
    os.utime(ref, (1000, 1000))
    attached, _ = parse_args([f"-n{ref}"])
    separate, rest = parse_args(["-o", str(ref), "x"])
    assert attached.newer_than == 1000
    assert separate.older_than == 1000
    assert rest == ["x"]


def test_parse_newer_missing_file_disables(tree, capsys):
    options, _ = parse_args(["-n", str(tree / "nope")])
    assert options.newer_than is None
    assert "nope" in capsys.readouterr().err


def test_type_flags(tree):
    files = StestOptions(frozenset("f"))
    dirs = StestOptions(frozenset("d"))
    assert check_path(str(tree / "file.txt"), "file.txt", files)
    assert not check_path(str(tree / "sub"), "sub", files)
    assert check_path(str(tree / "sub"), "sub", dirs)


def test_hidden_needs_a(tree):
    path = str(tree / ".hidden")
    assert not check_path(path, ".hidden", StestOptions())
    assert check_path(path, ".hidden", StestOptions(frozenset("a")))


def test_missing_path_and_invert(tree):
    path = str(tree / "missing")
    assert not check_path(path, path, StestOptions())
    assert check_path(path, path, StestOptions(frozenset("v")))


def test_nonempty_flag(tree):
    options = StestOptions(frozenset("s"))
    assert list(filter_paths([str(tree / "file.txt"), str(tree / "empty")], options)) == [
        str(tree / "file.txt")
    ]


def test_executable_flag(tree):
    script = tree / "run"
    script.write_text("x")
    script.chmod(0o755)
    (tree / "file.txt").chmod(0o644)
    options = StestOptions(frozenset("fx"))
    result = list(filter_paths([str(script), str(tree / "file.txt")], options))
    assert result == [str(script)]


def test_symlink_flag(tree):
    link = tree / "link"
    link.symlink_to(tree / "file.txt")
    options = StestOptions(frozenset("h"))
    assert check_path(str(link), "link", options)
    assert not check_path(str(tree / "file.txt"), "file.txt", options)


def test_newer_and_older(tree):
    old = tree / "file.txt"
    new = tree / "empty"
    os.utime(old, (1000, 1000))
    os.utime(new, (2000, 2000))
    newer = StestOptions(newer_than=1000)
    older = StestOptions(older_than=2000)
    assert list(filter_paths([str(old), str(new)], newer)) == [str(new)]
    assert list(filter_paths([str(old), str(new)], older)) == [str(old)]


def test_list_directory_contents(tree):
    result = sorted(filter_paths([str(tree)], StestOptions(frozenset("l"))))
    assert result == sorted(["empty", "file.txt", "sub"])


def test_list_directory_contents_all(tree):
    result = set(filter_paths([str(tree)], StestOptions(frozenset("la"))))
    assert {".", "..", ".hidden"} <= result


def test_main_prints_matches(tree, capsys):
    status = main(["-f", str(tree / "file.txt"), str(tree / "sub")])
    assert status == 0
    assert capsys.readouterr().out == f"{tree / 'file.txt'}\n"


def test_main_no_match(tree, capsys):
    assert main(["-d", str(tree / "file.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_main_quiet(tree, capsys):
    assert main(["-q", str(tree / "file.txt")]) == 0
    assert capsys.readouterr().out == ""


def test_main_usage_error(capsys):
    assert main(["-z"]) == 2
    assert "usage" in capsys.readouterr().err


def test_main_reads_stdin(tree, capsys, monkeypatch):
    lines = f"{tree / 'sub'}\n{tree / 'file.txt'}\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(lines))
    assert main(["-d"]) == 0
    assert capsys.readouterr().out == f"{tree / 'sub'}\n"