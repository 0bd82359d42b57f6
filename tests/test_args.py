import os

import pytest

from rutkit.args import ArgParser, ArgValue, put, put_format, put_mbcs


def _parser():
    parser = ArgParser()
    parser.add_cmd("-mode", "work mode")
    parser.add_cmd("-path", "input path")
    parser.add_example("-mode run -path data")
    return parser


def test_load_sets_values():
    parser = _parser()
    assert parser.load(["tool", "-mode", "run", "-path", "data/in.bin"]) is True
    assert parser["-mode"] == "run"
    assert parser["-path"] == "data/in.bin"
    assert parser.program_name == "tool"


def test_program_name_is_file_name():
    parser = _parser()
    parser.load(["C:\\bin\\tool.exe", "-mode", "x"])
    assert parser.program_name == "tool.exe"


def test_load_without_options_prints_help(capsys):
    parser = _parser()
    assert parser.load(["/usr/bin/tool"]) is False
    out = capsys.readouterr().out
    assert out == parser.help_text()
    assert "\ttool -mode run -path data\n" in out


def test_help_text_layout():
    parser = _parser()
    parser.load(["tool", "-mode", "a"])
    assert parser.help_text() == (
        "Command:\n"
        "\t-mode\twork mode\n"
        "\t-path\tinput path\n"
        "Example:\n"
        "\ttool -mode run -path data\n"
    )


def test_load_errors():
    parser = _parser()
    with pytest.raises(ValueError):
        parser.load([])
    with pytest.raises(ValueError):
        parser.load(["tool", "-mode"])
    with pytest.raises(ValueError):
        parser.load(["tool", "-unknown", "v"])


def test_getitem_unknown_raises():
    with pytest.raises(KeyError):
        _parser()["-nothing"]


def test_ready():
    parser = ArgParser()
    assert parser.ready() is False
    parser.add_cmd("-a", "help")
    assert parser.ready() is True


def test_add_cmd_updates_help_keeps_value():
    parser = ArgParser()
    parser.add_cmd("-a", "first")
    parser.load(["tool", "-a", "v"])
    parser.add_cmd("-a", "second")
    assert parser["-a"].help == "second"
    assert parser["-a"] == "v"


def test_value_to_bool():
    assert ArgValue("true").to_bool() is True
    assert ArgValue("false").to_bool() is False
    with pytest.raises(ValueError):
        ArgValue("True").to_bool()


def test_value_to_num():
    assert ArgValue("42").to_num() == 42
    assert int(ArgValue("  17xyz")) == 17
    assert ArgValue("abc").to_num() == 0
    assert ArgValue("-5").to_num() == -5


def test_value_as_path_and_str():
    value = ArgValue("dir/file.txt", "a file")
    assert os.fspath(value) == "dir/file.txt"
    assert str(value) == "dir/file.txt"
    assert value == ArgValue("dir/file.txt")
    assert value.help == "a file"


def test_put_writes_text_and_bytes(capsys):
    put("hello")
    put(b"ascii")
    assert capsys.readouterr().out == "helloascii"


def test_put_mbcs_decodes(capsys):
    put_mbcs("café".encode("utf-8"), 65001)
    assert capsys.readouterr().out == "café"


def test_put_format(capsys):
    put_format("%s-%d", "a", 3)
    assert capsys.readouterr().out == "a-3"


def test_put_format_too_long():
    with pytest.raises(ValueError):
        put_format("%s", "x" * 2000)