import pytest

from rutkit.strutil import FormatLine, to_mbcs, to_wcs, trim


def test_to_wcs_empty():
    assert to_wcs(b"", 65001) == ""


def test_to_wcs_utf8():
    assert to_wcs("中文".encode("utf-8"), 65001) == "中文"


def test_to_wcs_gbk():
    assert to_wcs("中文".encode("gbk"), 936) == "中文"


def test_to_wcs_invalid_bytes_raise():
    with pytest.raises(ValueError):
        to_wcs(b"\xff\xfe\xfd", 65001)


def test_to_mbcs_ascii_utf8():
    assert to_mbcs("A", 65001) == b"A"


def test_to_mbcs_empty():
    assert to_mbcs("", 936) == b""


@pytest.mark.parametrize("code_page", [65001, 936, 932])
def test_round_trip(code_page):
    text = "日本語"
    assert to_wcs(to_mbcs(text, code_page), code_page) == text


def test_to_mbcs_unrepresentable_raises():
    with pytest.raises(ValueError):
        to_mbcs("中", 1252)


def test_unknown_code_page_raises():
    with pytest.raises(ValueError):
        to_wcs(b"abc", 987654)


def test_trim_default():
    assert trim("  a b \r\n\t") == "a b"


def test_trim_all_filtered():
    assert trim(" \t\r\n ") == ""


def test_trim_custom_filter():
    assert trim("xxvaluex", "x") == "value"


def test_break_line_short_line_untouched():
    formatter = FormatLine("[n]", ["。"])
    assert formatter.break_line("あいう。", 8) is None


def test_break_line_inserts_after_mark():
    formatter = FormatLine("[n]", ["。"])
    line = "あああああ。あああああ"
    assert formatter.break_line(line, 8) == "あああああ。[n]あああああ"


def test_break_line_invariants():
    formatter = FormatLine("<br>", ["，", "。"])
    line = "一二三四五六七，八九十一二三四五六"
    result = formatter.break_line(line, 12)
    assert result is not None
    assert result.replace("<br>", "", 1) == line
    idx = result.index("<br>")
    assert result[idx - 1] in ("，", "。")


def test_break_line_without_mark():
    formatter = FormatLine("[n]", ["。"])
    assert formatter.break_line("abcdefghijklmnop", 5) is None


def test_break_line_mark_only_at_start():
    formatter = FormatLine("[n]", ["。"])
    assert formatter.break_line("。abcdefghij", 5) is None