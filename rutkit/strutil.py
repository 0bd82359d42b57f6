"""String conversion between code pages, trimming and line breaking."""

from __future__ import annotations

import codecs
import locale
from collections.abc import Iterable

DEFAULT_TRIM_CHARS = " \r\n\t"

_CODE_PAGE_NAMES = {
    1200: "utf-16-le",
    1201: "utf-16-be",
    20127: "ascii",
    28591: "latin-1",
    65000: "utf-7",
    65001: "utf-8",
}


def _codec_name(code_page: int) -> str:
    """Return the Python codec name for a Windows-style code page number."""
    if code_page == 0:
        return locale.getpreferredencoding(False)
    name = _CODE_PAGE_NAMES.get(code_page, f"cp{code_page}")
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise ValueError(f"unknown code page {code_page}") from exc
    return name


def to_wcs(data: bytes, code_page: int) -> str:
    """Decode multi-byte text in the given code page; 0 means the system code page."""
    if not data:
        return ""
    try:
        return bytes(data).decode(_codec_name(code_page))
    except UnicodeDecodeError as exc:
        raise ValueError(f"cannot decode text with code page {code_page}") from exc


def to_mbcs(text: str, code_page: int) -> bytes:
    """Encode text into the given code page; 0 means the system code page."""
    if not text:
        return b""
    try:
        return text.encode(_codec_name(code_page))
    except UnicodeEncodeError as exc:
        raise ValueError(f"cannot encode text with code page {code_page}") from exc


def trim(line: str, filter_chars: str = DEFAULT_TRIM_CHARS) -> str:
    """Strip the filter characters from both ends of a line."""
    return line.strip(filter_chars)


class FormatLine:
    """Inserts a marker after a break character so a long line can wrap."""

    def __init__(self, insert: str, break_chars: Iterable[str]) -> None:
        self.insert = insert
        self.break_chars = list(break_chars)

    def break_line(self, line: str, max_line: int) -> str | None:
        """Return the line with the marker inserted, or None if no break was made."""
        length = len(line)
        if length <= max_line:
            return None

        for mark in self.break_chars:
            pos = length - 3
            while True:
                end = length if pos < 0 else pos + len(mark)
                found = line.rfind(mark, 0, end)
                if found <= 0:
                    break
                before = found - 1
                if before < max_line and (length - before) < max_line:
                    cut = found + 1
                    return line[:cut] + self.insert + line[cut:]
                pos = before
        return None