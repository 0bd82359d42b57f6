"""A small INI reader and writer keyed by section and name."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Union

from rutkit.fileio import OpenMode, TextFormat, TextStream
from rutkit.strutil import trim

PathLike = Union[str, bytes, os.PathLike]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_AUTO_BASE_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_FLOAT_RE = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_COMMENT_CHARS = "#;/"


def _check_int32(number: int, text: str) -> int:
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return number


def _parse_auto_base(text: str) -> int:
    match = _AUTO_BASE_RE.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    sign, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        number = int(digits[2:], 16)
    elif len(digits) > 1 and digits[0] == "0":
        number = int(digits[1:], 8)
    else:
        number = int(digits, 10)
    return _check_int32(-number if sign == "-" else number, text)


def _parse_hex(text: str) -> int:
    match = _HEX_RE.match(text)
    if match is None:
        raise ValueError(f"not a hexadecimal integer: {text!r}")
    sign, digits = match.groups()
    number = int(digits, 16)
    return _check_int32(-number if sign == "-" else number, text)


def _parse_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(0).strip())


class IniValue:
    """A value stored as text, convertible to numbers and booleans on demand."""

    def __init__(self, value=None) -> None:
        if value is None:
            self.text = ""
        elif isinstance(value, IniValue):
            self.text = value.text
        elif isinstance(value, bool):
            self.text = "true" if value else "false"
        elif isinstance(value, int):
            self.text = str(value)
        elif isinstance(value, float):
            self.text = f"{value:f}"
        elif isinstance(value, str):
            self.text = value
        else:
            raise TypeError(f"unsupported INI value type: {type(value).__name__}")

    def to_int(self) -> int:
        """Parse as an integer, with a 0x prefix for hex and a leading 0 for octal."""
        return _parse_auto_base(self.text)

    def to_hex(self) -> int:
        """Parse as a hexadecimal integer; a 0x prefix is optional."""
        return _parse_hex(self.text)

    def to_float(self) -> float:
        """Parse the leading number of the text as a float."""
        return _parse_float(self.text)

    def to_bool(self) -> bool:
        """Return whether the text is 'true', ignoring case."""
        return self.text.lower() == "true"

    def is_empty(self) -> bool:
        """Return whether the text is empty."""
        return not self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"IniValue({self.text!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, IniValue):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


class IniParser:
    """Sections of name/value pairs, read from and written to UTF-8 INI files."""

    def __init__(self, path: PathLike | None = None) -> None:
        self.nodes: dict[str, dict[str, IniValue]] = {}
        if path is not None:
            self.parse(path)

    def parse(self, path: PathLike) -> None:
        """Read a UTF-8 INI file and merge its contents."""
        with TextStream(path, OpenMode.READ, TextFormat.UTF8) as stream:
            lines = stream.read_all_lines()
        self.parse_lines(lines)

    def parse_lines(self, lines: Iterable[str]) -> None:
        """Merge INI lines; keys before any section go to the section ''."""
        node_name = ""
        for line in lines:
            if not line:
                continue
            first = line[0]
            if first in _COMMENT_CHARS:
                continue
            if first == "[":
                end = line.find("]")
                if end < 0:
                    raise ValueError(f"section without closing bracket: {line!r}")
                node_name = trim(line[1:end])
                continue
            pos = line.find("=")
            if pos <= 0:
                raise ValueError(f"line without a key: {line!r}")
            keys = self.nodes.setdefault(node_name, {})
            keys[trim(line[:pos])] = IniValue(trim(line[pos + 1:]))

    def dump(self) -> str:
        """Return the contents as INI text."""
        parts = []
        for node, keys in self.nodes.items():
            parts.append(f"[{node}]\n")
            parts.extend(f"{name}={value}\n" for name, value in keys.items())
            parts.append("\n")
        return "".join(parts)

    def save(self, path: PathLike) -> None:
        """Write the contents to a UTF-8 file with a byte order mark."""
        with TextStream(path, OpenMode.WRITE, TextFormat.UTF8) as stream:
            stream.write_line(self.dump())

    def get(self, node: str, name: str | None = None):
        """Return a section's keys, or one value when a name is given."""
        try:
            keys = self.nodes[node]
        except KeyError:
            raise KeyError(f"no section {node!r}") from None
        if name is None:
            return keys
        try:
            return keys[name]
        except KeyError:
            raise KeyError(f"no key {name!r} in section {node!r}") from None

    def __getitem__(self, node: str) -> dict[str, IniValue]:
        return self.get(node)

    def __contains__(self, node) -> bool:
        return node in self.nodes

    def add(self, node: str, name: str, value) -> None:
        """Set a value, creating the section if needed."""
        self.nodes.setdefault(node, {})[name] = IniValue(value)

    def has(self, node: str, name: str | None = None) -> bool:
        """Return whether the section, or the key within it, exists."""
        keys = self.nodes.get(node)
        if keys is None:
            return False
        return name is None or name in keys