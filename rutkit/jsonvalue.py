"""A JSON value tree with a small recursive-descent parser and a dumper."""

from __future__ import annotations

import enum
import math
import os
import re
import string
from typing import Union

from rutkit.fileio import OpenMode, TextFormat, TextStream

PathLike = Union[str, bytes, os.PathLike]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_ESCAPES_OUT = {
    "\n": "\\n",
    "\r": "\\r",
    "\b": "\\b",
    "\t": "\\t",
    "\f": "\\f",
    '"': '\\"',
    "\\": "\\\\",
}

_ESCAPES_IN = {
    "\\": "\\",
    '"': '"',
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_WHITESPACE = ("\t", "\n", "\r", " ")
_TOKEN_CHARS = '{}[]":ntf0123456789-'

_NUMBER_RE = re.compile(
    r"""-?(?:
        0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?
        |(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?
        |inf(?:inity)?
        |nan
    )""",
    re.VERBOSE | re.IGNORECASE,
)


class JsonType(enum.Enum):
    """The kind of data a JsonValue holds."""

    NUL = 0
    BOL = 1
    INT = 2
    DBL = 3
    STR = 4
    ARY = 5
    OBJ = 6


def _escape(text: str) -> str:
    return "".join(_ESCAPES_OUT.get(ch, ch) for ch in text)


class JsonValue:
    """One JSON value: null, bool, int, float, string, array or object."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value=None) -> None:
        if value is None:
            self.type, self.value = JsonType.NUL, None
        elif isinstance(value, JsonValue):
            self.type = value.type
            if value.type is JsonType.ARY:
                self.value = [JsonValue(item) for item in value.value]
            elif value.type is JsonType.OBJ:
                self.value = {key: JsonValue(item) for key, item in value.value.items()}
            else:
                self.value = value.value
        elif isinstance(value, bool):
            self.type, self.value = JsonType.BOL, value
        elif isinstance(value, int):
            self.type, self.value = JsonType.INT, value
        elif isinstance(value, float):
            self.type, self.value = JsonType.DBL, value
        elif isinstance(value, str):
            self.type, self.value = JsonType.STR, value
        elif isinstance(value, (list, tuple)):
            self.type, self.value = JsonType.ARY, [JsonValue(item) for item in value]
        elif isinstance(value, dict):
            items = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError("JSON object keys must be strings")
                items[key] = JsonValue(item)
            self.type, self.value = JsonType.OBJ, items
        else:
            raise TypeError(f"unsupported JSON value type: {type(value).__name__}")

    def _expect(self, kind: JsonType):
        if self.type is not kind:
            raise TypeError(f"JSON value is {self.type.name}, not {kind.name}")
        return self.value

    def append(self, value) -> None:
        """Add an element to an array value."""
        items = self._expect(JsonType.ARY)
        items.append(value if isinstance(value, JsonValue) else JsonValue(value))

    def __getitem__(self, key):
        if isinstance(key, int) and not isinstance(key, bool):
            return self._expect(JsonType.ARY)[key]
        if not isinstance(key, str):
            raise TypeError("JSON object keys must be strings")
        return self.to_object().setdefault(key, JsonValue())

    def __setitem__(self, key, value) -> None:
        item = value if isinstance(value, JsonValue) else JsonValue(value)
        if isinstance(key, int) and not isinstance(key, bool):
            self._expect(JsonType.ARY)[key] = item
            return
        if not isinstance(key, str):
            raise TypeError("JSON object keys must be strings")
        self.to_object()[key] = item

    def __contains__(self, key) -> bool:
        return key in self._expect(JsonType.OBJ)

    def add_key(self, key: str, value=None) -> None:
        """Set a key of an object value; with no value the key holds null."""
        items = self._expect(JsonType.OBJ)
        items[str(key)] = value if isinstance(value, JsonValue) else JsonValue(value)

    def find_key(self, key: str) -> JsonValue | None:
        """Return the value under key in an object, or None when it is absent."""
        return self._expect(JsonType.OBJ).get(key)

    def to_array(self) -> list[JsonValue]:
        """Return the elements; a null value becomes an empty array first."""
        if self.type is JsonType.NUL:
            self.type, self.value = JsonType.ARY, []
        return self._expect(JsonType.ARY)

    def to_object(self) -> dict[str, JsonValue]:
        """Return the members; a null value becomes an empty object first."""
        if self.type is JsonType.NUL:
            self.type, self.value = JsonType.OBJ, {}
        return self._expect(JsonType.OBJ)

    def to_int(self) -> int:
        return self._expect(JsonType.INT)

    def to_bool(self) -> bool:
        return self._expect(JsonType.BOL)

    def to_float(self) -> float:
        return self._expect(JsonType.DBL)

    def to_str(self) -> str:
        return self._expect(JsonType.STR)

    def __eq__(self, other) -> bool:
        if isinstance(other, JsonValue):
            return self.type is other.type and self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f"JsonValue({self.dump(formatted=False)})"

    def dump(self, formatted: bool = True, ordered: bool = False) -> str:
        """Return JSON text; formatted output indents with tabs, ordered sorts keys."""
        parts: list[str] = []
        self._dump(parts, 0, formatted, ordered)
        return "".join(parts)

    def _dump(self, parts: list[str], depth: int, formatted: bool, ordered: bool) -> None:
        kind = self.type
        if kind is JsonType.NUL:
            parts.append("null")
        elif kind is JsonType.BOL:
            parts.append("true" if self.value else "false")
        elif kind is JsonType.INT:
            parts.append(str(self.value))
        elif kind is JsonType.DBL:
            parts.append(f"{self.value:f}")
        elif kind is JsonType.STR:
            parts.append(f'"{_escape(self.value)}"')
        elif kind is JsonType.ARY:
            self._dump_members(
                parts, depth, formatted, ordered, "[", "]",
                ((None, item) for item in self.value),
            )
        else:
            members = self.value.items()
            if ordered:
                members = sorted(members)
            self._dump_members(parts, depth, formatted, ordered, "{", "}", members)

    @staticmethod
    def _dump_members(parts, depth, formatted, ordered, opening, closing, members) -> None:
        parts.append(opening)
        inner = "\n" + "\t" * (depth + 1)
        wrote = False
        for key, item in members:
            if wrote:
                parts.append(",")
            if formatted:
                parts.append(inner)
            if key is not None:
                parts.append(f'"{key}":')
                if formatted:
                    parts.append(" ")
            item._dump(parts, depth + 1, formatted, ordered)
            wrote = True
        if wrote and formatted:
            parts.append("\n" + "\t" * depth)
        parts.append(closing)


class JsonParser:
    """Parses JSON text into JsonValue trees."""

    def __init__(self) -> None:
        self._text = ""
        self._pos = 0

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_white(self) -> str:
        while self._peek() in _WHITESPACE:
            self._pos += 1
        return self._peek()

    def _token(self) -> str:
        while True:
            ch = self._skip_white()
            if ch == ",":
                self._pos += 1
                continue
            if ch and ch in _TOKEN_CHARS:
                return ch
            raise ValueError(f"no token found at offset {self._pos}")

    def _parse_value(self) -> JsonValue:
        ch = self._peek()
        if ch == "{":
            return self._parse_object()
        if ch == "[":
            return self._parse_array()
        if ch == "t":
            return self._parse_literal("true", True)
        if ch == "f":
            return self._parse_literal("false", False)
        if ch == "n":
            return self._parse_literal("null", None)
        if ch == '"':
            return self._parse_string()
        if ch and ch in "-0123456789":
            return self._parse_number()
        raise ValueError(f"no JSON value at offset {self._pos}")

    def _parse_literal(self, word: str, value) -> JsonValue:
        if not self._text.startswith(word, self._pos):
            raise ValueError(f"expected {word!r} at offset {self._pos}")
        self._pos += len(word)
        return JsonValue(value)

    def _parse_array(self) -> JsonValue:
        self._pos += 1
        result = JsonValue([])
        while self._token() != "]":
            result.value.append(self._parse_value())
        self._pos += 1
        return result

    def _parse_object(self) -> JsonValue:
        self._pos += 1
        result = JsonValue({})
        key = ""
        while True:
            token = self._token()
            if token == '"':
                self._pos += 1
                end = self._text.find('"', self._pos)
                if end < 0:
                    raise ValueError("unterminated object key")
                key = self._text[self._pos:end]
                self._pos = end + 1
            elif token == ":":
                self._pos += 1
                self._skip_white()
                result.value[key] = self._parse_value()
            elif token == "}":
                self._pos += 1
                return result
            else:
                raise ValueError(f"unexpected {token!r} in object at offset {self._pos}")

    def _parse_number(self) -> JsonValue:
        match = _NUMBER_RE.match(self._text, self._pos)
        if match is None:
            raise ValueError(f"invalid number at offset {self._pos}")
        literal = match.group(0)
        self._pos = match.end()
        if "x" in literal.lower():
            number = float.fromhex(literal)
        else:
            number = float(literal)
        if math.isfinite(number):
            truncated = int(number)
            if _INT32_MIN <= truncated <= _INT32_MAX and truncated == number:
                return JsonValue(truncated)
        return JsonValue(number)

    def _parse_string(self) -> JsonValue:
        self._pos += 1
        chars: list[str] = []
        while True:
            ch = self._peek()
            if not ch:
                raise ValueError("unterminated string")
            if ch == '"':
                self._pos += 1
                break
            if ch == "\\":
                self._pos += 1
                ctrl = self._peek()
                if ctrl == "u":
                    digits = self._text[self._pos + 1:self._pos + 5]
                    if len(digits) != 4 or not all(d in string.hexdigits for d in digits):
                        raise ValueError(f"invalid unicode escape at offset {self._pos}")
                    chars.append(chr(int(digits, 16)))
                    self._pos += 5
                    continue
                if ctrl not in _ESCAPES_IN or not ctrl:
                    raise ValueError(f"unknown escape {ctrl!r} at offset {self._pos}")
                chars.append(_ESCAPES_IN[ctrl])
                self._pos += 1
                continue
            chars.append(ch)
            self._pos += 1
        text = "".join(chars)
        text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
        return JsonValue(text)

    def loads(self, text: str) -> JsonValue:
        """Parse JSON text; anything but whitespace after the value is an error."""
        self._text = text
        self._pos = 0
        self._skip_white()
        value = self._parse_value()
        self._skip_white()
        if self._pos < len(self._text):
            raise ValueError(f"unexpected data after JSON value at offset {self._pos}")
        return value

    def load(self, path: PathLike) -> JsonValue:
        """Parse a UTF-8 JSON file, with or without a byte order mark."""
        with TextStream(path, OpenMode.READ, TextFormat.UTF8) as stream:
            text = stream.read_raw_text()
        return self.loads(text)


def save_json(value, path: PathLike, formatted: bool = False, ordered: bool = False) -> None:
    """Write a value as a UTF-8 JSON file with a byte order mark."""
    if not isinstance(value, JsonValue):
        value = JsonValue(value)
    with TextStream(path, OpenMode.WRITE, TextFormat.UTF8) as stream:
        stream.write_line(value.dump(formatted, ordered))