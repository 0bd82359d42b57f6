"""Option/value command line parsing and console output helpers."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence

from rutkit.path import get_file_name
from rutkit.strutil import to_wcs

PUT_BUFFER_MAX = 1024

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class ArgValue:
    """The value given for an option, with its help text."""

    def __init__(self, value: str = "", help: str = "") -> None:
        self.value = value
        self.help = help

    def to_bool(self) -> bool:
        """Return True for 'true' and False for 'false'; anything else is an error."""
        if self.value == "true":
            return True
        if self.value == "false":
            return False
        raise ValueError(f"not a boolean value: {self.value!r}")

    def to_num(self) -> int:
        """Return the leading integer of the value, 0 when there is none."""
        match = _LEADING_INT_RE.match(self.value)
        if match is None:
            return 0
        number = int(match.group(1))
        return max(_INT32_MIN, min(_INT32_MAX, number))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ArgValue({self.value!r}, {self.help!r})"

    def __int__(self) -> int:
        return self.to_num()

    def __fspath__(self) -> str:
        return self.value

    def __eq__(self, other) -> bool:
        if isinstance(other, ArgValue):
            return self.value == other.value
        if isinstance(other, str):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


class ArgParser:
    """Parses 'program option value option value ...' command lines."""

    def __init__(self) -> None:
        self.program_name = ""
        self.examples: list[str] = []
        self.commands: dict[str, ArgValue] = {}

    def load(self, argv: Sequence[str] | None = None) -> bool:
        """Fill option values from argv; print help and return False when none are given."""
        args = list(sys.argv if argv is None else argv)
        if not args:
            raise ValueError("argument list is empty")

        self.program_name = get_file_name(os.fspath(args[0]))

        if len(args) == 1:
            self.show_help()
            return False

        if len(args) % 2 == 0:
            raise ValueError("every option needs exactly one value")

        rest = iter(args[1:])
        for option, value in zip(rest, rest):
            command = self.commands.get(option)
            if command is None:
                raise ValueError(f"unknown option {option!r}")
            command.value = value
        return True

    def help_text(self) -> str:
        """Return the list of options and examples."""
        lines = ["Command:\n"]
        lines.extend(f"\t{option}\t{cmd.help}\n" for option, cmd in self.commands.items())
        lines.append("Example:\n")
        lines.extend(f"\t{self.program_name} {example}\n" for example in self.examples)
        return "".join(lines)

    def show_help(self) -> None:
        """Print the help text."""
        put(self.help_text())

    def add_cmd(self, option: str, help: str) -> None:
        """Register an option with its help text."""
        self.commands.setdefault(option, ArgValue()).help = help

    def add_example(self, example: str) -> None:
        """Add an example argument line shown in the help."""
        self.examples.append(example)

    def ready(self) -> bool:
        """Return whether any option has been registered."""
        return bool(self.commands)

    def __getitem__(self, option: str) -> ArgValue:
        try:
            return self.commands[option]
        except KeyError:
            raise KeyError(f"unknown option {option!r}") from None


def put(text: str | bytes) -> None:
    """Write text to standard output; bytes are taken as system code page text."""
    if isinstance(text, (bytes, bytearray)):
        text = to_wcs(bytes(text), 0)
    sys.stdout.write(text)
    sys.stdout.flush()


def put_mbcs(data: bytes, code_page: int) -> None:
    """Decode bytes in the given code page and write them to standard output."""
    put(to_wcs(data, code_page))


def put_format(fmt: str, *args) -> None:
    """Write printf-style formatted text to standard output."""
    text = fmt % args
    if len(text) >= PUT_BUFFER_MAX:
        raise ValueError(f"formatted text exceeds {PUT_BUFFER_MAX - 1} characters")
    if text:
        put(text)