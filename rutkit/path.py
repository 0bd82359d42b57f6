"""Path string helpers that treat both '/' and '\\' as separators.

Functions accept ``str`` or ``bytes``. For ``bytes`` a separator or dot that
follows a byte above 0x7F is taken as the trail byte of a double-byte
character and is not treated as a separator.
"""

from __future__ import annotations

import os
import sys
from typing import AnyStr

PLATFORM_MAX_PATH = 260


def _units(path):
    if isinstance(path, bytes):
        return b"/", b"\\", b"."
    return "/", "\\", "."


def _after_lead_byte(path, index: int) -> bool:
    return isinstance(path, bytes) and index > 0 and path[index - 1] > 0x7F


def _rscan(path, stops):
    """Find the last unit in stops scanning backwards; return (index, unit)."""
    for index in range(len(path) - 1, -1, -1):
        unit = path[index:index + 1]
        if unit in stops and not _after_lead_byte(path, index):
            return index, unit
    return -1, None


def get_file_name(path: AnyStr) -> AnyStr:
    """Return the part after the last separator, or the whole path."""
    path = os.fspath(path)
    slash, backslash, _ = _units(path)
    index, _unit = _rscan(path, (slash, backslash))
    return path if index < 0 else path[index + 1:]


def remove_file_name(path: AnyStr) -> AnyStr:
    """Return the path up to and including the last separator."""
    path = os.fspath(path)
    slash, backslash, _ = _units(path)
    index, _unit = _rscan(path, (slash, backslash))
    return path if index < 0 else path[:index + 1]


def get_suffix(path: AnyStr) -> AnyStr:
    """Return the extension with its dot, or an empty string if the name has none."""
    path = os.fspath(path)
    slash, backslash, dot = _units(path)
    index, unit = _rscan(path, (dot, slash, backslash))
    if unit == dot:
        return path[index:]
    return path[:0]


def remove_suffix(path: AnyStr) -> AnyStr:
    """Return the path without the extension of its file name."""
    path = os.fspath(path)
    slash, backslash, dot = _units(path)
    index, unit = _rscan(path, (dot, slash, backslash))
    if unit == dot:
        return path[:index]
    return path


def format_path(path: AnyStr, slash) -> AnyStr:
    """Rewrite every separator to the given slash, '/' or '\\'."""
    path = os.fspath(path)
    if isinstance(slash, bytes):
        slash = slash.decode("ascii")

    if isinstance(path, bytes):
        if slash == "\\":
            out = bytearray(path)
            index = 0
            while index < len(out):
                if out[index] > 0x7F:
                    index += 2
                    continue
                if out[index] == 0x2F:
                    out[index] = 0x5C
                index += 1
            return bytes(out)
        if slash == "/":
            return path.replace(b"\\", b"/")
        return path

    if slash == "\\":
        return path.replace("/", "\\")
    if slash == "/":
        return path.replace("\\", "/")
    return path


def make_dir_via_path(path) -> bool:
    """Create every directory named before a separator in the path."""
    path = os.fspath(path)
    if len(path) > PLATFORM_MAX_PATH:
        raise ValueError(f"path longer than {PLATFORM_MAX_PATH} units")

    slash, backslash, dot = _units(path)
    colon = b":" if isinstance(path, bytes) else ":"
    sep = os.sep.encode() if isinstance(path, bytes) else os.sep

    built = path
    index = 0
    while index < len(built):
        unit = built[index:index + 1]
        if unit in (slash, backslash):
            if not _after_lead_byte(built, index):
                try:
                    os.mkdir(built[:index])
                except OSError:
                    pass
                built = built[:index] + sep + built[index + 1:]
        elif unit in (dot, colon):
            index += 1
        index += 1
    return True


def file_exists(path) -> bool:
    """Return whether anything exists at the path."""
    return os.path.exists(path)


def dir_exists(path) -> bool:
    """Return whether the path names an existing directory."""
    return os.path.isdir(path)


def module_dir() -> str:
    """Return the current working directory with a trailing separator."""
    return os.path.join(os.getcwd(), "")


def module_path() -> str:
    """Return the full path of the running executable."""
    return sys.executable


def module_name() -> str:
    """Return the file name of the running executable."""
    return get_file_name(module_path())