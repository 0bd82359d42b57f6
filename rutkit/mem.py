"""A growable byte buffer that can load from and save to files and streams."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from typing import Union

from rutkit.fileio import BinaryStream, OpenMode, save_file_via_path

PathLike = Union[str, bytes, os.PathLike]


class AutoMem:
    """A byte buffer whose storage only grows; shrinking keeps the allocation."""

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._buf = bytearray(size)
        self._size = size

    @classmethod
    def join(cls, parts: Iterable) -> AutoMem:
        """Return a buffer holding the parts one after another."""
        mem = cls()
        for part in parts:
            mem.append(part)
        return mem

    @classmethod
    def from_file(cls, path: PathLike, size: int | None = None) -> AutoMem:
        """Return a buffer filled from a file; with no size, the whole file."""
        mem = cls()
        mem.load_file(path, size)
        return mem

    def _view(self) -> memoryview:
        return memoryview(self._buf)[: self._size]

    def resize(self, new_size: int, keep: bool = False) -> None:
        """Set the size; growing past the allocation keeps the data only if keep is set."""
        if new_size < 0:
            raise ValueError("size must not be negative")
        if self._size == 0 or new_size > len(self._buf):
            fresh = bytearray(new_size)
            if keep and self._size:
                count = min(self._size, new_size)
                fresh[:count] = self._buf[:count]
            self._buf = fresh
        self._size = new_size

    def append(self, other) -> AutoMem:
        """Add the bytes of other at the end and return self."""
        data = bytes(other)
        if data:
            start = self._size
            self.resize(start + len(data), keep=True)
            self._buf[start : start + len(data)] = data
        return self

    def __add__(self, other) -> AutoMem:
        return AutoMem.join((self, other))

    def __iadd__(self, other) -> AutoMem:
        return self.append(other)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return bytes(self._view()[index])
        if not -self._size <= index < self._size:
            raise IndexError("AutoMem index out of range")
        return self._buf[index % self._size]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self._view()))

    def __bytes__(self) -> bytes:
        return bytes(self._view())

    def __eq__(self, other) -> bool:
        if isinstance(other, AutoMem):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AutoMem({bytes(self)!r})"

    def save_data(self, path: PathLike) -> None:
        """Write the buffer to a file, creating parent directories."""
        save_file_via_path(path, self._view())

    def load_file(self, path: PathLike, size: int | None = None) -> None:
        """Replace the contents with size bytes of a file; with no size, the whole file."""
        with BinaryStream(path, OpenMode.READ) as stream:
            if size is None:
                size = stream.size()
            self.resize(size)
            data = stream.read(size)
        self._buf[: len(data)] = data

    def read_data(self, stream, size: int | None = None, pos: int | None = None) -> None:
        """Fill the buffer from a stream, optionally resizing and seeking first."""
        if size is not None:
            self.resize(size)
        if pos is not None:
            stream.seek(pos)
        data = stream.read(self._size)
        self._buf[: len(data)] = data

    def write_data(self, stream, pos: int | None = None) -> None:
        """Write the buffer to a stream, optionally seeking first."""
        if pos is not None:
            stream.seek(pos)
        stream.write(bytes(self._view()))