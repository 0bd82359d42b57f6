"""Binary and text file streams with explicit open modes and BOM handling."""

from __future__ import annotations

import enum
import io
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Union

from rutkit.strutil import to_mbcs, to_wcs

PathLike = Union[str, bytes, os.PathLike]

_UTF8_BOM = b"\xef\xbb\xbf"
_UTF16_BOM = b"\xff\xfe"
_UTF8_CODE_PAGE = 65001
_SYSTEM_CODE_PAGE = 0


class OpenMode(enum.IntFlag):
    """How a stream is opened: data direction plus creation disposition."""

    DATA_IN = 0x01
    DATA_OUT = 0x02
    CREATE_ALWAYS = 0x04
    CREATE_NEW = 0x08
    OPEN_ALWAYS = 0x10
    OPEN_EXISTING = 0x20
    READ = DATA_IN | OPEN_EXISTING
    WRITE = DATA_OUT | CREATE_ALWAYS


class Whence(enum.IntEnum):
    """Reference point for seeking."""

    BEGIN = 0
    CURRENT = 1
    END = 2


class TextFormat(enum.IntEnum):
    """Encoding of a text stream."""

    ANSI = 0
    UTF8 = 1
    UTF16 = 2


def _open_flags(mode: OpenMode) -> tuple[int, str]:
    reading = bool(mode & OpenMode.DATA_IN)
    writing = bool(mode & OpenMode.DATA_OUT)
    if reading and writing:
        flags, file_mode = os.O_RDWR, "r+"
    elif writing:
        flags, file_mode = os.O_WRONLY, "w"
    elif reading:
        flags, file_mode = os.O_RDONLY, "r"
    else:
        raise ValueError("open mode needs DATA_IN or DATA_OUT")

    if mode & OpenMode.CREATE_ALWAYS:
        flags |= os.O_CREAT | os.O_TRUNC
    elif mode & OpenMode.CREATE_NEW:
        flags |= os.O_CREAT | os.O_EXCL
    elif mode & OpenMode.OPEN_ALWAYS:
        flags |= os.O_CREAT
    elif not mode & OpenMode.OPEN_EXISTING:
        raise ValueError("open mode needs a creation disposition")

    return flags | getattr(os, "O_BINARY", 0), file_mode


class BinaryStream:
    """A file opened for raw byte access."""

    def __init__(self, path: PathLike, mode: OpenMode = OpenMode.READ) -> None:
        self.path = os.fspath(path)
        self.mode = OpenMode(mode)
        flags, file_mode = _open_flags(self.mode)
        fd = os.open(self.path, flags, 0o666)
        try:
            self._file: io.FileIO | None = io.FileIO(fd, file_mode, closefd=True)
        except Exception:
            os.close(fd)
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def _handle(self) -> io.FileIO:
        if self._file is None:
            raise ValueError("I/O operation on closed stream")
        return self._file

    @property
    def closed(self) -> bool:
        return self._file is None

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def flush(self) -> None:
        """Push written data to the operating system."""
        handle = self._handle
        handle.flush()
        if handle.writable():
            os.fsync(handle.fileno())

    def is_end(self) -> bool:
        """Return whether the position is at or past the end of the file."""
        return self.tell() >= self.size()

    def tell(self) -> int:
        """Return the current position."""
        return self._handle.tell()

    def size(self) -> int:
        """Return the size of the file in bytes."""
        return os.fstat(self._handle.fileno()).st_size

    def seek(self, offset: int, whence: Whence = Whence.BEGIN) -> int:
        """Move the position and return the new one."""
        return self._handle.seek(offset, int(whence))

    def read(self, size: int | None = None) -> bytes:
        """Read up to size bytes; with no size, read to the end."""
        if size is None:
            size = max(self.size() - self.tell(), 0)
        data = self._handle.read(size)
        return data or b""

    def write(self, data) -> int:
        """Write all of data and return the number of bytes written."""
        view = memoryview(data).cast("B")
        handle = self._handle
        written = 0
        while written < len(view):
            count = handle.write(view[written:])
            if not count:
                break
            written += count
        return written


class TextStream(BinaryStream):
    """A file of text in ANSI, UTF-8 or UTF-16LE, with byte order mark handling."""

    def __init__(
        self,
        path: PathLike,
        mode: OpenMode = OpenMode.READ,
        text_format: TextFormat = TextFormat.ANSI,
    ) -> None:
        super().__init__(path, mode)
        self.text_format = TextFormat(text_format)
        try:
            self.ensure_bom(self.mode)
        except Exception:
            self.close()
            raise

    def write_bom(self) -> None:
        """Write the byte order mark of the stream's format, if it has one."""
        if self.text_format is TextFormat.UTF8:
            self.write(_UTF8_BOM)
        elif self.text_format is TextFormat.UTF16:
            self.write(_UTF16_BOM)

    def check_bom(self) -> None:
        """Position the stream just past a byte order mark, or at the start."""
        head = self.read(4)
        bom_size = 0
        if self.text_format is TextFormat.UTF8 and head.startswith(_UTF8_BOM):
            bom_size = len(_UTF8_BOM)
        elif self.text_format is TextFormat.UTF16 and head.startswith(_UTF16_BOM):
            bom_size = len(_UTF16_BOM)
        self.seek(bom_size, Whence.BEGIN)

    def ensure_bom(self, mode: OpenMode) -> None:
        """Skip the mark of a non-empty input file or write one into an empty output file."""
        mode = OpenMode(mode)
        if self.size():
            if mode & OpenMode.DATA_IN:
                self.check_bom()
        elif mode & OpenMode.DATA_OUT:
            self.write_bom()

    def _encode(self, text: str | bytes) -> bytes:
        if isinstance(text, str):
            if self.text_format is TextFormat.UTF16:
                return text.encode("utf-16-le", errors="surrogatepass")
            if self.text_format is TextFormat.UTF8:
                return to_mbcs(text, _UTF8_CODE_PAGE)
            return to_mbcs(text, _SYSTEM_CODE_PAGE)

        data = bytes(text)
        if self.text_format is TextFormat.ANSI:
            return data
        wide = to_wcs(data, _SYSTEM_CODE_PAGE)
        if self.text_format is TextFormat.UTF8:
            return to_mbcs(wide, _UTF8_CODE_PAGE)
        return wide.encode("utf-16-le", errors="surrogatepass")

    def write_line(self, text: str | bytes) -> int:
        """Write text in the stream's encoding; bytes are taken as system code page text."""
        return self.write(self._encode(text))

    def write_all_lines(self, lines: Iterable[str | bytes]) -> None:
        """Write the lines separated by newlines, then flush."""
        lines = list(lines)
        if lines and all(isinstance(line, bytes) for line in lines):
            text: str | bytes = b"\n".join(lines)
        else:
            text = "\n".join(
                line if isinstance(line, str) else to_wcs(line, _SYSTEM_CODE_PAGE)
                for line in lines
            )
        self.write_line(text)
        self.flush()

    def read_raw_text(self) -> str:
        """Decode everything from the current position to the end of the file."""
        raw = self.read(max(self.size() - self.tell(), 0))
        if self.text_format is TextFormat.UTF16:
            raw = raw[: len(raw) // 2 * 2]
            return raw.decode("utf-16-le", errors="surrogatepass")
        if self.text_format is TextFormat.UTF8:
            return to_wcs(raw, _UTF8_CODE_PAGE)
        return to_wcs(raw, _SYSTEM_CODE_PAGE)

    def iter_lines(self) -> Iterator[str]:
        """Yield the remaining text line by line, without line endings."""
        text = self.read_raw_text()
        *complete, last = text.split("\n")
        for line in complete:
            yield line[:-1] if line.endswith("\r") else line
        if last:
            yield last

    def read_all_lines(self) -> list[str]:
        """Return the remaining text as a list of lines."""
        return list(self.iter_lines())

    def rewind(self) -> None:
        """Move back to the very start of the file."""
        self.seek(0, Whence.BEGIN)


def save_file_via_path(path: PathLike, data) -> None:
    """Write data to path, creating the parent directories first."""
    target = Path(os.fsdecode(path))
    if target.parent != Path(""):
        target.parent.mkdir(parents=True, exist_ok=True)
    with BinaryStream(target, OpenMode.WRITE) as stream:
        stream.write(data)