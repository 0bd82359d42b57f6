# rutkit

A small toolbox of everyday helpers, using only the standard library.

## Modules

- `rutkit.strutil`
  - `to_wcs(data, code_page)` decodes bytes and `to_mbcs(text, code_page)`
    encodes text, by Windows-style code page number (`65001` is UTF-8,
    `0` is the system's preferred encoding). Errors raise `ValueError`.
  - `trim(line, filter_chars=" \r\n\t")` strips those characters from both ends.
  - `FormatLine(insert, break_chars).break_line(line, max_line)` returns the
    line with `insert` placed after a break character, or `None` when the line
    is short enough or no suitable break was found.
- `rutkit.path` – string-level path helpers that treat both `/` and `\` as
  separators: `get_file_name`, `remove_file_name`, `get_suffix`,
  `remove_suffix`, `format_path(path, slash)` and `make_dir_via_path`, plus
  `file_exists`, `dir_exists`, `module_dir` (the working directory with a
  trailing separator), `module_path` and `module_name` (the running
  interpreter). They accept `str` or `bytes`; for `bytes`, a separator or dot
  right after a byte above `0x7F` is taken as part of a double-byte character.
- `rutkit.bench` – `Record`, a stopwatch: `beg()`, `end()` (returns the
  milliseconds), `average()` and `log(stream=None)`.
- `rutkit.fileio` – `BinaryStream` and `TextStream`, opened with `OpenMode`
  flags (`OpenMode.READ`, `OpenMode.WRITE` and the individual flags), seeking
  with `Whence`. `TextStream` takes a `TextFormat` (`ANSI`, `UTF8`, `UTF16`):
  it writes a byte order mark into an empty output file and skips one when
  reading. Both are context managers. `save_file_via_path(path, data)` writes
  bytes, creating parent directories first.
- `rutkit.mem` – `AutoMem`, a growable byte buffer: `join`, `from_file`,
  `append`, `+`, indexing, `resize`, `save_data`, `load_file`, `read_data` and
  `write_data`.
- `rutkit.ini` – `IniParser` and `IniValue`. Lines starting with `#`, `;` or
  `/` are comments; keys before any section go to the section `""`. Files are
  read and saved as UTF-8; `save` writes a byte order mark. `IniValue` offers
  `to_int` (with `0x` and leading-`0` octal), `to_hex`, `to_float`, `to_bool`.
- `rutkit.args` – `ArgParser` and `ArgValue` for command lines of the shape
  `program option value option value ...`, and `put`, `put_mbcs`, `put_format`
  for writing to standard output.
- `rutkit.jsonvalue` – `JsonValue`, `JsonType`, `JsonParser` (`loads`, `load`)
  and `save_json`. Numbers that are whole and fit in 32 bits become `INT`,
  others `DBL`. `dump(formatted=True, ordered=False)` indents with tabs and can
  sort object keys.

## Examples

```python
from rutkit.path import get_file_name, get_suffix

get_file_name("data/archive/file.bin")  # "file.bin"
get_suffix("data/archive/file.bin")     # ".bin"
```

```python
from rutkit.jsonvalue import JsonParser, save_json

value = JsonParser().loads('{"name": "demo", "count": 3}')
value["count"].to_int()  # 3
save_json(value, "out.json", True, True)
```

```python
from rutkit.ini import IniParser

ini = IniParser("settings.ini")
if ini.has("Window", "Width"):
    width = ini.get("Window", "Width").to_int()
```

```python
from rutkit.args import ArgParser

parser = ArgParser()
parser.add_cmd("-in", "input file")
parser.add_cmd("-out", "output file")
parser.add_example("-in a.txt -out b.txt")
if parser.load(["tool", "-in", "a.txt", "-out", "b.txt"]):
    source = str(parser["-in"])
```

## What it does not do

rutkit is a library only: it installs no command of its own. `ArgParser` is
for building your own scripts. The console helpers write to standard output;
they do not open, title or configure a console window.

## Running the tests

```
pip install -e .[test]
pytest
```