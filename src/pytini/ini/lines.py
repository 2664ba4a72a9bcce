# -*- encoding: utf-8 -*-
# @File   : lines.py
# @Time   : 2024/10/12 22:31:07
# @Author : Kariko Lin

"""Line level INI reading.

Every line is classified on its own, knowing nothing about the lines
around it. Which section a pair belongs to is up to whoever folds the
events (see `Ini.from_buffer()`).

Supported lines (after stripping surrounding whitespace):

    ```ini
                        ; Blank
    ; whatever          ; Comment (also `#`)
    [ name ]            ; SectionLine('name')
    key = value         ; ItemLine('key', 'value')
    key = " value "     ; ItemLine('key', ' value ')  -- quotes kept out
    a\\=b = c           ; ItemLine('a=b', 'c')  -- escaped delimiter
    a\\\\b = c           ; ItemLine('a\\b', 'c')  -- escaped backslash
    ```

Anything else ends up as an `ErrorLine`, which is only a record:
this module never raises for bad input.
"""

from collections.abc import Iterable, Iterator
from typing import NamedTuple

from .consts import DEFAULT_DIALECT, IniDialect

INVALID_SECTION = 'invalid section header'
MISSING_SEPARATOR = 'missing separator'
EMPTY_KEY = 'empty key'

ESCAPE = '\\'
BOM = '\ufeff'


class IniError(Exception):
    """Base of errors raised by this package."""
    pass


class IniParseError(IniError, ValueError):
    """A malformed line. `lineno` counts from 0."""
    def __init__(self, lineno: int, message: str) -> None:
        super().__init__(f'line {lineno}: {message}')
        self.lineno = lineno
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniParseError):
            return NotImplemented
        return (self.lineno, self.message) == (other.lineno, other.message)

    def __hash__(self) -> int:
        return hash((self.lineno, self.message))

    def __repr__(self) -> str:
        return f'IniParseError({self.lineno}, {self.message!r})'


class Blank(NamedTuple):
    lineno: int


class Comment(NamedTuple):
    lineno: int
    text: str


class SectionLine(NamedTuple):
    lineno: int
    name: str


class ItemLine(NamedTuple):
    lineno: int
    key: str
    value: str


class ErrorLine(NamedTuple):
    lineno: int
    message: str

    def to_error(self) -> IniParseError:
        return IniParseError(self.lineno, self.message)


type Parsed = Blank | Comment | SectionLine | ItemLine | ErrorLine


def _split_pair(line: str, delimiter: str) -> tuple[str, str] | None:
    # first delimiter not preceded by an escape char.
    escaped = False
    for pos, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == ESCAPE:
            escaped = True
        elif char == delimiter:
            return line[:pos], line[pos + 1:]
    return None


def unescape_key(key: str, delimiter: str = '=') -> str:
    """Undo `\\\\` and `\\<delimiter>` in one pass, left to right.

    Other backslashes are kept as they are.
    """
    ret: list[str] = []
    chars = iter(key)
    for char in chars:
        if char != ESCAPE:
            ret.append(char)
            continue
        follow = next(chars, '')
        if follow not in (ESCAPE, delimiter):
            ret.append(char)
        ret.append(follow)
    return ''.join(ret)


def unquote(value: str, quote_chars: Iterable[str] = ('"', "'")) -> str:
    """Strip one pair of matching quotes around an already trimmed value."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in quote_chars:
        return value[1:-1]
    return value


def parse_line(
    line: str,
    lineno: int,
    dialect: IniDialect = DEFAULT_DIALECT
) -> Parsed:
    """Classify one line. `lineno` is only carried into the result."""
    text = line.strip()
    if not text:
        return Blank(lineno)
    if text.startswith(dialect.comment_prefixes):
        return Comment(lineno, text)

    if text[0] == '[':
        inner = text[1:-1]
        if (len(text) < 2 or text[-1] != ']'
                or '[' in inner or ']' in inner):
            return ErrorLine(lineno, INVALID_SECTION)
        if not (name := inner.strip()):
            return ErrorLine(lineno, INVALID_SECTION)
        return SectionLine(lineno, name)

    if (pair := _split_pair(text, dialect.delimiter)) is None:
        return ErrorLine(lineno, MISSING_SEPARATOR)
    key, value = pair
    if not (key := key.strip()):
        return ErrorLine(lineno, EMPTY_KEY)
    key = unescape_key(key, dialect.delimiter)
    return ItemLine(lineno, key, unquote(value.strip(), dialect.quote_chars))


def parse_lines(
    source: str | Iterable[str],
    dialect: IniDialect = DEFAULT_DIALECT
) -> Iterator[Parsed]:
    """Lazily classify every line of `source`, numbered from 0.

    `source` may be a whole text, or any iterable of lines
    (like an opened text file).
    """
    if isinstance(source, str):
        source = source.split('\n')
    for lineno, line in enumerate(source):
        if lineno == 0:
            line = line.removeprefix(BOM)
        yield parse_line(line, lineno, dialect)
