# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/13 00:57:10
# @Author : Kariko Lin

"""
INI document: an ordered table of sections, each an ordered table of
`str: str` pairs.

As for files and encodings, just see `ini.parser`.
"""

import logging
from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
    Sequence
)
from io import BufferedIOBase, RawIOBase, TextIOBase
from os import PathLike
from typing import IO, Any, Self
from warnings import warn

from .codec import decode_bytes, decode_file
from .consts import BOOL_STATES, DEFAULT_DIALECT, UNNAMED_SECTION, IniDialect
from .lines import (
    ESCAPE,
    ErrorLine,
    IniParseError,
    ItemLine,
    SectionLine,
    parse_lines
)
from .ordered import OrderedMap

type Section = OrderedMap[str, str]


def parse_bool(value: str) -> bool:
    """`bool()` would take any non-empty string as `True`, so not that."""
    try:
        return BOOL_STATES[value.strip().lower()]
    except KeyError:
        raise ValueError(f'not a boolean: {value!r}') from None


def _converter[T](converter: Callable[[str], T]) -> Callable[[str], T]:
    return parse_bool if converter is bool else converter  # type: ignore


def _to_section(
    pairs: Mapping[Any, Any] | Iterable[tuple[Any, Any]]
) -> Section:
    if isinstance(pairs, Mapping):
        pairs = pairs.items()
    return OrderedMap(
        (_check_key(str(k)), _check_value(str(v))) for k, v in pairs)


class Ini(MutableMapping[str, Section]):
    """INI document. Supports the following (see `ini.lines` for details):

        ```ini
        ; pairs before any header live in section "".
        key = val

        [section]
        key233 = val666
        quoted = "  val  "
        ; reopens it, so `key233` gets updated in place.
        [section]
        key233 = val114514
        ```

    Note that comments take whole lines, `key = val ; x` keeps `val ; x`.

    Either built from text with `from_buffer()` and friends, or in program:

        >>> conf = (Ini().section('floats').item('consts', '3.1416, 2.7183')
        ...              .section('integers').item_vec('lost', [4, 8, 15]))
        >>> conf.get_vec('integers', 'lost', int)
        [4, 8, 15]

    Also a mapping of section names to `Section`s, in insertion order.
    That's why the builder says `extend()` and `clear_section()`:
    `items()` and `clear()` stay the mapping ones. And `get()` takes
    `(section, key)` like `configparser` does, not `(key, default)`;
    look sections up with `ini[name]` or `name in ini` instead.
    """
    def __init__(self) -> None:
        self.__raw: OrderedMap[str, Section] = OrderedMap()
        self.__current = UNNAMED_SECTION
        # filled by non-strict parsing only.
        self.errors: list[IniParseError] = []

    # ---- mapping protocol ----
    def __getitem__(self, key: str) -> Section:
        return self.__raw[key]

    def __setitem__(
        self, key: str,
        value: Mapping[Any, Any] | Iterable[tuple[Any, Any]]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        self.__raw[_check_name(str(key))] = _to_section(value)

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return f'Ini({self.__raw!r})'

    def __str__(self) -> str:
        return self.to_buffer()

    # ---- reading ----
    @classmethod
    def from_buffer(
        cls, buf: str | Iterable[str], *,
        strict: bool = True,
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> Self:
        """Build a document from text (or any iterable of lines).

        With `strict` (default) the first malformed line raises
        `IniParseError`. Otherwise each one is logged, kept in `errors`,
        and skipped.
        """
        ret = cls()
        for line in parse_lines(buf, dialect):
            match line:
                case SectionLine(name=name):
                    # a header alone still makes an (empty) section.
                    ret._open(name)
                case ItemLine(key=key, value=value):
                    ret._put(key, value)
                case ErrorLine():
                    if strict:
                        raise line.to_error()
                    logging.warning('line %d: error: %s',
                                    line.lineno, line.message)
                    ret.errors.append(line.to_error())
        return ret

    @classmethod
    def from_reader(
        cls, reader: IO[str] | IO[bytes] | TextIOBase, *,
        strict: bool = True,
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> Self:
        """Read a whole stream, then parse it.

        Bytes get decoded the same way as files, see `codec.decode_bytes()`.
        """
        raw = reader.read()
        if isinstance(raw, (bytes, bytearray)):
            raw = decode_bytes(bytes(raw))
        return cls.from_buffer(raw, strict=strict, dialect=dialect)

    @classmethod
    def from_file(
        cls, path: str | PathLike[str],
        encoding: str | None = None, *,
        strict: bool = True,
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> Self:
        """Read and parse the file at `path`.

        `OSError` from opening the file is passed through as is.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            # decode it all before parsing, so no line is reported twice.
            with open(path, 'r', encoding=encoding) as fp:
                text = fp.read()
        except UnicodeDecodeError:
            logging.info('Failed to read %s as %s, guessing with chardet.',
                         path, encoding or 'system default')
            text = decode_file(path).read()
        return cls.from_buffer(text, strict=strict, dialect=dialect)

    # ---- building ----
    @property
    def current_section(self) -> str:
        """Name the following `item()`s go to."""
        return self.__current

    def _open(self, name: str) -> None:
        self.__current = name
        self.__raw.setdefault_with(name, OrderedMap)

    def _put(self, key: str, value: str) -> None:
        self.__raw.setdefault_with(self.__current, OrderedMap).insert(
            key, value)

    def section(self, name: str) -> Self:
        """Switch to section `name`. This does not create the section.

        Raises `ValueError` for names a `[name]` header can't carry back:
        surrounding whitespace, brackets, line breaks.
        """
        self.__current = _check_name(str(name))
        return self

    def item(self, key: Any, value: Any) -> Self:
        """Put a pair to the current section, creating the section if needed.

        Empty or untrimmed keys, keys starting with `[`, and line breaks
        anywhere raise `ValueError`.
        """
        self._put(_check_key(str(key)), _check_value(str(value)))
        return self

    def item_vec(
        self, key: Any, values: Iterable[Any], sep: str = ', '
    ) -> Self:
        """Like `item()`, with `values` joined by `sep`."""
        return self.item(key, sep.join(str(i) for i in values))

    def extend(
        self, pairs: Mapping[Any, Any] | Iterable[tuple[Any, Any]]
    ) -> Self:
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        for k, v in pairs:
            self.item(k, v)
        return self

    def clear_section(self) -> Self:
        """Drop all pairs of the current section, keeping the section itself."""
        if self.__current in self.__raw:
            self.__raw[self.__current].clear()
        return self

    def erase(self, key: str) -> Self:
        """Drop `key` from the current section, if it is there."""
        if self.__current in self.__raw:
            self.__raw[self.__current].remove(key)
        return self

    def insert_section(
        self, name: str,
        pairs: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = ()
    ) -> None:
        """Put a whole section, and switch to it.

        A section with the same name gets overwritten where it is,
        otherwise the new one goes to the end.
        """
        section = _to_section(pairs)
        self.__current = _check_name(str(name))
        self.__raw[self.__current] = section

    def remove_section(self, name: str) -> Section | None:
        return self.__raw.remove(name)

    def remove_item(self, section: str, key: str) -> str | None:
        if (sect := self.__raw.get(section)) is None:
            return None
        return sect.remove(key)

    def clear(self) -> None:
        self.__raw.clear()
        self.errors.clear()
        self.__current = UNNAMED_SECTION

    # ---- iterating ----
    def iter_section(self, name: str) -> Iterator[tuple[str, str]] | None:
        if (sect := self.__raw.get(name)) is None:
            return None
        return sect.iter()

    def iter(self) -> Iterator[tuple[str, Iterator[tuple[str, str]]]]:
        """Each section name, with a lazy iterator of its pairs."""
        for name, sect in self.__raw.iter():
            yield name, sect.iter()

    def iter_mut(self) -> Iterator[tuple[str, Section]]:
        """Each section name, with the section itself for in-place edits."""
        return self.__raw.iter()

    # ---- typed access ----
    def get_raw(self, section: str, key: str) -> str | None:
        if (sect := self.__raw.get(section)) is None:
            return None
        return sect.get(key)

    def get[T](
        self, section: str, key: str,
        converter: Callable[[str], T] = str  # type: ignore[assignment]
    ) -> T | None:
        """Get the value converted by `converter`.

        Any `str -> T` callable works, e.g. `int`, `float`, `Decimal`.
        `bool` is special-cased with `parse_bool()`.

        Note: `None` means either missing, or failed to convert,
        there's no telling which.

        Not `Mapping.get()`: `key` is required, so `ini.get('s')`
        is a `TypeError`.
        """
        if (raw := self.get_raw(section, key)) is None:
            return None
        try:
            return _converter(converter)(raw)
        except (ValueError, TypeError, ArithmeticError):
            return None

    def get_vec[T](
        self, section: str, key: str,
        converter: Callable[[str], T] = str,  # type: ignore[assignment]
        sep: str = ','
    ) -> list[T] | None:
        """Split the value by `sep`, and convert each (trimmed) piece.

        All or nothing: if any piece fails to convert, `None` is returned.
        """
        if (raw := self.get_raw(section, key)) is None:
            return None
        conv = _converter(converter)
        try:
            return [conv(i.strip()) for i in raw.split(sep)]
        except (ValueError, TypeError, ArithmeticError):
            return None

    # ---- writing ----
    def _ordered_sections(self) -> Sequence[tuple[str, Section]]:
        sections = list(self.__raw.iter())
        names = [name for name, _ in sections]
        if (UNNAMED_SECTION in names and names[0] != UNNAMED_SECTION
                and self.__raw[UNNAMED_SECTION]):
            warn('The unnamed section is not the first one. '
                 'It will be written first, otherwise its pairs '
                 'would be read back into the section before it.')
            pos = names.index(UNNAMED_SECTION)
            sections.insert(0, sections.pop(pos))
        return sections

    def to_buffer(self, dialect: IniDialect = DEFAULT_DIALECT) -> str:
        """Canonical text: sections in order, one blank line in between,
        no trailing newline.
        """
        blocks: list[str] = []
        for name, sect in self._ordered_sections():
            lines = [] if name == UNNAMED_SECTION else [
                f'[{_check_name(name)}]']
            lines.extend(
                f'{_escape_key(k, dialect)}{dialect.write_delimiter}'
                f'{_quote_value(v, dialect)}'
                for k, v in sect.iter())
            if lines:
                blocks.append('\n'.join(lines))
        return ('\n' * (dialect.blank_lines + 1)).join(blocks)

    def to_writer(
        self, writer: IO[str] | IO[bytes] | TextIOBase,
        encoding: str = 'utf-8',
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> None:
        """Write the whole canonical text. Binary writers get `encoding`."""
        buf = self.to_buffer(dialect)
        if isinstance(writer, (RawIOBase, BufferedIOBase)):
            writer.write(buf.encode(encoding))
        else:
            writer.write(buf)  # type: ignore[arg-type]

    def to_file(
        self, path: str | PathLike[str],
        encoding: str = 'utf-8',
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> None:
        """Same as `IniParser(path, encoding).write(self)`."""
        from .parser import IniParser
        IniParser(path, encoding, dialect=dialect).write(self)


def _no_line_break(text: str, what: str) -> str:
    if '\n' in text or '\r' in text:
        raise ValueError(f'{what} spans lines: {text!r}')
    return text


def _check_name(name: str) -> str:
    # what a `[name]` header can carry.
    if name != UNNAMED_SECTION and (
            name != name.strip() or '[' in name or ']' in name):
        raise ValueError(f'bad section name: {name!r}')
    return _no_line_break(name, 'section name')


def _check_key(key: str) -> str:
    if not key or key != key.strip() or key.startswith('['):
        raise ValueError(f'bad key: {key!r}')
    return _no_line_break(key, 'key')


def _check_value(value: str) -> str:
    return _no_line_break(value, 'value')


def _escape_key(key: str, dialect: IniDialect) -> str:
    if _check_key(key).startswith(dialect.comment_prefixes):
        raise ValueError(f'key would be read back as a comment: {key!r}')
    return key.replace(ESCAPE, ESCAPE * 2).replace(
        dialect.delimiter, ESCAPE + dialect.delimiter)


def _quote_value(value: str, dialect: IniDialect) -> str:
    # quote whatever the reader would otherwise trim or unquote.
    _check_value(value)
    needs_quote = value != value.strip() or (
        len(value) >= 2 and value[0] == value[-1]
        and value[0] in dialect.quote_chars)
    if not needs_quote or not dialect.quote_chars:
        return value
    quote = dialect.quote_chars[0]
    if quote in value and len(dialect.quote_chars) > 1:
        quote = dialect.quote_chars[1]
    return f'{quote}{value}{quote}'
