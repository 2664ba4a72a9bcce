"""Tests for pytini.ini.lines."""

import pytest

from pytini.ini.consts import IniDialect
from pytini.ini.lines import (
    EMPTY_KEY,
    INVALID_SECTION,
    MISSING_SEPARATOR,
    Blank,
    Comment,
    ErrorLine,
    IniParseError,
    ItemLine,
    SectionLine,
    parse_line,
    parse_lines,
    unescape_key,
    unquote
)


class TestBlankAndComments:
    @pytest.mark.parametrize('line', ['', '   ', '\t \r'])
    def test_blank(self, line: str) -> None:
        assert parse_line(line, 3) == Blank(3)

    @pytest.mark.parametrize('line', ['; note', '# note', '   ;indented',
                                      '#a = b', ';[section]'])
    def test_comment(self, line: str) -> None:
        got = parse_line(line, 0)
        assert isinstance(got, Comment)
        assert got.text == line.strip()

    def test_custom_comment_prefixes(self) -> None:
        dialect = IniDialect(comment_prefixes=('//',))
        assert isinstance(parse_line('// hi', 0, dialect), Comment)
        assert parse_line('# a = b', 0, dialect) == ItemLine(0, '# a', 'b')


class TestSectionHeader:
    @pytest.mark.parametrize('line, name', [
        ('[general]', 'general'),
        ('  [ spaced name ]  ', 'spaced name'),
        ('[a.b:c]', 'a.b:c'),
        ('[with = sign]', 'with = sign'),
    ])
    def test_valid(self, line: str, name: str) -> None:
        assert parse_line(line, 1) == SectionLine(1, name)

    @pytest.mark.parametrize('line', [
        '[', '[]', '[   ]', '[open', '[a]]', '[[a]', '[a] trailing',
        '[a]b]',
    ])
    def test_invalid(self, line: str) -> None:
        assert parse_line(line, 7) == ErrorLine(7, INVALID_SECTION)


class TestKeyValue:
    def test_basic(self) -> None:
        assert parse_line('key = value', 0) == ItemLine(0, 'key', 'value')

    def test_trims_both_sides(self) -> None:
        assert parse_line('  key\t=   some value  ', 0) == \
            ItemLine(0, 'key', 'some value')

    def test_first_separator_wins(self) -> None:
        assert parse_line('url = a=b=c', 0) == ItemLine(0, 'url', 'a=b=c')

    def test_empty_value(self) -> None:
        assert parse_line('key =', 0) == ItemLine(0, 'key', '')

    def test_colon_is_not_a_separator(self) -> None:
        assert parse_line('time = 12:30', 0) == ItemLine(0, 'time', '12:30')
        assert parse_line('a: b', 0) == ErrorLine(0, MISSING_SEPARATOR)

    def test_escaped_separator_in_key(self) -> None:
        assert parse_line(r'a\=b = c', 0) == ItemLine(0, 'a=b', 'c')

    @pytest.mark.parametrize('line, key', [
        (r'a\\b = c', 'a\\b'),
        (r'a\\\=b = c', 'a\\=b'),
        (r'back\\ = c', 'back\\'),
        (r'a\b = c', 'a\\b'),
        (r'k\ = c', 'k\\'),
    ])
    def test_escaped_backslash_in_key(self, line: str, key: str) -> None:
        assert parse_line(line, 0) == ItemLine(0, key, 'c')

    def test_escaped_backslash_then_separator(self) -> None:
        # `\\` is one backslash, so the `=` after it splits.
        assert parse_line(r'a\\=b = c', 0) == ItemLine(0, 'a\\', 'b = c')

    def test_missing_separator(self) -> None:
        assert parse_line('no_separator_here', 4) == \
            ErrorLine(4, MISSING_SEPARATOR)

    def test_empty_key(self) -> None:
        assert parse_line('  = value', 2) == ErrorLine(2, EMPTY_KEY)

    @pytest.mark.parametrize('line, value', [
        ('k = "  padded  "', '  padded  '),
        ("k = ' single '", ' single '),
        ('k = "has = sign"', 'has = sign'),
        ('k = ""', ''),
        ('k = "', '"'),
        ('k = "mismatch\'', '"mismatch\''),
        ('k = "a" and "b"', 'a" and "b'),
    ])
    def test_quotes(self, line: str, value: str) -> None:
        assert parse_line(line, 0) == ItemLine(0, 'k', value)

    def test_custom_delimiter(self) -> None:
        dialect = IniDialect(delimiter=':')
        assert parse_line('a: b = c', 0, dialect) == ItemLine(0, 'a', 'b = c')


def test_unescape_key() -> None:
    assert unescape_key('plain') == 'plain'
    assert unescape_key('a\\\\\\=b') == 'a\\=b'
    assert unescape_key('c:\\dir') == 'c:\\dir'
    assert unescape_key('a\\:b', ':') == 'a:b'
    assert unescape_key('a\\=b', ':') == 'a\\=b'


def test_unquote() -> None:
    assert unquote('"x"') == 'x'
    assert unquote('x') == 'x'
    assert unquote('"x"', quote_chars=("'",)) == '"x"'


class TestParseLines:
    def test_numbers_from_zero(self) -> None:
        text = '[a]\n; c\n\nk = v\nbad'
        assert list(parse_lines(text)) == [
            SectionLine(0, 'a'),
            Comment(1, '; c'),
            Blank(2),
            ItemLine(3, 'k', 'v'),
            ErrorLine(4, MISSING_SEPARATOR),
        ]

    def test_keeps_going_after_errors(self) -> None:
        text = '[s]\nno_separator_here\nk = v'
        events = list(parse_lines(text))
        assert events[1] == ErrorLine(1, MISSING_SEPARATOR)
        assert events[2] == ItemLine(2, 'k', 'v')

    def test_iterable_of_lines(self) -> None:
        lines = ['[a]\n', 'k = v\r\n']
        assert list(parse_lines(lines)) == [
            SectionLine(0, 'a'), ItemLine(1, 'k', 'v')]

    def test_strips_bom(self) -> None:
        assert list(parse_lines('\ufeff[a]')) == [SectionLine(0, 'a')]


class TestParseError:
    def test_from_error_line(self) -> None:
        err = ErrorLine(5, EMPTY_KEY).to_error()
        assert isinstance(err, ValueError)
        assert err.lineno == 5
        assert err.message == EMPTY_KEY
        assert str(err) == 'line 5: empty key'

    def test_equality(self) -> None:
        assert IniParseError(1, 'x') == IniParseError(1, 'x')
        assert IniParseError(1, 'x') != IniParseError(2, 'x')
