# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 22:05:31
# @Author : Kariko Lin

from dataclasses import dataclass

# where the pairs before any `[section]` header go.
UNNAMED_SECTION = ''

BOOL_STATES = {
    'true': True, 'yes': True, 'on': True, '1': True,
    'false': False, 'no': False, 'off': False, '0': False,
}


@dataclass(frozen=True, kw_only=True)
class IniDialect:
    """How lines get read and written.

    The defaults are the canonical format:

        ```ini
        ; comment
        # comment
        [section]
        key = value
        quoted = "  kept as is  "
        ```
    """
    delimiter: str = '='
    comment_prefixes: tuple[str, ...] = (';', '#')
    quote_chars: tuple[str, ...] = ('"', "'")
    # output only.
    write_delimiter: str = ' = '
    blank_lines: int = 1

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(
                f'delimiter should be a single char, got {self.delimiter!r}')
        if self.blank_lines < 0:
            raise ValueError('blank_lines should not be negative')


DEFAULT_DIALECT = IniDialect()
