# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 20:01:52
# @Author : Kariko Lin

import logging

from .ini import (
    DEFAULT_DIALECT,
    Ini,
    IniDialect,
    IniError,
    IniParseError,
    IniParser,
    IniYamlParser,
    OrderedMap,
    Section,
    parse_line,
    parse_lines
)

__all__ = [
    'Ini', 'Section', 'OrderedMap',
    'IniParser', 'IniYamlParser',
    'IniDialect', 'DEFAULT_DIALECT',
    'IniError', 'IniParseError',
    'parse_line', 'parse_lines'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
