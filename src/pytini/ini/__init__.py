# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 01:16:53
# @Author : Kariko Lin

from .consts import DEFAULT_DIALECT, UNNAMED_SECTION, IniDialect
from .lines import (
    Blank,
    Comment,
    ErrorLine,
    IniError,
    IniParseError,
    ItemLine,
    SectionLine,
    parse_line,
    parse_lines
)
from .model import Ini, Section, parse_bool
from .ordered import Entry, OrderedMap
from .parser import IniParser, IniYamlParser
