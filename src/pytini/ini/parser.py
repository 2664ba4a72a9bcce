# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 01:04:45
# @Author : Kariko Lin

"""File handlers of `Ini`.

- `IniParser`: plain INI files, in the canonical format when writing.
- `IniYamlParser`: the same document as a YAML mapping,
like `{section: {key: value}}`, keeping the order.
"""

from os import PathLike
from typing import Any

import yaml

from ..abstract import FileHandler
from .consts import DEFAULT_DIALECT, UNNAMED_SECTION, IniDialect
from .lines import IniError
from .model import Ini


class IniParser(FileHandler[Ini]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        strict: bool = True,
        dialect: IniDialect = DEFAULT_DIALECT
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._strict = strict
        self._dialect = dialect

    def read(self) -> Ini:
        """读取`IniParser`实例指定的文件。

        若按指定编码（为`None`时即系统默认编码）解码失败，则改用`chardet`猜测编码。
        """
        return Ini.from_file(
            self._fn, self._codec, strict=self._strict, dialect=self._dialect)

    def write(self, instance: Ini) -> None:
        """保存到*一个* INI 文件。注释和空行不会保留。"""
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            instance.to_writer(fp, dialect=self._dialect)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def _scalar(value: Any) -> str:
    # may there be some pure digits considered as int
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class IniYamlParser(FileHandler[Ini]):
    """Since YAML is picky about special signs, values are always
    dumped (and read back) as strings."""

    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> Ini:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src = yaml.safe_load(fp)
        ret = Ini()
        if src is None:  # empty file
            return ret
        if not isinstance(src, dict):
            raise IniError(
                f'{self._fn}: expected a mapping of sections, '
                f'got {type(src).__name__}.')
        for name, pairs in src.items():
            if pairs is None:
                pairs = {}
            if not isinstance(pairs, dict):
                raise IniError(
                    f'{self._fn}: section "{name}" should be a mapping, '
                    f'got {type(pairs).__name__}.')
            ret.insert_section(
                _scalar(name),
                ((_scalar(k), _scalar(v)) for k, v in pairs.items()))
        ret.section(UNNAMED_SECTION)
        return ret

    def write(self, instance: Ini, indent: int = 2) -> None:
        data = {name: dict(sect.iter()) for name, sect in instance.iter_mut()}
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                data, fp,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
                indent=indent)
