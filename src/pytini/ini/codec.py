# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2024/10/13 01:20:44
# @Author : Kariko Lin

import logging
from io import StringIO
from os import PathLike

import chardet

# below that, chardet is more likely guessing than detecting.
MIN_CONFIDENCE = 0.8
FALLBACK_CODECS = ('utf-8', 'gbk')


def decode_bytes(raw: bytes) -> str:
    """Decode INI bytes of unknown encoding.

    Trust `chardet` only when it's confident enough,
    otherwise try the fallbacks one by one.
    The last fallback raises `UnicodeDecodeError` if it fails as well.
    """
    codec = chardet.detect(raw)
    if (codec is None or codec['encoding'] is None
            or codec['confidence'] < MIN_CONFIDENCE):
        codecs = FALLBACK_CODECS
    else:
        codecs = (codec['encoding'], *FALLBACK_CODECS)
    for i in codecs[:-1]:
        try:
            return raw.decode(i)
        except (UnicodeDecodeError, LookupError):
            logging.info('Failed to decode as %s, trying the next one.', i)
    return raw.decode(codecs[-1])


def decode_file(filename: str | PathLike[str]) -> StringIO:
    with open(filename, 'rb') as fp:
        raw = fp.read()
    return StringIO(decode_bytes(raw))
