# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

import logging

from .ini import (
    IniValue, MISSING,
    KeyComparer, IGNORE_CASE, ORDINAL,
    IniSection, IniClass, IniParser,
    IniError, DuplicateKeyError, InvalidOperationError,
    IndexRangeError, CountRangeError, RangeOverflowError, ArgumentNullError
)

__all__ = [
    'IniValue', 'MISSING',
    'KeyComparer', 'IGNORE_CASE', 'ORDINAL',
    'IniSection', 'IniClass', 'IniParser',
    'IniError', 'DuplicateKeyError', 'InvalidOperationError',
    'IndexRangeError', 'CountRangeError', 'RangeOverflowError',
    'ArgumentNullError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
