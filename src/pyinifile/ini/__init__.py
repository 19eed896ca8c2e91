# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .exceptions import (
    IniError,
    DuplicateKeyError,
    InvalidOperationError,
    IndexRangeError,
    CountRangeError,
    RangeOverflowError,
    ArgumentNullError
)
from .value import IniValue, MISSING
from .model import KeyComparer, IGNORE_CASE, ORDINAL, IniSection, IniClass
from .parser import IniParser
