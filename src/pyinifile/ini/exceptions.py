# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2024/10/12 21:40:17
# @Author : Kariko Lin

"""Faults raised by the INI containers.

All of them are contract violations, i.e. the caller should have prevented
them. A failed value conversion is *not* an error: see `IniValue.try_*()`.
"""


class IniError(Exception):
    """Base of every fault raised by `pyinifile.ini`."""
    pass


class DuplicateKeyError(IniError, KeyError):
    """Key (or section name) already exists, nothing was changed."""
    pass


class InvalidOperationError(IniError, RuntimeError):
    """Positional operation on a section which is not ordered."""
    pass


class IndexRangeError(IniError, IndexError):
    pass


class CountRangeError(IniError, ValueError):
    pass


class RangeOverflowError(IniError, ValueError):
    """`index + count` runs past the end of the section."""
    pass


class ArgumentNullError(IniError, TypeError):
    pass
