# -*- encoding: utf-8 -*-
# @File   : value.py
# @Time   : 2024/10/12 20:03:55
# @Author : Kariko Lin

"""Scalar INI values.

Raw text is kept *verbatim* (no trimming) until one of the conversions below
gets called. All conversions use an invariant grammar, i.e. `.` as decimal
separator and no digit grouping, regardless of the running locale.
"""

import math
from dataclasses import dataclass
from re import compile as regex
from typing import ClassVar

__all__ = ['IniValue', 'MISSING']

_INT_LITERAL = regex(r'[+-]?[0-9]+')
_FLOAT_LITERAL = regex(
    r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
# symbols of the invariant culture, compared case-insensitively.
_FLOAT_SYMBOLS = {
    'nan': math.nan,
    'infinity': math.inf,
    '+infinity': math.inf,
    '-infinity': -math.inf,
}


def _format_float(f: float) -> str:
    if math.isnan(f):
        return 'NaN'
    if math.isinf(f):
        return 'Infinity' if f > 0 else '-Infinity'
    # repr() is the shortest string that parses back to the same float.
    return repr(f)


@dataclass(frozen=True, slots=True)
class IniValue:
    """Immutable wrapper of an INI value.

    `value is None` means "no such key", which is what `MISSING` carries.
    An empty string is a *present* value, though.
    """
    value: str | None = None

    MISSING: ClassVar['IniValue']

    @classmethod
    def of(cls, obj: object) -> 'IniValue':
        """Wrap a typed python object.

        `bool`, `int` and `float` are formatted so that `to_bool()`,
        `to_int()` and `to_float()` read back the very same value.
        """
        match obj:
            case IniValue():
                return obj
            case None:
                return cls.MISSING
            case str():
                return cls(obj)
            case bool():
                return cls('True' if obj else 'False')
            case int():
                return cls(str(obj))
            case float():
                return cls(_format_float(obj))
            case _:
                return cls(str(obj))

    @property
    def is_missing(self) -> bool:
        return self.value is None

    def __bool__(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return '' if self.value is None else self.value

    # bool

    def try_bool(self) -> tuple[bool, bool]:
        """Returns `(ok, result)`. Only `true`/`false` (any case) are valid."""
        if self.value is None:
            return False, False
        match self.value.strip().lower():
            case 'true':
                return True, True
            case 'false':
                return True, False
            case _:
                return False, False

    def to_bool(self, fallback: bool = False) -> bool:
        ok, ret = self.try_bool()
        return ret if ok else fallback

    # int

    def try_int(self) -> tuple[bool, int]:
        if self.value is None:
            return False, 0
        text = self.value.strip()
        if not _INT_LITERAL.fullmatch(text):
            return False, 0
        return True, int(text)

    def to_int(self, fallback: int = 0) -> int:
        ok, ret = self.try_int()
        return ret if ok else fallback

    # float

    def try_float(self) -> tuple[bool, float]:
        """Returns `(ok, result)`.

        NOTE: `result` is `nan` on failure, rather than `0.0`.
        Some callers read it before checking `ok`.
        """
        if self.value is None:
            return False, math.nan
        text = self.value.strip()
        if _FLOAT_LITERAL.fullmatch(text):
            return True, float(text)
        if (sym := _FLOAT_SYMBOLS.get(text.lower())) is not None:
            return True, sym
        return False, math.nan

    def to_float(self, fallback: float = 0.0) -> float:
        ok, ret = self.try_float()
        return ret if ok else fallback

    try_double = try_float
    to_double = to_float

    # str

    def as_string(
        self,
        allow_outer_quotes: bool = True,
        preserve_whitespace: bool = False
    ) -> str:
        """Get the value as text.

        Outer whitespaces are trimmed unless `preserve_whitespace`.
        If `allow_outer_quotes`, *one* pair of surrounding double quotes
        gets stripped, e.g. `key = " padded "` gives `padded`
        (or ` padded ` with `preserve_whitespace=True`).
        """
        if self.value is None:
            return ''
        trimmed = self.value.strip()
        if (
            allow_outer_quotes
            and len(trimmed) >= 2
            and trimmed[0] == '"' and trimmed[-1] == '"'
        ):
            inner = trimmed[1:-1]
            return inner if preserve_whitespace else inner.strip()
        return self.value if preserve_whitespace else trimmed


IniValue.MISSING = IniValue()
MISSING = IniValue.MISSING
