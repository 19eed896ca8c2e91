# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure, with case-insensitive keys and optional key order.

As for reading from / writing to disk, just see `ini.parser`.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from io import StringIO
from re import compile as regex
from typing import Callable, Self, TextIO
from warnings import warn

from .exceptions import (
    ArgumentNullError,
    CountRangeError,
    DuplicateKeyError,
    IndexRangeError,
    InvalidOperationError,
    RangeOverflowError,
)
from .value import MISSING, IniValue

__all__ = [
    'KeyComparer', 'IGNORE_CASE', 'ORDINAL',
    'IniSection', 'IniClass'
]

_LINE_BREAK = regex(r'\r\n|\r|\n')


@dataclass(frozen=True)
class KeyComparer:
    """Equality and hashing of keys, derived from *one* `fold` function.

    Two keys are equal iff they fold to the same string,
    and the hash of a key is the hash of its folded form.
    """
    fold: Callable[[str], str]
    name: str = field(default='', compare=False)

    def equals(self, a: str, b: str) -> bool:
        return self.fold(a) == self.fold(b)

    def hash(self, key: str) -> int:
        return hash(self.fold(key))

    def __repr__(self) -> str:
        return f'KeyComparer({self.name or self.fold!r})'


def _ordinal(key: str) -> str:
    return key


IGNORE_CASE = KeyComparer(str.casefold, 'ignore_case')
ORDINAL = KeyComparer(_ordinal, 'ordinal')


class IniSection(MutableMapping[str, IniValue]):
    """INI section dict, mapping keys to `IniValue`.

    Keys are compared with `comparer` (case-insensitive by default), while
    the spelling of a key's first insertion is kept for output.

    A section may be *ordered*: it then also keeps a key list, which
    enables index-based operations (`insert()`, `remove_at()`,
    `section[0]`, ...). Turning `ordered` on later captures whatever the
    current iteration order happens to be.

    Lookups never raise: `section['absent']` gives `MISSING`.
    """
    def __init__(
        self,
        pairs: Mapping[str, object] | None = None,
        comparer: KeyComparer = IGNORE_CASE, *,
        ordered: bool = False
    ) -> None:
        self.__comparer = comparer
        # folded key -> (original key, value)
        self.__raw: dict[str, tuple[str, IniValue]] = {}
        # folded keys, only while ordered.
        self.__order: list[str] | None = None
        if pairs is not None:
            for k, v in pairs.items():
                self.add(k, v)
        self.ordered = ordered

    @property
    def comparer(self) -> KeyComparer:
        return self.__comparer

    @property
    def ordered(self) -> bool:
        return self.__order is not None

    @ordered.setter
    def ordered(self, value: bool) -> None:
        if value == self.ordered:
            return
        self.__order = list(self.__raw) if value else None

    def copy(self, comparer: KeyComparer | None = None) -> 'IniSection':
        """Shallow copy, optionally re-keyed under another `comparer`.

        May raise `DuplicateKeyError` if two keys collide under `comparer`.
        """
        return IniSection(
            self,
            self.__comparer if comparer is None else comparer,
            ordered=self.ordered)

    # mapping

    def __getitem__(self, key: str | int) -> IniValue:
        if isinstance(key, int):
            return self.value_at(key)
        return self.get(key)

    def __setitem__(self, key: str | int, value: object) -> None:
        if isinstance(key, int):
            self.set_value_at(key, value)
        else:
            self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return (
            isinstance(key, str)
            and self.__comparer.fold(key) in self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        if self.__order is None:
            return (k for k, _ in self.__raw.values())
        return (self.__raw[i][0] for i in self.__order)

    def __repr__(self) -> str:
        pairs = ', '.join(f'{k!r}: {v.value!r}' for k, v in self.items())
        return (
            f'IniSection({{{pairs}}}'
            f'{", ordered=True" if self.ordered else ""})')

    def __eq__(self, other: object) -> bool:
        # keys compared through this section's comparer, values as is.
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(
            k in self and self.get(k) == v for k, v in other.items())

    __hash__ = None  # type: ignore[assignment]

    def contains_key(self, key: str) -> bool:
        return key in self

    def get(  # type: ignore[override]
        self, key: str, default: IniValue = MISSING
    ) -> IniValue:
        """Get the value of `key`, or `default` (`MISSING`) if absent."""
        pair = self.__raw.get(self.__comparer.fold(key))
        return default if pair is None else pair[1]

    def set(self, key: str, value: object) -> None:
        """Insert, or replace in place (keeping its position if ordered)."""
        folded = self.__comparer.fold(key)
        if (pair := self.__raw.get(folded)) is not None:
            self.__raw[folded] = (pair[0], IniValue.of(value))
            return
        self.__raw[folded] = (key, IniValue.of(value))
        if self.__order is not None:
            self.__order.append(folded)

    def add(self, key: str, value: object) -> None:
        """Insert a *new* key, or raise `DuplicateKeyError`."""
        folded = self.__comparer.fold(key)
        if folded in self.__raw:
            raise DuplicateKeyError(key)
        self.__raw[folded] = (key, IniValue.of(value))
        if self.__order is not None:
            self.__order.append(folded)

    def remove(self, key: str) -> bool:
        folded = self.__comparer.fold(key)
        if folded not in self.__raw:
            return False
        del self.__raw[folded]
        if self.__order is not None:
            self.__order.remove(folded)
        return True

    # the mixins below rely on `KeyError`, which `__getitem__` never raises.

    def pop(self, key: str, *default: object) -> object:
        if key not in self:
            if default:
                return default[0]
            raise KeyError(key)
        value = self.get(key)
        self.remove(key)
        return value

    def setdefault(  # type: ignore[override]
        self, key: str, default: object = ''
    ) -> IniValue:
        if key not in self:
            self.set(key, default)
        return self.get(key)

    def clear(self) -> None:
        self.__raw.clear()
        if self.__order is not None:
            self.__order.clear()

    # positional, for ordered sections only.

    def __require_order(self, op: str) -> list[str]:
        if self.__order is None:
            raise InvalidOperationError(
                f'Cannot call {op}() on IniSection: section is not ordered.')
        return self.__order

    @staticmethod
    def __check_range(size: int, index: int, count: int | None) -> int:
        """Validate `index` and `count` against `size`.

        Returns the effective count (to the end when `count` is None).
        """
        if index < 0 or index > size:
            raise IndexRangeError(
                f'index {index} must be within [0, {size}].')
        if count is None:
            return size - index
        if count < 0:
            raise CountRangeError(f'count cannot be negative, got {count}.')
        if index + count > size:
            raise RangeOverflowError(
                f'index {index} + count {count} runs past the end '
                f'of the section ({size}).')
        return count

    @staticmethod
    def __check_element(size: int, index: int) -> None:
        if index < 0 or index >= size:
            raise IndexRangeError(
                f'index {index} must be within [0, {size}).')

    def index_of(self, key: str, index: int = 0, count: int | None = None) -> int:
        """Position of `key` within `[index, index + count)`, or -1."""
        order = self.__require_order('index_of')
        count = self.__check_range(len(order), index, count)
        folded = self.__comparer.fold(key)
        for i in range(index, index + count):
            if order[i] == folded:
                return i
        return -1

    def last_index_of(
        self, key: str, index: int = 0, count: int | None = None
    ) -> int:
        """Like `index_of()`, but searches backward from the range's end."""
        order = self.__require_order('last_index_of')
        count = self.__check_range(len(order), index, count)
        folded = self.__comparer.fold(key)
        for i in range(index + count - 1, index - 1, -1):
            if order[i] == folded:
                return i
        return -1

    def insert(self, index: int, key: str, value: object) -> None:
        order = self.__require_order('insert')
        self.__check_range(len(order), index, 0)
        folded = self.__comparer.fold(key)
        if folded in self.__raw:
            raise DuplicateKeyError(key)
        self.__raw[folded] = (key, IniValue.of(value))
        order.insert(index, folded)

    def insert_range(
        self,
        index: int,
        pairs: Mapping[str, object] | Iterable[tuple[str, object]] | None
    ) -> None:
        """Insert all `pairs` at `index`, keeping their order.

        Either all of them get inserted, or (on any duplicate) none.
        """
        order = self.__require_order('insert_range')
        if pairs is None:
            raise ArgumentNullError('pairs cannot be None.')
        self.__check_range(len(order), index, 0)
        batch = list(pairs.items() if isinstance(pairs, Mapping) else pairs)

        folded: list[str] = []
        for k, _ in batch:
            f = self.__comparer.fold(k)
            if f in self.__raw or f in folded:
                raise DuplicateKeyError(k)
            folded.append(f)

        for f, (k, v) in zip(folded, batch):
            self.__raw[f] = (k, IniValue.of(v))
        order[index:index] = folded

    def remove_at(self, index: int) -> None:
        order = self.__require_order('remove_at')
        self.__check_element(len(order), index)
        del self.__raw[order.pop(index)]

    def remove_range(self, index: int, count: int) -> None:
        order = self.__require_order('remove_range')
        count = self.__check_range(len(order), index, count)
        for i in order[index:index + count]:
            del self.__raw[i]
        del order[index:index + count]

    def reverse(self, index: int = 0, count: int | None = None) -> None:
        """Reverse the whole key order, or only `[index, index + count)`."""
        order = self.__require_order('reverse')
        count = self.__check_range(len(order), index, count)
        order[index:index + count] = order[index:index + count][::-1]

    def key_at(self, index: int) -> str:
        order = self.__require_order('key_at')
        self.__check_element(len(order), index)
        return self.__raw[order[index]][0]

    def value_at(self, index: int) -> IniValue:
        order = self.__require_order('value_at')
        self.__check_element(len(order), index)
        return self.__raw[order[index]][1]

    def set_value_at(self, index: int, value: object) -> None:
        order = self.__require_order('set_value_at')
        self.__check_element(len(order), index)
        key, _ = self.__raw[order[index]]
        self.__raw[order[index]] = (key, IniValue.of(value))

    def ordered_values(self) -> list[IniValue]:
        order = self.__require_order('ordered_values')
        return [self.__raw[i][1] for i in order]


class IniClass(MutableMapping[str, IniSection]):
    """... is simply a group of `IniSection`, representing a whole INI file.

    Section names share one `comparer` (case-insensitive by default).
    A section keyed under another comparer gets *copied* when stored.

    Note: `doc[name]` raises `KeyError` on absence like any dict.
    Use `lookup()` to test presence, or `access()` to get-or-create.
    """
    def __init__(
        self,
        comparer: KeyComparer = IGNORE_CASE, *,
        persist_empty_sections: bool = False
    ) -> None:
        """Init an empty INI document."""
        self.__comparer = comparer
        self.persist_empty_sections = persist_empty_sections
        # folded name -> (original name, section)
        self.__raw: dict[str, tuple[str, IniSection]] = {}

    @property
    def comparer(self) -> KeyComparer:
        return self.__comparer

    def __adopt(self, section: IniSection | Mapping[str, object]) -> IniSection:
        if not isinstance(section, IniSection):
            # shouldn't keep ptr to external dict.
            return IniSection(section, self.__comparer)
        if section.comparer != self.__comparer:
            return section.copy(self.__comparer)
        return section

    def __getitem__(self, name: str) -> IniSection:
        pair = self.__raw.get(self.__comparer.fold(name))
        if pair is None:
            raise KeyError(name)
        return pair[1]

    def __setitem__(
        self, name: str, value: IniSection | Mapping[str, object]
    ) -> None:
        folded = self.__comparer.fold(name)
        if (pair := self.__raw.get(folded)) is not None:
            name = pair[0]
        self.__raw[folded] = (name, self.__adopt(value))

    def __delitem__(self, name: str) -> None:
        del self.__raw[self.__comparer.fold(name)]

    def __contains__(self, name: object) -> bool:
        return (
            isinstance(name, str)
            and self.__comparer.fold(name) in self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self.__raw.values())

    def __repr__(self) -> str:
        return 'IniClass { .sections = %d }' % len(self)

    def lookup(self, name: str) -> tuple[bool, IniSection | None]:
        """Non-mutating lookup, returns `(found, section)`."""
        pair = self.__raw.get(self.__comparer.fold(name))
        return (False, None) if pair is None else (True, pair[1])

    def access(self, name: str, *, ordered: bool = False) -> IniSection:
        """Get section `name`, *creating* an empty one if not exists."""
        found, section = self.lookup(name)
        if found:
            return section  # type: ignore[return-value]
        section = IniSection(comparer=self.__comparer, ordered=ordered)
        self.__raw[self.__comparer.fold(name)] = (name, section)
        return section

    def setdefault(  # type: ignore[override]
        self, name: str,
        default: IniSection | Mapping[str, object] | None = None
    ) -> IniSection:
        if name not in self:
            if default is None:
                default = IniSection(comparer=self.__comparer)
            self[name] = default
        return self[name]

    def add(
        self, name: str,
        pairs: IniSection | Mapping[str, object] | None = None, *,
        ordered: bool = False
    ) -> IniSection:
        """Add a *new* section and return it (as stored).

        `ordered` only applies to sections built here, i.e. when `pairs`
        is None or a plain mapping.
        """
        if name in self:
            raise DuplicateKeyError(name)
        if isinstance(pairs, IniSection):
            section = self.__adopt(pairs)
        else:
            section = IniSection(pairs, self.__comparer, ordered=ordered)
        self.__raw[self.__comparer.fold(name)] = (name, section)
        return section

    def remove(self, name: str) -> bool:
        return self.__raw.pop(self.__comparer.fold(name), None) is not None

    def clear(self) -> None:
        self.__raw.clear()

    # text format

    @staticmethod
    def __split_pair(line: str) -> tuple[str, str]:
        # value kept as is, it would be trimmed on `as_string()`.
        assign = line.find('=')
        if assign <= 0:
            return line.strip(), ''
        return line[:assign].strip(), line[assign + 1:]

    @staticmethod
    def __lines(buf: Iterable[str]) -> Iterator[str]:
        for chunk in buf:
            lines = _LINE_BREAK.split(chunk)
            if lines[-1] == '':
                lines.pop()
            yield from lines

    def readstream(self, buf: Iterable[str], *, ordered: bool = False) -> Self:
        """Read INI lines from a decoded text stream (or any str iterable).

        - `[name]` opens a section, replacing a same-named one.
        - lines starting with `;` are comments.
        - `key=value` goes into the current section, the last one wins.
        - anything before the first section header is ignored.

        If `ordered`, every section read is ordered, as in the file.
        """
        section: IniSection | None = None
        for lineno, line in enumerate(self.__lines(buf), 1):
            if lineno == 1:
                # utf-8 BOM, kept by `open(encoding='utf-8')` or None.
                line = line.removeprefix('\ufeff')
            head = line.lstrip()
            if not head:
                continue
            if head[0] == '[':
                end = head.find(']')
                if end < 0:
                    logging.debug(f'line {lineno}: unclosed "[", ignored.')
                    continue
                name = head[1:end].strip()
                if name in self:
                    warn(f'[{name}] declared again, the former one dropped.')
                section = IniSection(comparer=self.__comparer, ordered=ordered)
                self[name] = section
            elif head[0] == ';':
                continue
            elif section is None:
                logging.debug(f'line {lineno}: no section yet, ignored.')
            else:
                key, val = self.__split_pair(line)
                section[key] = IniValue(val)
        return self

    def loads(self, text: str, *, ordered: bool = False) -> Self:
        """Read INI content from a string."""
        return self.readstream(StringIO(text, newline=''), ordered=ordered)

    def writestream(self, buf: TextIO) -> None:
        """Write as INI text, `\\n` for each line break.

        Empty sections are skipped, unless `persist_empty_sections`.
        Values are written as is (no quoting, no escaping).
        """
        for name, section in self.items():
            if not section and not self.persist_empty_sections:
                continue
            buf.write(f'[{name.strip()}]\n')
            for key, val in section.items():
                buf.write(f'{key}={val}\n')
            buf.write('\n')

    def get_contents(self) -> str:
        """Serialize as INI text."""
        buf = StringIO()
        self.writestream(buf)
        return buf.getvalue()
