# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Read an INI file from disk into `IniClass`, or write one back.

The text grammar itself lives in `IniClass.readstream()` and
`IniClass.writestream()`; here we only deal with files and codecs.
"""

import logging
from io import StringIO

import chardet

from ..abstract import FileHandler
from .model import IGNORE_CASE, IniClass, KeyComparer

__all__ = ['IniParser']


class IniParser(FileHandler[IniClass]):
    FALLBACK_ENCODING = 'latin-1'
    MIN_CONFIDENCE = 0.8

    @classmethod
    def _decode_file(cls, filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec.get('encoding')
        if encoding is None or codec.get('confidence', 0) < cls.MIN_CONFIDENCE:
            encoding = 'utf-8'
        logging.debug(f'{filename}: guessed encoding {encoding}.')

        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            # latin-1 maps every byte, never fails.
            buf = raw.decode(cls.FALLBACK_ENCODING)
        return StringIO(buf, newline='')

    def read(
        self, *,
        ordered: bool = False,
        comparer: KeyComparer = IGNORE_CASE
    ) -> IniClass:
        """Read the INI file specified by this `IniParser` instance.

        If `ordered`, each section keeps key order as in the file.
        """
        ret = IniClass(comparer)
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong, fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec, newline='') as fp:
                ret.readstream(fp, ordered=ordered)
        except UnicodeDecodeError:
            logging.debug(
                f'{self._fn}: not decodable as {self._codec}, guessing.')
            ret = IniClass(comparer)
            ret.readstream(self._decode_file(self._fn), ordered=ordered)
        logging.info(f'Read {len(ret)} section(s) from {self._fn}.')
        return ret

    def write(self, instance: IniClass) -> None:
        """Save to *one* INI file, overwriting it.

        Note: comments and blank lines of a former read are NOT restored.
        """
        with open(
            self._fn, 'w', encoding=self._codec or 'utf-8', newline='\n'
        ) as fp:
            instance.writestream(fp)
        logging.info(f'Wrote {len(instance)} section(s) to {self._fn}.')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
