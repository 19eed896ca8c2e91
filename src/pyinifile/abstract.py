# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath


class FileHandler[T](metaclass=ABCMeta):
    """Binds a document type to a single file on disk.

    Subclasses own the file for the duration of one `read()`/`write()` call.
    """
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        self._fn = fspath(filename)
        self._codec = encoding

    @property
    def filename(self) -> str:
        return self._fn

    @property
    def encoding(self) -> str | None:
        return self._codec

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
