# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Reads a `T` from one text file, and writes it back there.

    `encoding=None` leaves the codec to the handler to find out.
    """
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
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
        return f'{self._fn} ({self._codec or "auto"})'
