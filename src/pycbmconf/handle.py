# -*- encoding: utf-8 -*-
# @File   : handle.py
# @Time   : 2024/10/13 10:51:27
# @Author : Kariko Lin

"""Config file handles, the part the driver layer actually uses.

    ```python
    with ConfHandle.create('/etc/opencbm.conf') as conf:
        plugin = conf.get(None, 'default')
        conf.set('xu1541', 'port', 'usb0')
    # written back here, if anything was set.
    ```

A handle is meant for one caller. Nothing here guards against other
threads or processes working on the same file.
"""

import logging
import os
from types import TracebackType
from typing import Self

from .conf import ConfDocument, ConfError, ConfParser, ConfReadError

_log = logging.getLogger(__name__)


class ConfClosedError(ConfError):
    """The handle has been closed already."""
    pass


class ConfHandle:
    def __init__(self, parser: ConfParser, doc: ConfDocument) -> None:
        self._parser = parser
        self._doc: ConfDocument | None = doc
        self.dirty = False

    @classmethod
    def open(cls, path: str, encoding: str | None = None) -> Self:
        """Open an existing config file, raises `ConfReadError` otherwise."""
        parser = ConfParser(os.fspath(path), encoding)
        return cls(parser, parser.read())

    @classmethod
    def create(cls, path: str, encoding: str | None = None) -> Self:
        """Like `open()`, but a missing file is created empty first."""
        path = os.fspath(path)
        if not os.path.exists(path):
            try:
                with open(path, 'x'):
                    pass
            except FileExistsError:
                pass
            except OSError as e:
                raise ConfReadError(f'cannot create {path}: {e}') from e
            _log.info('created empty config file %s', path)
        return cls.open(path, encoding)

    @property
    def path(self) -> str:
        return self._parser.filename

    @property
    def staging_path(self) -> str:
        return self._parser.staging_path

    @property
    def closed(self) -> bool:
        return self._doc is None

    @property
    def document(self) -> ConfDocument:
        if self._doc is None:
            raise ConfClosedError(f'{self.path} has been closed.')
        return self._doc

    def get(self, section: str | None, entry: str) -> str | None:
        """Value of `entry` in `section`, `None` if there is no such entry.

        `section=None` is the part before the first header.
        """
        found = self.document.find_entry(section, entry)
        return None if found is None else found.value

    def has(self, section: str | None, entry: str) -> bool:
        return self.document.find_entry(section, entry) is not None

    def set(self, section: str | None, entry: str, value: str) -> None:
        """Set `entry` in `section` to `value`, creating both if needed.

        New sections go to the end of the file, new entries after the
        last named entry of their section.
        """
        found = self.document.find_entry(section, entry, create=True)
        found.value = str(value)
        self.dirty = True

    def flush(self) -> None:
        """Write back now if anything has been set since the last time.

        Raises `ConfWriteError`, in which case it stays dirty.
        """
        doc = self.document
        if not self.dirty:
            return
        self._parser.write(doc)
        self.dirty = False

    def close(self) -> None:
        """Flush, then drop the document.

        The document is dropped even if writing fails, and the
        `ConfWriteError` is raised afterwards. Closing twice does nothing.
        """
        if self._doc is None:
            return
        try:
            self.flush()
        finally:
            self._doc = None
            self.dirty = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = 'closed' if self.closed else ('dirty' if self.dirty else 'open')
        return f'<ConfHandle {self.path!r} ({state})>'


# C like entries, for callers that rather check return values.
# failures are logged, not raised.

def open_config(path: str, encoding: str | None = None) -> ConfHandle | None:
    try:
        return ConfHandle.open(path, encoding)
    except ConfError as e:
        _log.warning('%s', e)
        return None


def create_config(path: str, encoding: str | None = None) -> ConfHandle | None:
    try:
        return ConfHandle.create(path, encoding)
    except ConfError as e:
        _log.warning('%s', e)
        return None


def close_config(handle: ConfHandle | None) -> bool:
    if handle is None:
        return True
    try:
        handle.close()
    except ConfError as e:
        _log.warning('%s', e)
        return False
    return True


def get_data(
    handle: ConfHandle, section: str | None, entry: str
) -> str | None:
    return handle.get(section, entry)


def set_data(
    handle: ConfHandle, section: str | None, entry: str, value: str
) -> bool:
    try:
        handle.set(section, entry, value)
    except ConfError as e:
        _log.warning('%s', e)
        return False
    return True
