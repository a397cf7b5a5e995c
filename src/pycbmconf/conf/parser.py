# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 23:15:32
# @Author : Kariko Lin

"""Reading config files into `ConfDocument`, and writing them back.

Write-back goes through a staging file (`<path>.tmp`), which replaces
the config file only once it is completely written. A failed write
therefore never damages what is already on disk.
"""

import logging
import os
from io import StringIO, TextIOBase
from warnings import warn

import chardet

from .consts import (
    COMMENT_MARK,
    FALLBACK_CODEC,
    PAIRING,
    SNIFF_CONFIDENCE,
    STAGING_SUFFIX,
    LineKind
)
from .lines import classify_line, read_logical_line
from .model import ConfDocument, ConfEntry, ConfSection
from ..abstract import FileHandler

_log = logging.getLogger(__name__)

# chardet names of codecs which are not single-byte.
_MULTIBYTE_PREFIXES = (
    'utf', 'gb', 'big5', 'euc', 'shift', 'iso-2022',
    'cp932', 'cp949', 'johab', 'hz'
)


class ConfError(Exception):
    """Base of all config file errors."""
    pass


class ConfReadError(ConfError):
    """The config file cannot be opened, decoded or read."""
    pass


class ConfWriteError(ConfError):
    """Writing back failed. The config file is kept as it was,
    but the staging file may be left on disk."""
    def __init__(self, msg: str, staging_path: str | None = None) -> None:
        super().__init__(msg)
        self.staging_path = staging_path


def guess_codec(raw: bytes) -> str:
    """Pick a single-byte codec for `raw`.

    Whatever `chardet` is not sure about (or sees as plain ascii,
    or as some multi-byte codec) is read as latin-1, which never fails
    and gives back the same bytes on writing.
    """
    codec = chardet.detect(raw)
    if (
        codec is None or codec['encoding'] is None
        or codec['confidence'] < SNIFF_CONFIDENCE
    ):
        return FALLBACK_CODEC
    name = codec['encoding'].lower()
    if name == 'ascii' or name.startswith(_MULTIBYTE_PREFIXES):
        return FALLBACK_CODEC
    return name


class ConfParser(FileHandler[ConfDocument]):
    @property
    def staging_path(self) -> str:
        return self._fn + STAGING_SUFFIX

    @staticmethod
    def readstream(
        buf: TextIOBase, ins: ConfDocument | None = None
    ) -> ConfDocument:
        """Parse a decoded text stream into `ins` (or a new document).

        Comments and raw lines go into the current section like entries.
        A stream error aborts with the document half filled,
        do not use it then.
        """
        if ins is None:
            ins = ConfDocument()
        this_sect = ins.sections[-1]
        while (line := read_logical_line(buf)) is not None:
            kind, name, value, comment = classify_line(line)
            if kind is LineKind.SECTION:
                this_sect = ins.append_section(name, comment)
            else:
                ins.append_entry(this_sect, name, value, comment)
        return ins

    def _decode_file(self) -> StringIO:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()
        if self._codec is not None:
            buf = raw.decode(self._codec)
        else:
            self._codec = guess_codec(raw)
            _log.debug('%s: guessed codec %s', self._fn, self._codec)
            # fallbacks
            try:
                buf = raw.decode(self._codec)
            except UnicodeDecodeError:
                self._codec = FALLBACK_CODEC
                buf = raw.decode(self._codec)
        # keep '\r' as is, the line classifier trims it.
        return StringIO(buf, newline='\n')

    def read(self) -> ConfDocument:
        """Read the whole file named by this parser.

        Raises `ConfReadError` if it does not exist, can't be read,
        or does not decode with the given codec.
        """
        try:
            buf = self._decode_file()
            ret = self.readstream(buf, ConfDocument(self._codec))
        except (OSError, UnicodeError) as e:
            raise ConfReadError(f'cannot read {self._fn}: {e}') from e
        _log.debug('%s: read %r', self._fn, ret)
        return ret

    @staticmethod
    def _section2str(section: ConfSection) -> str:
        return f'[{section.name}]{section.comment}\n'

    @staticmethod
    def _entry2str(entry: ConfEntry) -> str:
        if entry.name:
            return f'{entry.name}{PAIRING}{entry.value}{entry.comment}\n'
        # nameless (or empty named) lines carry no '='.
        return f'{entry.value}{entry.comment}\n'

    @classmethod
    def writestream(cls, instance: ConfDocument, buf: TextIOBase) -> None:
        for sect in instance:
            if not sect.is_implicit:
                buf.write(cls._section2str(sect))
            for entry in sect:
                if not entry.is_raw and (
                    COMMENT_MARK in entry.value or '\n' in entry.value
                ):
                    warn(f'[{sect.name}] {entry.name}: value {entry.value!r}'
                         ' will not read back the same.')
                buf.write(cls._entry2str(entry))

    def write(self, instance: ConfDocument) -> None:
        """Save `instance` to the file named by this parser.

        The text goes to the staging file first, which then replaces the
        config file in one `os.replace()`. On any failure the config file
        is untouched and `ConfWriteError` is raised.
        """
        codec = self._codec or instance.encoding or FALLBACK_CODEC
        staging = self.staging_path
        try:
            with open(staging, 'w', encoding=codec, newline='\n') as fp:
                self.writestream(instance, fp)
                fp.flush()
                os.fsync(fp.fileno())
        except (OSError, UnicodeError) as e:
            raise ConfWriteError(
                f'cannot write {staging}: {e}', staging) from e

        try:
            os.replace(staging, self._fn)
        except OSError as e:
            _log.warning('%s is left behind, %s is unchanged.',
                         staging, self._fn)
            raise ConfWriteError(
                f'cannot replace {self._fn}: {e}', staging) from e
        _log.info('written back %s', self._fn)

    def __str__(self) -> str:
        return "config file: " + super().__str__()
