# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:41:17
# @Author : Kariko Lin

"""In-memory config document.

Unlike `configparser`, nothing is merged or normalized here.
Every line read becomes an element, in file order, so that writing
the document back gives the very same text (comments, raw lines
and duplicates included).

    ```ini
    # lines before any header belong to the implicit section
    [device]      # ConfSection(name='device', comment='      # ...')
    port=usb0     # ConfEntry(name='port', value='usb0', ...)
    not a pair    # ConfEntry(name=None, value='not a pair', ...)
    ```
"""

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ConfEntry:
    """One line of a section.

    `name` is `None` for raw lines and pure comments, they are kept for
    writing back only and never found by a lookup.
    """
    name: str | None
    value: str = ''
    comment: str = ''

    @property
    def is_raw(self) -> bool:
        return self.name is None


@dataclass
class ConfSection:
    name: str | None
    comment: str = ''
    entries: list[ConfEntry] = field(default_factory=list)

    @property
    def is_implicit(self) -> bool:
        return self.name is None

    def __iter__(self) -> Iterator[ConfEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, name: str) -> ConfEntry | None:
        """First entry called `name`, in document order."""
        for i in self.entries:
            if i.name is not None and i.name == name:
                return i
        return None

    def last_named_index(self) -> int:
        """Index of the last non raw entry, -1 if there is none.

        New entries go right after it, so they don't end up below
        comments which are meant for the next section.
        """
        for idx in range(len(self.entries) - 1, -1, -1):
            if not self.entries[idx].is_raw:
                return idx
        return -1


class ConfDocument:
    """Ordered sections of one config file.

    The first section is always there and unnamed. It holds whatever
    comes before the first `[header]`, even if that is nothing at all.
    """
    def __init__(self, encoding: str | None = None) -> None:
        self._sections: list[ConfSection] = [ConfSection(None)]
        self.encoding = encoding

    @property
    def sections(self) -> list[ConfSection]:
        return self._sections

    @property
    def implicit(self) -> ConfSection:
        return self._sections[0]

    def __iter__(self) -> Iterator[ConfSection]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return '<ConfDocument { .sections = %d, .entries = %d }>' % (
            len(self._sections), sum(len(i) for i in self._sections))

    def append_section(self, name: str, comment: str = '') -> ConfSection:
        # the unnamed one is created by __init__ only.
        if name is None:
            raise ValueError('only the implicit section can be unnamed.')
        ret = ConfSection(name, comment)
        self._sections.append(ret)
        return ret

    @staticmethod
    def append_entry(
        section: ConfSection,
        name: str | None,
        value: str = '',
        comment: str = '', *,
        after: int | None = None
    ) -> ConfEntry:
        """Add an entry to `section`.

        By default it goes to the end. With `after`, it is inserted right
        behind the entry at that index, and `after=-1` means at the top.
        """
        ret = ConfEntry(name, value, comment)
        if after is None:
            section.entries.append(ret)
        else:
            section.entries.insert(after + 1, ret)
        return ret

    def find_section(self, name: str | None) -> ConfSection | None:
        """First section called `name`. `None` is the implicit one."""
        if name is None:
            return self.implicit
        for i in self._sections[1:]:
            if i.name == name:
                return i
        return None

    def find_entry(
        self, section: str | None, name: str, create: bool = False
    ) -> ConfEntry | None:
        """Look `name` up in the first section called `section`.

        With `create`, a missing section is appended after the last one,
        and a missing entry is placed after the last named entry of its
        section (or at the top, if there is none), with empty value.
        Otherwise a miss gives `None`.
        """
        sect = self.find_section(section)
        if sect is not None:
            if (found := sect.find(name)) is not None:
                return found
        if not create:
            return None
        if sect is None:
            sect = self.append_section(section)
        return self.append_entry(sect, name, after=sect.last_named_index())
