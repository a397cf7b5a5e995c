# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/13 14:22:09
# @Author : Kariko Lin

"""Plain views of a `ConfDocument`, mostly for inspecting config files.

Only what a lookup would give is exported: raw lines and comments
are skipped, and for duplicates the first one wins.
"""

from io import TextIOBase

import yaml

from .model import ConfDocument


def to_mapping(doc: ConfDocument) -> dict[str | None, dict[str, str]]:
    """`{section: {name: value}}`, the implicit section keyed by `None`."""
    ret: dict[str | None, dict[str, str]] = {}
    for sect in doc:
        pairs = ret.setdefault(sect.name, {})
        if sect.is_implicit or sect is doc.find_section(sect.name):
            for i in sect:
                if not i.is_raw:
                    pairs.setdefault(i.name, i.value)
    return ret


def dump_yaml(doc: ConfDocument, stream: TextIOBase | None = None) -> str | None:
    """Dump `to_mapping(doc)` as yaml, in document order.

    Returns the text if no `stream` is given.
    """
    return yaml.safe_dump(
        to_mapping(doc), stream,
        allow_unicode=True, default_flow_style=False, sort_keys=False)
