# -*- encoding: utf-8 -*-
# @File   : lines.py
# @Time   : 2024/10/12 22:03:51
# @Author : Kariko Lin

"""Line level handling of config files.

A config file is line-oriented. Each logical line is one of:

    ```ini
    # a pure comment line, kept as is
    [section]  # section header, the comment is optional
    name=value  # entry, both sides may be empty
    anything else  # kept verbatim as a raw line
    ```

Nothing here touches the document model, see `parser` for that.
"""

import logging
from io import TextIOBase
from typing import NamedTuple

from .consts import (
    COMMENT_MARK,
    LINE_CHUNK,
    PAIRING,
    SECTION_CLOSE,
    SECTION_OPEN,
    TRAILING_BLANKS,
    LineKind
)

_log = logging.getLogger(__name__)


class ClassifiedLine(NamedTuple):
    kind: LineKind
    name: str | None
    value: str
    comment: str


def read_logical_line(
    stream: TextIOBase, chunk: int = LINE_CHUNK
) -> str | None:
    """Read the next line of `stream`, however long it is.

    The line is collected by `chunk` sized reads until a newline shows up.
    The newline itself is dropped. A last line without newline is returned
    as well, `None` means clean end of stream.

    Stream errors (`OSError`, `UnicodeDecodeError`) are left to the caller.
    """
    parts: list[str] = []
    while piece := stream.readline(chunk):
        if piece[-1] == '\n':
            parts.append(piece[:-1])
            return ''.join(parts)
        parts.append(piece)
    if not parts:
        return None
    return ''.join(parts)


def split_comment(line: str) -> tuple[str, str]:
    """Split a (non pure comment) line into content and comment.

    The comment starts at the blanks right before the first `#` and keeps
    everything up to the end of the line untouched. Without `#` there is
    no comment, and the trailing blanks are simply dropped.
    """
    mark = line.find(COMMENT_MARK)
    if mark < 0:
        return line.rstrip(TRAILING_BLANKS), ''
    content = line[:mark].rstrip(TRAILING_BLANKS)
    return content, line[len(content):]


def classify_line(line: str) -> ClassifiedLine:
    """Tell what kind of line it is, and cut it into its fields.

    Malformed input never raises. A header without `]` takes the rest of
    the line as its name, a line without `=` becomes a raw one.
    """
    if line.startswith(COMMENT_MARK):
        return ClassifiedLine(LineKind.COMMENT, None, '', line)

    content, comment = split_comment(line)
    if content.startswith(SECTION_OPEN):
        name = content[1:]
        close = name.rfind(SECTION_CLOSE)
        if close < 0:
            _log.debug('section header without "%s": %r', SECTION_CLOSE, line)
        else:
            name = name[:close]
        return ClassifiedLine(LineKind.SECTION, name, '', comment)

    name, sep, value = content.partition(PAIRING)
    if not sep:
        return ClassifiedLine(LineKind.RAW, None, content, comment)
    return ClassifiedLine(LineKind.ENTRY, name, value, comment)
