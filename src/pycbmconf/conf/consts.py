# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:06
# @Author : Kariko Lin

from enum import Enum

COMMENT_MARK = '#'
SECTION_OPEN = '['
SECTION_CLOSE = ']'
PAIRING = '='

# chars swallowed from the right of a content part.
TRAILING_BLANKS = ' \t\r\n'

# appended to the config path while writing back.
STAGING_SUFFIX = '.tmp'

# physical read size. a logical line may span any number of these.
LINE_CHUNK = 256

# single-byte, maps every byte value. used when sniffing is inconclusive.
FALLBACK_CODEC = 'latin-1'
SNIFF_CONFIDENCE = 0.8


class LineKind(str, Enum):
    COMMENT = 'comment'
    SECTION = 'section'
    ENTRY = 'entry'
    RAW = 'raw'
