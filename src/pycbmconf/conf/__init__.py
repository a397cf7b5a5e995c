# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:38:44
# @Author : Kariko Lin

from .model import ConfEntry, ConfSection, ConfDocument
from .parser import (
    ConfParser,
    ConfError,
    ConfReadError,
    ConfWriteError
)
from .export import to_mapping, dump_yaml
