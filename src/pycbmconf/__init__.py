# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:36:10
# @Author : Kariko Lin

import logging

from .conf import (
    ConfDocument, ConfSection, ConfEntry, ConfParser,
    ConfError, ConfReadError, ConfWriteError,
    to_mapping, dump_yaml
)
from .handle import (
    ConfHandle, ConfClosedError,
    open_config, create_config, close_config, get_data, set_data
)

__all__ = [
    'ConfDocument', 'ConfSection', 'ConfEntry', 'ConfParser',
    'ConfError', 'ConfReadError', 'ConfWriteError', 'ConfClosedError',
    'ConfHandle', 'open_config', 'create_config', 'close_config',
    'get_data', 'set_data', 'to_mapping', 'dump_yaml'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
