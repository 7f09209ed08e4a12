#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from functools import wraps
import logging
import sys
from typing import TypeVar

_T = TypeVar('_T')

def singleton(clas: _T) -> _T:
    _instance = None
    new = clas.__new__
    @wraps(clas.__new__)
    def __new__(cls, *args, **kwargs):
        nonlocal _instance
        if _instance is None:
            _instance = new(cls, *args, **kwargs)
        return _instance
    clas.__new__ = __new__
    return clas

def checkkey(key: object) -> str:
    if not isinstance(key, str):
        raise TypeError(f'trie keys must be str, not {type(key).__name__}')
    return key

logger = logging.Logger('trieset', 'INFO')
def __init():
    fmt = logging.Formatter('[%(levelname)s] %(filename)s:%(lineno)d: %(message)s', None, '%')
    if not logger.hasHandlers():
        logger.addHandler(logging.StreamHandler(sys.stdout))
    for h in logger.handlers:
        h.setFormatter(fmt)
__init()
del __init
