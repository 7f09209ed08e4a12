#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from trieset.settings import Settings
from trieset.cursor import ConstCursor, ConstReverseCursor, Cursor, ReverseCursor
from trieset.trie import Trie

__all__ = [
    'ConstCursor',
    'ConstReverseCursor',
    'Cursor',
    'ReverseCursor',
    'Settings',
    'Trie',
]
