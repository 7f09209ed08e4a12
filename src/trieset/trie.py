#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from collections.abc import Iterable, Set
from io import StringIO
from typing import Any, Iterator, MutableSet, Optional, Self, TextIO

from sortedcontainers import SortedDict

from trieset.cursor import ConstCursor, ConstReverseCursor, Cursor, ReverseCursor, _TrieCursor
from trieset.node import _TrieNode
from trieset.settings import Settings
from trieset.util import checkkey, logger


class Trie(MutableSet[str]):
    """
    A prefix tree holding a set of ``str`` keys.

    The empty string is always present as a prefix, and is a member only
    once inserted. Wherever an operation takes ``is_prefix``, its prefix
    behaviour is a superset of its exact-key behaviour.

    >>> t = Trie(['cat', 'car', 'dog'])
    >>> t.contains('ca'), t.contains('ca', Trie.PREFIX_FLAG)
    (False, True)
    >>> list(t)
    ['car', 'cat', 'dog']
    """

    # Uses key as prefix.
    PREFIX_FLAG = True

    _root: _TrieNode
    _size: int
    # bumped on every structural change; live cursors compare against it
    _version: int

    def __init__(self, keys: Optional[Iterable[str]] = None) -> None:
        self._root = _TrieNode()
        self._size = 0
        self._version = 0
        if keys is not None:
            for key in keys:
                self.insert(key)

    @classmethod
    def from_range(cls, start: Iterable[str], stop: Optional[_TrieCursor] = None) -> Self:
        """Build from the keys between two cursors, or until ``start`` runs out."""
        trie = cls()
        it = start.copy() if isinstance(start, _TrieCursor) else iter(start)
        while stop is None or it != stop:
            try:
                key = next(it)
            except StopIteration:
                break
            trie.insert(key)
        return trie

    # --- container size ---

    def empty(self, prefix: str = '') -> bool:
        if checkkey(prefix) == '':
            return self._size == 0
        node = self._root.walk(prefix)
        return node is None or not node.anyend()

    def size(self, prefix: str = '') -> int:
        if checkkey(prefix) == '':
            return self._size
        node = self._root.walk(prefix)
        return 0 if node is None else node.count()

    def __len__(self) -> int:
        return self._size

    # --- searching ---

    def contains(self, key: str, is_prefix: bool = False) -> bool:
        node = self._root.walk(checkkey(key))
        if node is None:
            return False
        return is_prefix or node.is_end

    def __contains__(self, x: object) -> bool:
        if not isinstance(x, str):
            return False
        return self.contains(x)

    def longest_prefix(self, key: str) -> Optional[str]:
        """Longest stored key that ``key`` starts with."""
        node = self._root
        best = 0 if node.is_end else -1
        for i, c in enumerate(checkkey(key)):
            node = node.child(c)
            if node is None:
                break
            if node.is_end:
                best = i + 1
        return None if best < 0 else key[:best]

    # --- insertion ---

    def insert(self, key: str) -> None:
        node = self._root
        depth = 0
        for c in checkkey(key):
            nxt = node.child(c)
            if nxt is None:
                break
            node = nxt
            depth += 1
        if depth == len(key):
            if node.is_end:
                return
            node.is_end = True
        else:
            # everything created below anchor is new; drop it if anything fails
            anchor = node
            try:
                for c in key[depth:]:
                    node = node.ensure_child(c)
                node.is_end = True
            except BaseException:
                anchor.drop_child(key[depth])
                logger.warning('insert of %r rolled back', key)
                raise
        self._size += 1
        self._version += 1

    def add(self, value: str) -> None:
        self.insert(value)

    # --- deletion ---

    def erase(self, key: str, is_prefix: bool = False) -> None:
        path = self._path(checkkey(key))
        if path is None:
            return
        node = path[-1]
        if is_prefix:
            removed = node.count()
            if removed == 0:
                return
            node.is_end = False
            node.nxt = SortedDict()
            logger.debug('erased %d keys under prefix %r', removed, key)
        else:
            if not node.is_end:
                return
            node.is_end = False
            removed = 1
        self._prune(path, key)
        self._size -= removed
        self._version += 1

    def discard(self, value: str) -> None:
        self.erase(value)

    def clear(self) -> None:
        if self._size:
            logger.debug('clearing %d keys', self._size)
        self.erase('', self.PREFIX_FLAG)

    def _path(self, key: str) -> Optional[list[_TrieNode]]:
        node = self._root
        path = [node]
        for c in key:
            node = node.child(c)
            if node is None:
                return None
            path.append(node)
        return path

    @staticmethod
    def _prune(path: list[_TrieNode], key: str) -> None:
        # path[i] hangs off path[i - 1] under key[i - 1]; the root is never pruned
        while len(path) > 1 and path[-1].isdead():
            path.pop()
            path[-1].drop_child(key[len(path) - 1])

    # --- copy & move ---

    def copy(self) -> Self:
        new = type(self)()
        new._root = self._root.clone()
        new._size = self._size
        return new

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def move(self) -> Self:
        """Hand every node over to a new trie, leaving this one empty."""
        new = type(self)()
        new._root, self._root = self._root, _TrieNode()
        new._size, self._size = self._size, 0
        self._version += 1
        logger.debug('moved %d keys out of %#x', new._size, id(self))
        return new

    def swap(self, other: 'Trie') -> None:
        self._root, other._root = other._root, self._root
        self._size, other._size = other._size, self._size
        self._version += 1
        other._version += 1

    # --- iteration ---

    def begin(self) -> Cursor:
        return Cursor.start(self)

    def end(self) -> Cursor:
        return Cursor.stop(self)

    def rbegin(self) -> ReverseCursor:
        return ReverseCursor.start(self)

    def rend(self) -> ReverseCursor:
        return ReverseCursor.stop(self)

    def cbegin(self) -> ConstCursor:
        return ConstCursor.start(self)

    def cend(self) -> ConstCursor:
        return ConstCursor.stop(self)

    def crbegin(self) -> ConstReverseCursor:
        return ConstReverseCursor.start(self)

    def crend(self) -> ConstReverseCursor:
        return ConstReverseCursor.stop(self)

    def keys(self, prefix: str = '', reverse: bool = False) -> Iterator[str]:
        cursor = ConstReverseCursor if reverse else ConstCursor
        return cursor.start(self, checkkey(prefix))

    def __iter__(self) -> Iterator[str]:
        return self.cbegin()

    def __reversed__(self) -> Iterator[str]:
        return self.crbegin()

    # --- asymmetric binary operations ---

    @staticmethod
    def _iskeys(other: object) -> bool:
        return isinstance(other, Iterable) and not isinstance(other, str)

    def __iadd__(self, rhs: Iterable[str]) -> Self:
        if not self._iskeys(rhs):
            return NotImplemented
        if rhs is self:
            return self
        for key in rhs:
            self.insert(key)
        return self

    def __isub__(self, rhs: Iterable[str]) -> Self:  # type: ignore[override]
        if not self._iskeys(rhs):
            return NotImplemented
        if rhs is self:
            self.clear()
            return self
        for key in rhs:
            self.erase(key)
        return self

    def __add__(self, rhs: Iterable[str]) -> Self:
        if not self._iskeys(rhs):
            return NotImplemented
        result = self.copy()
        result += rhs
        return result

    def __radd__(self, lhs: Iterable[str]) -> Self:
        if not self._iskeys(lhs):
            return NotImplemented
        result = type(self)(lhs)
        result += self
        return result

    def __sub__(self, rhs: Iterable[str]) -> Self:  # type: ignore[override]
        if not self._iskeys(rhs):
            return NotImplemented
        result = self.copy()
        result -= rhs
        return result

    # --- comparison: subset partial order ---

    def _relation(self, other: 'Trie') -> tuple[bool, bool]:
        """``(self <= other, self >= other)`` from one merged pass over both key streams."""
        le = ge = True
        a, b = iter(self), iter(other)
        x, y = next(a, None), next(b, None)
        while x is not None and y is not None and (le or ge):
            if x == y:
                x, y = next(a, None), next(b, None)
            elif x < y:
                le = False
                x = next(a, None)
            else:
                ge = False
                y = next(b, None)
        if x is not None:
            le = False
        if y is not None:
            ge = False
        return le, ge

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Trie):
            return len(self) == len(other) and self._relation(other)[0]
        return super().__eq__(other)

    def __le__(self, other: Set) -> bool:
        if isinstance(other, Trie):
            return self._relation(other)[0]
        return super().__le__(other)

    def __lt__(self, other: Set) -> bool:
        if isinstance(other, Trie):
            le, ge = self._relation(other)
            return le and not ge
        return super().__lt__(other)

    def __ge__(self, other: Set) -> bool:
        if isinstance(other, Trie):
            return self._relation(other)[1]
        return super().__ge__(other)

    def __gt__(self, other: Set) -> bool:
        if isinstance(other, Trie):
            le, ge = self._relation(other)
            return ge and not le
        return super().__gt__(other)

    __hash__ = None  # type: ignore

    # --- output ---

    def write(self, stream: TextIO) -> None:
        """Write every key on its own line, in lexicographic order."""
        sep = Settings()['line_separator']
        for key in self:
            stream.write(key)
            stream.write(sep)

    def dump_tree(self) -> str:
        sio = StringIO()
        if not self._root.is_end:
            self._root.stringify(sio)
        elif self._root.isempty():
            sio.write('*')
        else:
            sio.write('*:{')
            self._root.stringify(sio)
            sio.write('}')
        return sio.getvalue()

    def __str__(self) -> str:
        sio = StringIO()
        self.write(sio)
        return sio.getvalue()

    def __repr__(self) -> str:
        if self._size == 0:
            return self.__class__.__qualname__ + '()'
        return f'{self.__class__.__qualname__}({list(self)!r})'
