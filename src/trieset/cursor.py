#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

"""
Bidirectional cursors over the keys of a :class:`~trieset.trie.Trie`.

All four public cursor types share the walk implemented by
:class:`_TrieCursor`: a depth-first preorder over the node tree, visiting
children in ascending label order. A node yields its key when ``is_end`` is
set, so the forward walk produces keys in strict lexicographic order and the
reverse walk produces the exact reverse sequence.

Every cursor has a single sentinel position. ``end()``/``rend()`` sit on it;
advancing from the last key reaches it and retreating from it moves back to
the last key. Dereferencing or advancing the sentinel raises ``IndexError``.
Any structural change to the trie invalidates its live cursors; using one
afterwards raises ``RuntimeError``.
"""

from typing import TYPE_CHECKING, Iterator, Optional, Self

from trieset.node import Edge, _TrieNode

if TYPE_CHECKING:
    from trieset.trie import Trie


class _TrieCursor(Iterator[str]):
    reverse: bool = False
    readonly: bool = False

    _stack: Optional[list[_TrieNode]]
    _labels: list[str]

    def __init__(self, trie: 'Trie', prefix: str = '') -> None:
        self._trie = trie
        self._version = trie._version
        # path from the root down to the prefix node; the walk never climbs above it
        self._top: Optional[tuple[list[_TrieNode], list[str]]] = None
        stack = [trie._root]
        for c in prefix:
            nxt = stack[-1].child(c)
            if nxt is None:
                break
            stack.append(nxt)
        else:
            self._top = stack, list(prefix)
        self._stack = None
        self._labels = []

    # --- construction ---

    @classmethod
    def start(cls, trie: 'Trie', prefix: str = '') -> Self:
        """Cursor on the first key in this cursor's direction."""
        cur = cls(trie, prefix)
        cur._restart(cls.reverse)
        return cur

    @classmethod
    def stop(cls, trie: 'Trie', prefix: str = '') -> Self:
        """Cursor on the sentinel."""
        return cls(trie, prefix)

    def copy(self) -> Self:
        cur = object.__new__(type(self))
        cur._trie = self._trie
        cur._version = self._version
        cur._top = self._top
        cur._stack = None if self._stack is None else list(self._stack)
        cur._labels = list(self._labels)
        return cur

    __copy__ = copy

    # --- public protocol ---

    @property
    def at_end(self) -> bool:
        self._check()
        return self._stack is None

    @property
    def key(self) -> str:
        self._check()
        if self._stack is None:
            raise IndexError('cannot dereference a cursor on its sentinel')
        return ''.join(self._labels)

    def advance(self) -> Self:
        self._check()
        if self._stack is None:
            raise IndexError('cannot advance a cursor past its sentinel')
        self._step(backward=self.reverse)
        return self

    def retreat(self) -> Self:
        self._check()
        if self._stack is None:
            if self._top is None:
                raise IndexError('cannot retreat in an empty range')
            self._restart(not self.reverse)
            if self._stack is None:
                raise IndexError('cannot retreat in an empty range')
        else:
            self._step(backward=not self.reverse)
        return self

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> str:
        if self.at_end:
            raise StopIteration
        key = self.key
        self.advance()
        return key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _TrieCursor):
            return NotImplemented
        if self._trie is not other._trie:
            return False
        if self._stack is None or other._stack is None:
            return self._stack is other._stack
        return self._stack[-1] is other._stack[-1]

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        if self._stack is None:
            return f'<{type(self).__name__} at sentinel>'
        return f'<{type(self).__name__} at {"".join(self._labels)!r}>'

    # --- the walk ---

    def _check(self) -> None:
        if self._trie._version != self._version:
            raise RuntimeError('trie changed while a cursor was in use')

    def _restart(self, backward: bool) -> None:
        if self._top is None:
            self._stack = None
            return
        stack, labels = self._top
        self._stack, self._labels = list(stack), list(labels)
        if backward:
            self._descend_last()
            if not self._stack[-1].is_end:
                self._step(backward=True)
        elif not self._stack[-1].is_end:
            self._step(backward=False)

    def _step(self, backward: bool) -> None:
        move = self._pred if backward else self._succ
        while move():
            if self._stack[-1].is_end:  # type: ignore
                return
        self._stack = None
        self._labels = []

    def _floor(self) -> int:
        return len(self._top[0]) if self._top is not None else 1

    def _push(self, edge: Edge) -> None:
        node, label = edge
        self._stack.append(node)  # type: ignore
        self._labels.append(label)

    def _pop(self) -> str:
        self._stack.pop()  # type: ignore
        return self._labels.pop()

    def _descend_last(self) -> None:
        edge = self._stack[-1].last()  # type: ignore
        while edge is not None:
            self._push(edge)
            edge = edge[0].last()

    def _succ(self) -> bool:
        """Move to the next node in preorder; False once the subtree is exhausted."""
        stack = self._stack
        edge = stack[-1].first()  # type: ignore
        if edge is not None:
            self._push(edge)
            return True
        floor = self._floor()
        while len(stack) > floor:  # type: ignore
            label = self._pop()
            edge = stack[-1].after(label)  # type: ignore
            if edge is not None:
                self._push(edge)
                return True
        return False

    def _pred(self) -> bool:
        """Move to the previous node in preorder; False once the subtree is exhausted."""
        stack = self._stack
        if len(stack) <= self._floor():  # type: ignore
            return False
        label = self._pop()
        edge = stack[-1].before(label)  # type: ignore
        if edge is not None:
            self._push(edge)
            self._descend_last()
        return True


class Cursor(_TrieCursor):
    """Forward cursor, ``begin()``/``end()``."""


class ReverseCursor(_TrieCursor):
    """Reverse cursor, ``rbegin()``/``rend()``."""
    reverse = True


class ConstCursor(_TrieCursor):
    """Read-only forward cursor, ``cbegin()``/``cend()``."""
    readonly = True


class ConstReverseCursor(_TrieCursor):
    """Read-only reverse cursor, ``crbegin()``/``crend()``."""
    reverse = True
    readonly = True
