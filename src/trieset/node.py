#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from dataclasses import dataclass, field
from io import StringIO
from typing import Callable, Iterator, Optional, Self

from sortedcontainers import SortedDict

Edge = tuple['_TrieNode', str]


@dataclass(eq=False)
class _TrieNode:
    """前缀树节点：nxt 按标签的字典序保存子节点"""
    is_end: bool = False
    nxt: SortedDict = field(default_factory=SortedDict)

    def isempty(self) -> bool:
        return len(self.nxt) == 0

    def isdead(self) -> bool:
        return not self.is_end and len(self.nxt) == 0

    def child(self, label: str) -> Optional[Self]:
        return self.nxt.get(label)

    def ensure_child(self, label: str) -> Self:
        nxt = self.nxt.get(label)
        if nxt is None:
            nxt = _TrieNode()
            self.nxt[label] = nxt
        return nxt

    def drop_child(self, label: str) -> None:
        self.nxt.pop(label, None)

    def walk(self, key: str) -> Optional[Self]:
        node = self
        for c in key:
            node = node.nxt.get(c)
            if node is None:
                return None
        return node

    # sibling lookup, used by the cursor to move sideways
    def first(self) -> Optional[Edge]:
        if not self.nxt:
            return None
        label, node = self.nxt.peekitem(0)
        return node, label

    def last(self) -> Optional[Edge]:
        if not self.nxt:
            return None
        label, node = self.nxt.peekitem(-1)
        return node, label

    def after(self, label: str) -> Optional[Edge]:
        i = self.nxt.bisect_right(label)
        if i >= len(self.nxt):
            return None
        label, node = self.nxt.peekitem(i)
        return node, label

    def before(self, label: str) -> Optional[Edge]:
        i = self.nxt.bisect_left(label)
        if i == 0:
            return None
        label, node = self.nxt.peekitem(i - 1)
        return node, label

    def count(self) -> int:
        total = 0
        stack = [self]
        while stack:
            n = stack.pop()
            if n.is_end:
                total += 1
            stack.extend(n.nxt.values())
        return total

    def anyend(self) -> bool:
        stack = [self]
        while stack:
            n = stack.pop()
            if n.is_end:
                return True
            stack.extend(n.nxt.values())
        return False

    def clone(self) -> Self:
        """深拷贝整棵子树，不与原树共享任何节点"""
        root = _TrieNode(self.is_end)
        stack = [(self, root)]
        while stack:
            src, dst = stack.pop()
            for label, n in src.nxt.items():
                copied = _TrieNode(n.is_end)
                dst.nxt[label] = copied
                stack.append((n, copied))
        return root

    def nodes(self) -> Iterator[Self]:
        stack = [self]
        while stack:
            n = stack.pop()
            yield n
            stack.extend(n.nxt.values())

    def stringify(self, sio: StringIO, substringfy: Callable[[str], str] = str) -> None:
        # stack holds text still to write and nodes still to expand, last item first
        stack: list[str | _TrieNode] = [self]
        while stack:
            top = stack.pop()
            if isinstance(top, str):
                sio.write(top)
                continue
            parts: list[str | _TrieNode] = []
            for label, v in top.nxt.items():
                if parts:
                    parts.append(', ')
                parts.append(substringfy(label))
                if not v.isempty():
                    parts.append('*:{' if v.is_end else ':{')
                    parts.append(v)
                    parts.append('}')
            stack.extend(reversed(parts))

    def __str__(self):
        sio = StringIO()
        self.stringify(sio)
        return sio.getvalue()

    def __repr__(self):
        sio = StringIO()
        self.stringify(sio, substringfy=repr)
        return sio.getvalue()
