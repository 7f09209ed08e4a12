import copy
import random

import pytest

from trieset import Trie
from trieset.node import _TrieNode


def test_insert_and_contains():
    t = Trie()
    t.insert('cat')
    t.insert('car')
    t.insert('dog')

    assert t.size() == 3
    assert len(t) == 3
    assert t.contains('cat')
    assert t.contains('ca', Trie.PREFIX_FLAG)
    assert not t.contains('ca')
    assert not t.contains('cats', True)
    assert 'dog' in t
    assert 'do' not in t
    assert list(t) == ['car', 'cat', 'dog']


def test_insert_is_idempotent():
    t = Trie(['abc'])
    before = t.dump_tree()
    t.insert('abc')
    assert len(t) == 1
    assert t.dump_tree() == before


def test_constructor_deduplicates():
    keys = ['b', 'a', 'b', 'c', 'a']
    t = Trie(keys)
    assert len(t) == 3
    assert list(t) == ['a', 'b', 'c']


def test_from_range():
    src = Trie(['a', 'b', 'c', 'd'])
    assert Trie.from_range(src.begin(), src.end()) == src
    stop = src.begin().advance().advance()
    assert list(Trie.from_range(src.begin(), stop)) == ['a', 'b']
    assert list(Trie.from_range(iter(['y', 'x', 'y']))) == ['x', 'y']


def test_empty_string():
    t = Trie()
    assert t.contains('', True)
    assert not t.contains('')
    t.insert('')
    assert t.contains('')
    assert len(t) == 1
    assert list(t) == ['']
    t.erase('')
    assert t.empty()
    assert t.contains('', True)


def test_size_and_empty_by_prefix():
    t = Trie(['cat', 'car', 'dog'])
    assert t.size('ca') == 2
    assert t.size('car') == 1
    assert t.size('x') == 0
    assert not t.empty()
    assert not t.empty('d')
    assert t.empty('x')
    assert Trie().empty()
    assert Trie().size() == 0


def test_erase_single_key():
    t = Trie(['cat', 'car', 'dog'])
    t.erase('car')
    assert t.size() == 2
    assert t.contains('ca', True)
    assert list(t) == ['cat', 'dog']


def test_erase_prefix():
    t = Trie(['cat', 'car', 'dog'])
    t.erase('ca', True)
    assert list(t) == ['dog']
    assert len(t) == 1
    assert t.dump_tree() == 'd:{o:{g}}'


def test_erase_prefix_includes_the_prefix_key():
    t = Trie(['a', 'ab', 'abc', 'abd'])
    t.erase('ab', Trie.PREFIX_FLAG)
    assert list(t) == ['a']
    assert t.dump_tree() == 'a'


def test_erase_prunes_dead_branches():
    t = Trie(['abc'])
    t.erase('abc')
    assert t.dump_tree() == ''
    assert t._root.isempty()

    t = Trie(['ab', 'abcd'])
    t.erase('abcd')
    assert t.dump_tree() == 'a:{b}'

    t = Trie(['abx', 'aby'])
    t.erase('abx')
    assert t.dump_tree() == 'a:{b:{y}}'


def test_erase_absent_is_noop():
    t = Trie(['abc'])
    t.erase('ab')
    t.erase('abcd')
    t.erase('x', True)
    t.erase('abcd', True)
    assert list(t) == ['abc']
    t.erase('abc')
    t.erase('abc')
    assert t.empty()


def test_clear():
    t = Trie(['a', 'b', ''])
    t.clear()
    assert len(t) == 0
    assert list(t) == []
    assert t.dump_tree() == ''
    t.clear()
    assert t.empty()
    t.insert('c')
    assert list(t) == ['c']


def test_remove_and_discard():
    t = Trie(['a'])
    with pytest.raises(KeyError):
        t.remove('b')
    t.discard('b')
    t.remove('a')
    assert t.empty()


def test_non_str_keys():
    t = Trie()
    with pytest.raises(TypeError):
        t.insert(1)  # type: ignore
    with pytest.raises(TypeError):
        t.contains(b'a')  # type: ignore
    assert 1 not in t


def test_longest_prefix():
    t = Trie(['a', 'abc'])
    assert t.longest_prefix('abcd') == 'abc'
    assert t.longest_prefix('abx') == 'a'
    assert t.longest_prefix('b') is None
    assert Trie(['']).longest_prefix('zz') == ''


def test_insert_rolls_back_on_failure(monkeypatch):
    t = Trie(['ab'])
    real = _TrieNode.ensure_child
    calls = []

    def flaky(self, label):
        calls.append(label)
        if len(calls) == 3:
            raise MemoryError
        return real(self, label)

    monkeypatch.setattr(_TrieNode, 'ensure_child', flaky)
    with pytest.raises(MemoryError):
        t.insert('abcdef')
    monkeypatch.undo()

    assert calls == ['c', 'd', 'e']
    assert list(t) == ['ab']
    assert len(t) == 1
    assert t.dump_tree() == 'a:{b}'


def test_copy_is_deep():
    a = Trie(['ab', 'ac'])
    for b in (a.copy(), copy.copy(a), copy.deepcopy(a)):
        assert b == a
        assert not {id(n) for n in a._root.nodes()} & {id(n) for n in b._root.nodes()}
        b.insert('z')
        b.erase('ab')
        assert list(a) == ['ab', 'ac']


def test_move_leaves_source_empty():
    a = Trie(['x', 'y'])
    b = a.move()
    assert list(b) == ['x', 'y']
    assert len(a) == 0
    assert list(a) == []
    a.insert('q')
    assert list(a) == ['q']
    assert list(b) == ['x', 'y']


def test_swap():
    a = Trie(['a'])
    b = Trie(['b', 'c'])
    a.swap(b)
    assert list(a) == ['b', 'c']
    assert list(b) == ['a']
    assert len(a) == 2


def test_long_keys_do_not_recurse():
    key = 'x' * 5000
    t = Trie([key, key[:10]])
    assert t.contains(key)
    assert list(t) == [key[:10], key]
    assert list(reversed(t)) == [key, key[:10]]
    assert t.dump_tree().count('*:{') == 1
    t.erase(key)
    assert list(t) == [key[:10]]
    assert t.size(key[:5]) == 1
    assert Trie([key]).dump_tree() == 'x:{' * 4999 + 'x' + '}' * 4999


def test_matches_builtin_set():
    rng = random.Random(20240229)
    keys = [''.join(rng.choice('abc') for _ in range(rng.randint(0, 5))) for _ in range(200)]
    t = Trie(keys)
    assert len(t) == len(set(keys))
    assert list(t) == sorted(set(keys))
    assert all(t.contains(k) for k in keys)

    doomed = keys[::3]
    for k in doomed:
        t.erase(k)
    remaining = set(keys) - set(doomed)
    assert list(t) == sorted(remaining)
    for p in ('', 'a', 'ab', 'cc', 'bca'):
        assert t.contains(p, True) == (p == '' or any(k.startswith(p) for k in remaining))
        assert t.size(p) == sum(k.startswith(p) for k in remaining)
    assert all(not n.isdead() for n in t._root.nodes() if n is not t._root)


def test_dump_tree_marks_stored_root():
    assert Trie(['', 'a']).dump_tree() == '*:{a}'
    assert Trie(['']).dump_tree() == '*'
    assert Trie(['a', 'ab']).dump_tree() == 'a*:{b}'
    assert Trie().dump_tree() == ''


def test_str_and_repr():
    t = Trie(['b', 'a'])
    assert str(t) == 'a\nb\n'
    assert repr(t) == "Trie(['a', 'b'])"
    assert str(Trie()) == ''
    assert repr(Trie()) == 'Trie()'


def test_write():
    import io
    sio = io.StringIO()
    Trie(['dog', 'cat']).write(sio)
    assert sio.getvalue() == 'cat\ndog\n'
