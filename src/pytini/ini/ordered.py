# -*- encoding: utf-8 -*-
# @File   : ordered.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

"""
Insertion-ordered hash map, used for both the section table of a document
and the key/value table of every section.

Layout is a `dict` index (key -> slot number) over a growable slot list.
Removing a key leaves a tombstone (`None`) in its slot, so the remaining
entries never move relative to each other. Once tombstones outnumber live
entries the slot list gets compacted, which is not visible from outside.

Builtin `dict` happens to keep order as well, but we don't lean on that:
the slot list is what defines the iteration order here.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, overload

# don't bother compacting tiny maps.
_COMPACT_THRESHOLD = 8


@dataclass(slots=True)
class Entry[K, V]:
    """A live slot. `value` is writable; `key` should be treated read only."""
    key: K
    value: V


class OrderedMap[K, V](MutableMapping[K, V]):
    """`dict`-like container that iterates in insertion order.

    - updating an existing key keeps its position;
    - removing a key and inserting it again appends it at the end;
    - lookup, insertion and removal are O(1) amortized.

    Like `dict`, inserting a *new* key or removing one while a traversal is
    running makes that traversal raise `RuntimeError` on its next step.
    Assigning to keys that already exist is fine at any time.
    """

    def __init__(
        self,
        pairs: Mapping[K, V] | Iterable[tuple[K, V]] = (), /
    ) -> None:
        self.__index: dict[K, int] = {}
        self.__slots: list[Entry[K, V] | None] = []
        self.__dead = 0
        # bumped on every structural change, checked by running iterators.
        self.__stamp = 0
        self.update(pairs)

    def __getitem__(self, key: K) -> V:
        entry = self.__slots[self.__index[key]]
        assert entry is not None, 'index points to a removed slot'
        return entry.value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        pos = self.__index.pop(key)
        self.__slots[pos] = None
        self.__dead += 1
        self.__stamp += 1
        if (self.__dead >= _COMPACT_THRESHOLD
                and self.__dead > len(self.__index)):
            self.__compact()

    def __contains__(self, key: object) -> bool:
        return key in self.__index

    def __len__(self) -> int:
        return len(self.__index)

    def __iter__(self) -> Iterator[K]:
        for entry in self._entries():
            yield entry.key

    def __repr__(self) -> str:
        pairs = ', '.join(f'{k!r}: {v!r}' for k, v in self.iter())
        return f'{type(self).__name__}({{{pairs}}})'

    def __compact(self) -> None:
        live = [i for i in self.__slots if i is not None]
        self.__slots = live
        self.__index = {entry.key: pos for pos, entry in enumerate(live)}
        self.__dead = 0

    def _entries(self) -> Iterator[Entry[K, V]]:
        stamp = self.__stamp
        slots = self.__slots
        pos = 0
        while pos < len(slots):
            if stamp != self.__stamp:
                raise RuntimeError(
                    f'{type(self).__name__} changed size during iteration')
            entry = slots[pos]
            pos += 1
            if entry is not None:
                yield entry
        if stamp != self.__stamp:
            raise RuntimeError(
                f'{type(self).__name__} changed size during iteration')

    def insert(self, key: K, value: V) -> V | None:
        """Insert or overwrite `key`.

        Returns the previous value (the entry stays where it was),
        or `None` if the key is new (the entry goes to the end).
        """
        if key in self.__index:
            entry = self.__slots[self.__index[key]]
            assert entry is not None, 'index points to a removed slot'
            old, entry.value = entry.value, value
            return old
        self.__append(key, value)
        return None

    def __append(self, key: K, value: V) -> None:
        self.__index[key] = len(self.__slots)
        self.__slots.append(Entry(key, value))
        self.__stamp += 1

    def setdefault_with(self, key: K, factory: Callable[[], V]) -> V:
        """Get the value of `key`, creating it with `factory()` if missing.

        Only one lookup, and `factory` is not called when the key exists.
        """
        if key in self.__index:
            return self[key]
        value = factory()
        self.__append(key, value)
        return value

    @overload
    def remove(self, key: K) -> V | None: ...
    @overload
    def remove(self, key: K, default: Any) -> V | Any: ...

    def remove(self, key, default=None):
        """Remove `key` if present and return its value, else `default`."""
        if key not in self.__index:
            return default
        value = self[key]
        del self[key]
        return value

    def clear(self) -> None:
        self.__index.clear()
        self.__slots = []
        self.__dead = 0
        self.__stamp += 1

    def iter(self) -> Iterator[tuple[K, V]]:
        """Lazy `(key, value)` pairs in insertion order."""
        for entry in self._entries():
            yield entry.key, entry.value

    def iter_mut(self) -> Iterator[Entry[K, V]]:
        """Lazy entries in insertion order, with writable `.value`."""
        return self._entries()

    def copy(self) -> 'OrderedMap[K, V]':
        return type(self)(self.iter())
