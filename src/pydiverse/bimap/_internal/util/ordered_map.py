# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")
WT = TypeVar("WT")
A = TypeVar("A")


class OrderedMap(Mapping, Generic[KT, VT]):
    """
    Immutable insertion-ordered mapping.

    All transformations return a new map. Keys only need to be hashable, no ordering
    between keys is required. Inserting a key that is already present replaces its
    value but keeps its position.
    """

    __slots__ = ("__data",)

    def __init__(self, seq: Mapping[KT, VT] | Iterable[tuple[KT, VT]] = tuple()):
        self.__data: dict[KT, VT] = dict(seq)

    @classmethod
    def _wrap(cls, data: dict[KT, VT]) -> OrderedMap[KT, VT]:
        m = cls.__new__(cls)
        m.__data = data
        return m

    @classmethod
    def empty(cls) -> OrderedMap[KT, VT]:
        return cls._wrap({})

    @classmethod
    def singleton(cls, key: KT, value: VT) -> OrderedMap[KT, VT]:
        return cls._wrap({key: value})

    @classmethod
    def from_list(cls, pairs: Iterable[tuple[KT, VT]]) -> OrderedMap[KT, VT]:
        """Later occurrences of a key overwrite earlier ones."""
        return cls._wrap(dict(pairs))

    def __getitem__(self, key: KT) -> VT:
        return self.__data[key]

    def __contains__(self, key) -> bool:
        return key in self.__data

    def __iter__(self) -> Iterator[KT]:
        return iter(self.__data)

    def __len__(self) -> int:
        return len(self.__data)

    def __repr__(self):
        return "OrderedMap({%s})" % ", ".join(
            f"{k!r}: {v!r}" for k, v in self.__data.items()
        )

    def __hash__(self):
        return hash(frozenset(self.__data.items()))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (self.__class__, (list(self.__data.items()),))

    def member(self, key: KT) -> bool:
        return key in self.__data

    def insert(self, key: KT, value: VT) -> OrderedMap[KT, VT]:
        data = self.__data.copy()
        data[key] = value
        return self._wrap(data)

    def update(
        self, key: KT, fn: Callable[[VT | None], VT | None]
    ) -> OrderedMap[KT, VT]:
        """
        Replace the value of `key` with `fn(current)`. `current` is None if the key is
        absent and a result of None removes the key.
        """
        new_value = fn(self.__data.get(key))
        if new_value is None:
            return self.remove(key)
        return self.insert(key, new_value)

    def remove(self, key: KT) -> OrderedMap[KT, VT]:
        if key not in self.__data:
            return self
        data = self.__data.copy()
        del data[key]
        return self._wrap(data)

    def to_list(self) -> list[tuple[KT, VT]]:
        return list(self.__data.items())

    def to_dict(self) -> dict[KT, VT]:
        return self.__data.copy()

    def map(self, fn: Callable[[VT], WT]) -> OrderedMap[KT, WT]:
        return self._wrap({k: fn(v) for k, v in self.__data.items()})

    def map_with_key(self, fn: Callable[[KT, VT], WT]) -> OrderedMap[KT, WT]:
        return self._wrap({k: fn(k, v) for k, v in self.__data.items()})

    def foldl(self, fn: Callable[[A, KT, VT], A], seed: A) -> A:
        acc = seed
        for k, v in self.__data.items():
            acc = fn(acc, k, v)
        return acc

    def foldr(self, fn: Callable[[KT, VT, A], A], seed: A) -> A:
        acc = seed
        for k in reversed(self.__data.keys()):
            acc = fn(k, self.__data[k], acc)
        return acc

    def filter(self, predicate: Callable[[KT, VT], bool]) -> OrderedMap[KT, VT]:
        return self._wrap({k: v for k, v in self.__data.items() if predicate(k, v)})

    def partition(
        self, predicate: Callable[[KT, VT], bool]
    ) -> tuple[OrderedMap[KT, VT], OrderedMap[KT, VT]]:
        accepted, rejected = {}, {}
        for k, v in self.__data.items():
            (accepted if predicate(k, v) else rejected)[k] = v
        return self._wrap(accepted), self._wrap(rejected)

    def union(self, other: Mapping[KT, VT]) -> OrderedMap[KT, VT]:
        """Left-biased: on a key collision the value of `self` is kept."""
        data = self.__data.copy()
        for k, v in other.items():
            data.setdefault(k, v)
        return self._wrap(data)

    def intersect(self, other: Mapping[KT, Any]) -> OrderedMap[KT, VT]:
        return self._wrap({k: v for k, v in self.__data.items() if k in other})

    def diff(self, other: Mapping[KT, Any]) -> OrderedMap[KT, VT]:
        return self._wrap({k: v for k, v in self.__data.items() if k not in other})

    def merge(
        self,
        other: Mapping[KT, WT],
        on_left: Callable[[A, KT, VT], A],
        on_both: Callable[[A, KT, VT, WT], A],
        on_right: Callable[[A, KT, WT], A],
        seed: A,
    ) -> A:
        """
        Three-way fold over the keys of `self` and `other`.

        Keys of `self` are visited first in their order, followed by the keys that
        only appear in `other` in the order of `other`.
        """
        acc = seed
        for k, v in self.__data.items():
            if k in other:
                acc = on_both(acc, k, v, other[k])
            else:
                acc = on_left(acc, k, v)
        for k, w in other.items():
            if k not in self.__data:
                acc = on_right(acc, k, w)
        return acc

    def __or__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.intersect(other)

    def __sub__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.diff(other)
