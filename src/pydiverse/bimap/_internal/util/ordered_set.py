# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Set
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)
U = TypeVar("U", bound=Hashable)
A = TypeVar("A")


class OrderedSet(Set, Generic[T]):
    """
    Immutable set that remembers the order in which its elements were first added.

    Every operation returns a new set, the receiver is never modified. Two ordered
    sets compare equal if they contain the same elements, regardless of order.
    """

    __slots__ = ("__data", "__hash")

    def __init__(self, values: Iterable[T] = tuple()):
        self.__data: dict[T, None] = {v: None for v in values}
        self.__hash = None

    @classmethod
    def _wrap(cls, data: dict[T, None]) -> OrderedSet[T]:
        # takes ownership of `data`, callers must not touch it afterwards
        s = cls.__new__(cls)
        s.__data = data
        s.__hash = None
        return s

    @classmethod
    def _from_iterable(cls, it):
        return cls(it)

    @classmethod
    def empty(cls) -> OrderedSet[T]:
        return cls._wrap({})

    @classmethod
    def singleton(cls, value: T) -> OrderedSet[T]:
        return cls._wrap({value: None})

    @classmethod
    def from_list(cls, values: Iterable[T]) -> OrderedSet[T]:
        return cls(values)

    def __contains__(self, item) -> bool:
        return item in self.__data

    def __iter__(self) -> Iterator[T]:
        yield from self.__data.keys()

    def __reversed__(self) -> Iterator[T]:
        return reversed(self.__data.keys())

    def __len__(self) -> int:
        return len(self.__data)

    def __repr__(self):
        return "OrderedSet({%s})" % ", ".join(repr(e) for e in self)

    def __hash__(self):
        if self.__hash is None:
            self.__hash = hash(frozenset(self.__data))
        return self.__hash

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (self.__class__, (list(self),))

    def member(self, value: T) -> bool:
        return value in self.__data

    def insert(self, value: T) -> OrderedSet[T]:
        if value in self.__data:
            return self
        data = self.__data.copy()
        data[value] = None
        return self._wrap(data)

    def remove(self, value: T) -> OrderedSet[T]:
        """Return a set without `value`. Removing an absent element is a no-op."""
        if value not in self.__data:
            return self
        data = self.__data.copy()
        del data[value]
        return self._wrap(data)

    def to_list(self) -> list[T]:
        return list(self.__data)

    def map(self, fn: Callable[[T], U]) -> OrderedSet[U]:
        return OrderedSet(fn(v) for v in self.__data)

    def filter(self, predicate: Callable[[T], bool]) -> OrderedSet[T]:
        return self._wrap({v: None for v in self.__data if predicate(v)})

    def partition(
        self, predicate: Callable[[T], bool]
    ) -> tuple[OrderedSet[T], OrderedSet[T]]:
        accepted, rejected = {}, {}
        for v in self.__data:
            (accepted if predicate(v) else rejected)[v] = None
        return self._wrap(accepted), self._wrap(rejected)

    def foldl(self, fn: Callable[[A, T], A], seed: A) -> A:
        acc = seed
        for v in self.__data:
            acc = fn(acc, v)
        return acc

    def foldr(self, fn: Callable[[T, A], A], seed: A) -> A:
        acc = seed
        for v in reversed(self.__data.keys()):
            acc = fn(v, acc)
        return acc

    def union(self, other: Iterable[T]) -> OrderedSet[T]:
        data = self.__data.copy()
        for v in other:
            data.setdefault(v, None)
        return self._wrap(data)

    def intersect(self, other: Iterable[T]) -> OrderedSet[T]:
        if not isinstance(other, Set):
            other = OrderedSet(other)
        return self._wrap({v: None for v in self.__data if v in other})

    def diff(self, other: Iterable[T]) -> OrderedSet[T]:
        if not isinstance(other, Set):
            other = OrderedSet(other)
        return self._wrap({v: None for v in self.__data if v not in other})

    def __or__(self, other):
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.intersect(other)

    def __sub__(self, other):
        if not isinstance(other, Iterable):
            return NotImplemented
        return self.diff(other)
