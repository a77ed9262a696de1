# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.containers import index
from pydiverse.bimap._internal.containers.base import Container
from pydiverse.bimap._internal.util import OrderedMap, OrderedSet

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT", bound=Hashable)
WT = TypeVar("WT", bound=Hashable)


class BiDict(Container, Mapping, Generic[KT, VT]):
    """
    Many to one bidirectional dictionary.

    Every key maps to exactly one value, but a value may be shared by several keys.
    To go from key to value use `get`, to go from value to the set of its keys use
    `get_reverse`. Both directions are kept consistent by every operation.

    A BiDict is immutable: `insert`, `remove` and friends return a new BiDict and
    leave the receiver untouched.

    Examples
    --------
    >>> pets = BiDict.from_list([("Tom", "cat"), ("Jerry", "mouse"), ("Spike", "cat")])
    >>> pets.get_reverse("cat")
    OrderedSet({'Tom', 'Spike'})
    >>> pets.remove("Tom").get_reverse("cat")
    OrderedSet({'Spike'})
    """

    __slots__ = ("_reverse",)

    _forward: OrderedMap[KT, VT]
    _reverse: OrderedMap[VT, OrderedSet[KT]]

    def __init__(self, seq: Mapping[KT, VT] | Iterable[tuple[KT, VT]] = tuple(), /):
        self._forward = OrderedMap(seq)
        self._reverse = index.reverse_of_single(self._forward)

    @classmethod
    def _from_indexes(
        cls,
        forward: OrderedMap[KT, VT],
        reverse: OrderedMap[VT, OrderedSet[KT]] | None = None,
    ) -> BiDict[KT, VT]:
        # without a reverse index, it gets derived from the forward index
        d = cls.__new__(cls)
        d._forward = forward
        d._reverse = index.reverse_of_single(forward) if reverse is None else reverse
        return d

    # -- construction

    @classmethod
    def empty(cls) -> BiDict[KT, VT]:
        return cls._from_indexes(OrderedMap.empty(), OrderedMap.empty())

    @classmethod
    def singleton(cls, key: KT, value: VT) -> BiDict[KT, VT]:
        return cls._from_indexes(
            OrderedMap.singleton(key, value),
            OrderedMap.singleton(value, OrderedSet.singleton(key)),
        )

    @classmethod
    def from_list(cls, pairs: Iterable[tuple[KT, VT]]) -> BiDict[KT, VT]:
        """Later pairs overwrite earlier pairs with the same key."""
        return cls._from_indexes(OrderedMap.from_list(pairs))

    @classmethod
    def from_dict(cls, mapping: Mapping[KT, VT]) -> BiDict[KT, VT]:
        errors.check_arg_type(Mapping, "BiDict.from_dict", "mapping", mapping)
        if isinstance(mapping, OrderedMap):
            return cls._from_indexes(mapping)
        return cls._from_indexes(OrderedMap(mapping))

    def to_dict(self) -> dict[KT, VT]:
        return self._forward.to_dict()

    # -- queries

    def __getitem__(self, key: KT) -> VT:
        return self._forward[key]

    def __iter__(self) -> Iterator[KT]:
        return iter(self._forward)

    def __len__(self) -> int:
        return len(self._forward)

    def get(self, key: KT, default: VT | None = None) -> VT | None:
        return self._forward.get(key, default)

    def get_reverse(self, value: VT) -> OrderedSet[KT]:
        """All keys that map to `value`. Empty if there are none."""
        return self._reverse.get(value, OrderedSet.empty())

    def keys(self) -> list[KT]:
        return list(self._forward.keys())

    def values(self) -> list[VT]:
        return list(self._forward.values())

    def items(self) -> list[tuple[KT, VT]]:
        return self._forward.to_list()

    def to_list(self) -> list[tuple[KT, VT]]:
        return self._forward.to_list()

    def to_reverse_list(self) -> list[tuple[VT, OrderedSet[KT]]]:
        """
        `(value, keys)` pairs. Values are ordered by their first appearance in the
        forward index and the keys of each value follow forward order.
        """
        return index.reverse_of_single(self._forward).to_list()

    # -- single entry updates

    def insert(self, key: KT, value: VT) -> BiDict[KT, VT]:
        """
        Map `key` to `value`. If `key` was mapped to another value before, it is
        removed from the reverse entry of that old value.
        """
        reverse = self._reverse
        if key in self._forward:
            old_value = self._forward[key]
            if old_value == value:
                return self
            reverse = index.discard_from_set(reverse, old_value, key)
        return self._from_indexes(
            self._forward.insert(key, value),
            index.add_to_set(reverse, value, key),
        )

    def update(self, key: KT, fn: Callable[[VT | None], VT | None]) -> BiDict[KT, VT]:
        """
        Replace the value of `key` by `fn(current)`.

        `current` is None if `key` is absent. If `fn` returns None, `key` is removed.
        """
        errors.check_callable("BiDict.update", "fn", fn)
        new_value = fn(self._forward.get(key))
        if new_value is None:
            return self.remove(key)
        return self.insert(key, new_value)

    def remove(self, key: KT) -> BiDict[KT, VT]:
        """Remove `key`. Removing an absent key returns an equal BiDict."""
        if key not in self._forward:
            return self
        return self._from_indexes(
            self._forward.remove(key),
            index.discard_from_set(self._reverse, self._forward[key], key),
        )

    # -- bulk transformations, the reverse index is derived from scratch

    def map(self, fn: Callable[[VT], WT]) -> BiDict[KT, WT]:
        errors.check_callable("BiDict.map", "fn", fn)
        return self._from_indexes(self._forward.map(fn))

    def filter(self, predicate: Callable[[KT, VT], bool]) -> BiDict[KT, VT]:
        """Keep the entries for which `predicate(key, value)` holds."""
        errors.check_callable("BiDict.filter", "predicate", predicate)
        return self._from_indexes(self._forward.filter(predicate))

    def partition(
        self, predicate: Callable[[KT, VT], bool]
    ) -> tuple[BiDict[KT, VT], BiDict[KT, VT]]:
        errors.check_callable("BiDict.partition", "predicate", predicate)
        accepted, rejected = self._forward.partition(predicate)
        return self._from_indexes(accepted), self._from_indexes(rejected)

    def union(self, other: BiDict[KT, VT]) -> BiDict[KT, VT]:
        """Entries of both dictionaries. On a key collision, `self` wins."""
        self._check_other("union", other)
        return self._from_indexes(self._forward.union(other._forward))

    def intersect(self, other: BiDict[KT, VT]) -> BiDict[KT, VT]:
        self._check_other("intersect", other)
        return self._from_indexes(self._forward.intersect(other._forward))

    def diff(self, other: BiDict[KT, VT]) -> BiDict[KT, VT]:
        self._check_other("diff", other)
        return self._from_indexes(self._forward.diff(other._forward))

    def __or__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.intersect(other)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.diff(other)
