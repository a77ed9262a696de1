# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.containers import index
from pydiverse.bimap._internal.containers.base import Container
from pydiverse.bimap._internal.util import OrderedMap, OrderedSet, group_pairs

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT", bound=Hashable)
WT = TypeVar("WT", bound=Hashable)


class MultiDict(Container, Generic[KT, VT]):
    """
    One to many dictionary: every key maps to a set of values.

    A key is present exactly if its set is non-empty. Looking up an unknown key gives
    the empty set. `len()` is the number of `(key, value)` pairs and iterating a
    MultiDict yields these pairs.
    """

    __slots__ = ()

    _forward: OrderedMap[KT, OrderedSet[VT]]

    def __init__(
        self,
        seq: Mapping[KT, Iterable[VT]] | Iterable[tuple[KT, Iterable[VT]]] = tuple(),
        /,
    ):
        if isinstance(seq, Mapping):
            seq = seq.items()
        self._forward = index.normalize(seq)

    @classmethod
    def _from_forward(cls, forward: OrderedMap[KT, OrderedSet[VT]]) -> MultiDict[KT, VT]:
        d = cls.__new__(cls)
        d._forward = forward
        return d

    # -- construction

    @classmethod
    def empty(cls) -> MultiDict[KT, VT]:
        return cls._from_forward(OrderedMap.empty())

    @classmethod
    def singleton(cls, key: KT, value: VT) -> MultiDict[KT, VT]:
        return cls._from_forward(OrderedMap.singleton(key, OrderedSet.singleton(value)))

    @classmethod
    def from_list(cls, entries: Iterable[tuple[KT, Iterable[VT]]]) -> MultiDict[KT, VT]:
        """
        Build from `(key, values)` entries. The values of a key that occurs several
        times are merged, keys with no values are left out.
        """
        return cls._from_forward(index.normalize(entries))

    @classmethod
    def from_flat_list(cls, pairs: Iterable[tuple[KT, VT]]) -> MultiDict[KT, VT]:
        """
        Build from single `(key, value)` pairs.

        Pairs are grouped by key over the whole input, not only within runs of
        adjacent pairs. Keys keep the order of their first occurrence and values keep
        their relative order within the key. Duplicate pairs collapse.

        >>> MultiDict.from_flat_list([(1, "a"), (2, "b"), (1, "c")]).to_list()
        [(1, OrderedSet({'a', 'c'})), (2, OrderedSet({'b'}))]
        """
        return cls._from_forward(index.normalize(group_pairs(pairs)))

    @classmethod
    def from_dict(cls, mapping: Mapping[KT, Iterable[VT]]) -> MultiDict[KT, VT]:
        errors.check_arg_type(Mapping, "MultiDict.from_dict", "mapping", mapping)
        return cls._from_forward(index.normalize(mapping.items()))

    @classmethod
    def _from_pairs(cls, pairs: list[tuple[KT, VT]]) -> MultiDict[KT, VT]:
        return cls.from_flat_list(pairs)

    def to_dict(self) -> dict[KT, OrderedSet[VT]]:
        return self._forward.to_dict()

    # -- queries

    def __getitem__(self, key: KT) -> OrderedSet[VT]:
        return self.get(key)

    def __iter__(self) -> Iterator[tuple[KT, VT]]:
        for k, vs in self._forward.items():
            for v in vs:
                yield k, v

    def __len__(self) -> int:
        return sum(len(vs) for vs in self._forward.values())

    def get(self, key: KT) -> OrderedSet[VT]:
        return self._forward.get(key, OrderedSet.empty())

    def keys(self) -> list[KT]:
        return list(self._forward.keys())

    def values(self) -> list[VT]:
        """The values of all keys, key after key in forward order."""
        return [v for vs in self._forward.values() for v in vs]

    def to_list(self) -> list[tuple[KT, OrderedSet[VT]]]:
        return self._forward.to_list()

    def to_flat_list(self) -> list[tuple[KT, VT]]:
        return list(self)

    def _pairs(self) -> list[tuple[KT, VT]]:
        return self.to_flat_list()

    # -- single entry updates

    def insert(self, key: KT, value: VT) -> MultiDict[KT, VT]:
        return self._from_forward(index.add_to_set(self._forward, key, value))

    def update(
        self, key: KT, fn: Callable[[OrderedSet[VT]], Iterable[VT]]
    ) -> MultiDict[KT, VT]:
        """
        Replace the values of `key` by `fn(current)`. `current` is empty if the key is
        absent and an empty result removes the key.
        """
        errors.check_callable("MultiDict.update", "fn", fn)
        new_values = OrderedSet(fn(self.get(key)))
        if not new_values:
            return self.remove_all(key)
        return self._from_forward(self._forward.insert(key, new_values))

    def remove(self, key: KT, value: VT) -> MultiDict[KT, VT]:
        """Remove a single pair. Removing an absent pair returns an equal MultiDict."""
        forward = index.discard_from_set(self._forward, key, value)
        if forward is self._forward:
            return self
        return self._from_forward(forward)

    def remove_all(self, key: KT) -> MultiDict[KT, VT]:
        if key not in self._forward:
            return self
        return self._from_forward(self._forward.remove(key))

    # -- bulk transformations

    def map(self, fn: Callable[[VT], WT]) -> MultiDict[KT, WT]:
        """Apply `fn` to every value. Values that become equal collapse."""
        errors.check_callable("MultiDict.map", "fn", fn)
        return self._from_forward(self._forward.map(lambda vs: vs.map(fn)))

    def filter(self, predicate: Callable[[KT, VT], bool]) -> MultiDict[KT, VT]:
        """
        Keep the pairs for which `predicate(key, value)` holds. Keys without any
        remaining value are dropped.
        """
        errors.check_callable("MultiDict.filter", "predicate", predicate)
        forward = self._forward.map_with_key(
            lambda k, vs: vs.filter(lambda v: predicate(k, v))
        )
        return self._from_forward(index.drop_empty(forward))

    def partition(
        self, predicate: Callable[[KT, OrderedSet[VT]], bool]
    ) -> tuple[MultiDict[KT, VT], MultiDict[KT, VT]]:
        """
        Split by `predicate(key, values)`.

        Note that, unlike `filter`, the predicate decides about a key together with
        all of its values.
        """
        errors.check_callable("MultiDict.partition", "predicate", predicate)
        accepted, rejected = self._forward.partition(predicate)
        return self._from_forward(accepted), self._from_forward(rejected)

    def union(self, other: MultiDict[KT, VT]) -> MultiDict[KT, VT]:
        """
        Keys of both dictionaries. A key present in both keeps the whole value set of
        `self`, the sets are not merged.
        """
        self._check_other("union", other)
        return self._from_forward(self._forward.union(other._forward))

    def intersect(self, other: MultiDict[KT, VT]) -> MultiDict[KT, VT]:
        self._check_other("intersect", other)
        return self._from_forward(self._forward.intersect(other._forward))

    def diff(self, other: MultiDict[KT, VT]) -> MultiDict[KT, VT]:
        self._check_other("diff", other)
        return self._from_forward(self._forward.diff(other._forward))

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
