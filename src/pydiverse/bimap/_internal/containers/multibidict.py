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


class MultiBiDict(Container, Generic[KT, VT]):
    """
    Many to many bidirectional dictionary.

    Keys map to sets of values and values map back to the sets of keys that contain
    them: `v in d.get(k)` holds exactly when `k in d.get_reverse(v)`. Neither
    direction ever stores an empty set.

    Single pair updates (`insert`, `remove`, `remove_all`) patch both indexes, every
    other transformation works on the forward index and derives the reverse index
    from the result.

    Examples
    --------
    >>> docs = MultiBiDict.empty().insert("chat1", "doc1").insert("chat1", "doc2")
    >>> docs = docs.insert("chat2", "doc1")
    >>> docs.get_reverse("doc1")
    OrderedSet({'chat1', 'chat2'})
    """

    __slots__ = ("_reverse",)

    _forward: OrderedMap[KT, OrderedSet[VT]]
    _reverse: OrderedMap[VT, OrderedSet[KT]]

    def __init__(
        self,
        seq: Mapping[KT, Iterable[VT]] | Iterable[tuple[KT, Iterable[VT]]] = tuple(),
        /,
    ):
        if isinstance(seq, Mapping):
            seq = seq.items()
        self._forward = index.normalize(seq)
        self._reverse = index.reverse_of_multi(self._forward)

    @classmethod
    def _from_indexes(
        cls,
        forward: OrderedMap[KT, OrderedSet[VT]],
        reverse: OrderedMap[VT, OrderedSet[KT]] | None = None,
    ) -> MultiBiDict[KT, VT]:
        d = cls.__new__(cls)
        d._forward = forward
        d._reverse = index.reverse_of_multi(forward) if reverse is None else reverse
        return d

    # -- construction

    @classmethod
    def empty(cls) -> MultiBiDict[KT, VT]:
        return cls._from_indexes(OrderedMap.empty(), OrderedMap.empty())

    @classmethod
    def singleton(cls, key: KT, value: VT) -> MultiBiDict[KT, VT]:
        return cls._from_indexes(
            OrderedMap.singleton(key, OrderedSet.singleton(value)),
            OrderedMap.singleton(value, OrderedSet.singleton(key)),
        )

    @classmethod
    def from_list(
        cls, entries: Iterable[tuple[KT, Iterable[VT]]]
    ) -> MultiBiDict[KT, VT]:
        """
        Build from `(key, values)` entries. The values of a key that occurs several
        times are merged, keys with no values are left out.
        """
        return cls._from_indexes(index.normalize(entries))

    @classmethod
    def from_flat_list(cls, pairs: Iterable[tuple[KT, VT]]) -> MultiBiDict[KT, VT]:
        """Build from single `(key, value)` pairs, grouped by key over the whole input."""
        return cls._from_indexes(index.normalize(group_pairs(pairs)))

    @classmethod
    def from_dict(cls, mapping: Mapping[KT, Iterable[VT]]) -> MultiBiDict[KT, VT]:
        errors.check_arg_type(Mapping, "MultiBiDict.from_dict", "mapping", mapping)
        return cls._from_indexes(index.normalize(mapping.items()))

    @classmethod
    def _from_pairs(cls, pairs: list[tuple[KT, VT]]) -> MultiBiDict[KT, VT]:
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

    def get_reverse(self, value: VT) -> OrderedSet[KT]:
        return self._reverse.get(value, OrderedSet.empty())

    def member_reverse(self, value: VT) -> bool:
        return value in self._reverse

    def keys(self) -> list[KT]:
        return list(self._forward.keys())

    def values(self) -> list[VT]:
        """The values of all keys, key after key in forward order."""
        return [v for vs in self._forward.values() for v in vs]

    def to_list(self) -> list[tuple[KT, OrderedSet[VT]]]:
        return self._forward.to_list()

    def to_flat_list(self) -> list[tuple[KT, VT]]:
        return list(self)

    def to_reverse_list(self) -> list[tuple[VT, OrderedSet[KT]]]:
        """
        `(value, keys)` pairs. Values are ordered by their first appearance in the
        forward index and the keys of each value follow forward order.
        """
        return index.reverse_of_multi(self._forward).to_list()

    def _pairs(self) -> list[tuple[KT, VT]]:
        return self.to_flat_list()

    # -- single pair updates, both indexes are patched

    def insert(self, key: KT, value: VT) -> MultiBiDict[KT, VT]:
        forward = index.add_to_set(self._forward, key, value)
        if forward is self._forward:
            return self
        return self._from_indexes(forward, index.add_to_set(self._reverse, value, key))

    def remove(self, key: KT, value: VT) -> MultiBiDict[KT, VT]:
        """Remove a single pair. Removing an absent pair returns an equal MultiBiDict."""
        forward = index.discard_from_set(self._forward, key, value)
        if forward is self._forward:
            return self
        return self._from_indexes(
            forward, index.discard_from_set(self._reverse, value, key)
        )

    def remove_all(self, key: KT) -> MultiBiDict[KT, VT]:
        """Remove `key` together with all of its values."""
        if key not in self._forward:
            return self
        reverse = self._reverse
        for value in self._forward[key]:
            reverse = index.discard_from_set(reverse, value, key)
        return self._from_indexes(self._forward.remove(key), reverse)

    # -- transformations with a freshly derived reverse index

    def update(
        self, key: KT, fn: Callable[[OrderedSet[VT]], Iterable[VT]]
    ) -> MultiBiDict[KT, VT]:
        """
        Replace the values of `key` by `fn(current)`. `current` is empty if the key is
        absent and an empty result removes the key.
        """
        errors.check_callable("MultiBiDict.update", "fn", fn)
        new_values = OrderedSet(fn(self.get(key)))
        if not new_values:
            return self._from_indexes(self._forward.remove(key))
        return self._from_indexes(self._forward.insert(key, new_values))

    def map(self, fn: Callable[[VT], WT]) -> MultiBiDict[KT, WT]:
        """Apply `fn` to every value. Values that become equal collapse."""
        errors.check_callable("MultiBiDict.map", "fn", fn)
        return self._from_indexes(self._forward.map(lambda vs: vs.map(fn)))

    def filter(self, predicate: Callable[[KT, VT], bool]) -> MultiBiDict[KT, VT]:
        """
        Keep the pairs for which `predicate(key, value)` holds. Keys without any
        remaining value are dropped.
        """
        errors.check_callable("MultiBiDict.filter", "predicate", predicate)
        forward = self._forward.map_with_key(
            lambda k, vs: vs.filter(lambda v: predicate(k, v))
        )
        return self._from_indexes(index.drop_empty(forward))

    def partition(
        self, predicate: Callable[[KT, OrderedSet[VT]], bool]
    ) -> tuple[MultiBiDict[KT, VT], MultiBiDict[KT, VT]]:
        """Split by `predicate(key, values)`, which decides about whole keys."""
        errors.check_callable("MultiBiDict.partition", "predicate", predicate)
        accepted, rejected = self._forward.partition(predicate)
        return self._from_indexes(accepted), self._from_indexes(rejected)

    def union(self, other: MultiBiDict[KT, VT]) -> MultiBiDict[KT, VT]:
        """
        Keys of both dictionaries. A key present in both keeps the whole value set of
        `self`, the sets are not merged.
        """
        self._check_other("union", other)
        return self._from_indexes(self._forward.union(other._forward))

    def intersect(self, other: MultiBiDict[KT, VT]) -> MultiBiDict[KT, VT]:
        self._check_other("intersect", other)
        return self._from_indexes(self._forward.intersect(other._forward))

    def diff(self, other: MultiBiDict[KT, VT]) -> MultiBiDict[KT, VT]:
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
