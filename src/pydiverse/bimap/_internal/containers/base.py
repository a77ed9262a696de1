# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import Any, Generic, TypeVar

import pandas as pd
import polars as pl

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.backend import frames
from pydiverse.bimap._internal.backend.targets import Target
from pydiverse.bimap._internal.util import OrderedMap

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT", bound=Hashable)
A = TypeVar("A")
ContainerT = TypeVar("ContainerT", bound="Container")


class Container(Generic[KT, VT]):
    """
    Common behaviour of all containers.

    Containers are immutable values. Every one of them owns a forward index
    `self._forward` and everything that can be expressed in terms of that index alone
    (equality, folds, merge, export) lives here.
    """

    __slots__ = ("_forward",)

    _forward: OrderedMap

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._forward == other._forward

    def __ne__(self, other) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash((type(self).__qualname__, self._forward))

    def __bool__(self) -> bool:
        return len(self._forward) > 0

    def __repr__(self):
        return f"{type(self).__name__}({self._forward.to_dict()!r})"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self).from_list, (self.to_list(),))

    @classmethod
    def from_list(cls: type[ContainerT], pairs: Iterable) -> ContainerT:
        raise NotImplementedError

    def to_list(self) -> list:
        raise NotImplementedError

    def _pairs(self) -> list[tuple[KT, VT]]:
        """All `(key, value)` pairs in forward order, one per row of an export."""
        return self._forward.to_list()

    def _check_other(self, fn: str, other: Any):
        errors.check_same_kind(fn, self, other)

    def member(self, key: KT) -> bool:
        return key in self._forward

    def __contains__(self, key) -> bool:
        return key in self._forward

    def foldl(self, fn: Callable[[A, KT, Any], A], seed: A) -> A:
        """
        Fold the forward entries from first to last, calling `fn(acc, key, value)`.
        """
        errors.check_callable("foldl", "fn", fn)
        return self._forward.foldl(fn, seed)

    def foldr(self, fn: Callable[[KT, Any, A], A], seed: A) -> A:
        """
        Fold the forward entries from last to first, calling `fn(key, value, acc)`.
        """
        errors.check_callable("foldr", "fn", fn)
        return self._forward.foldr(fn, seed)

    def merge(
        self,
        other: ContainerT,
        on_left: Callable[[A, KT, Any], A],
        on_both: Callable[[A, KT, Any, Any], A],
        on_right: Callable[[A, KT, Any], A],
        seed: A,
    ) -> A:
        """
        Reduce the forward entries of `self` and `other` to a single value.

        Keys of `self` are visited first, in order. Keys present in both containers go
        to `on_both(acc, key, left_value, right_value)`, keys only in `self` go to
        `on_left(acc, key, value)`. Afterwards, keys that only appear in `other` are
        passed to `on_right(acc, key, value)` in the order of `other`.
        No reverse index is read or produced.
        """
        self._check_other("merge", other)
        return self._forward.merge(other._forward, on_left, on_both, on_right, seed)

    def export(self, target: Target | type[Target]) -> Any:
        """
        Convert the container to a table with one row per `(key, value)` pair.

        :param target:
            A ``Polars``, ``Pandas``, ``DictOfLists`` or ``ListOfDicts`` object. The
            names of the key and value columns are configured on the target.
        """
        return frames.export_pairs(self._pairs(), target)

    @classmethod
    def from_frame(
        cls: type[ContainerT],
        resource: pl.DataFrame | pl.LazyFrame | pd.DataFrame,
        *,
        key: str = "key",
        value: str = "value",
    ) -> ContainerT:
        """Build a container from the rows of a two column data frame."""
        return cls._from_pairs(frames.import_pairs(resource, key=key, value=value))

    @classmethod
    def _from_pairs(cls: type[ContainerT], pairs: list[tuple[KT, VT]]) -> ContainerT:
        return cls.from_list(pairs)
