# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# Helpers that maintain a reverse index `value -> OrderedSet[key]`. An empty set is
# never stored, a value that no key maps to is simply absent.

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import TypeVar

import structlog

from pydiverse.bimap._internal.util import OrderedMap, OrderedSet

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT", bound=Hashable)

logger = structlog.get_logger(__name__)


def _collect(pairs: Iterable[tuple[KT, VT]]) -> OrderedMap[VT, OrderedSet[KT]]:
    reverse: dict[VT, dict[KT, None]] = {}
    for k, v in pairs:
        reverse.setdefault(v, {})[k] = None
    return OrderedMap._wrap({v: OrderedSet._wrap(ks) for v, ks in reverse.items()})


def reverse_of_single(forward: OrderedMap[KT, VT]) -> OrderedMap[VT, OrderedSet[KT]]:
    """Derive the reverse index of a single valued forward map from scratch."""
    logger.debug("rebuilding reverse index", entries=len(forward))
    return _collect(forward.items())


def reverse_of_multi(
    forward: OrderedMap[KT, OrderedSet[VT]],
) -> OrderedMap[VT, OrderedSet[KT]]:
    """Derive the reverse index of a set valued forward map from scratch."""
    logger.debug("rebuilding reverse index", entries=len(forward))
    return _collect((k, v) for k, vs in forward.items() for v in vs)


def add_to_set(
    index: OrderedMap[VT, OrderedSet[KT]], at: VT, element: KT
) -> OrderedMap[VT, OrderedSet[KT]]:
    current = index.get(at)
    if current is None:
        return index.insert(at, OrderedSet.singleton(element))
    if element in current:
        return index
    return index.insert(at, current.insert(element))


def discard_from_set(
    index: OrderedMap[VT, OrderedSet[KT]], at: VT, element: KT
) -> OrderedMap[VT, OrderedSet[KT]]:
    """Remove `element` from the set stored at `at`, dropping the entry once empty."""
    current = index.get(at)
    if current is None or element not in current:
        return index
    if len(current) == 1:
        return index.remove(at)
    return index.insert(at, current.remove(element))


def normalize(
    entries: Iterable[tuple[KT, Iterable[VT]]],
) -> OrderedMap[KT, OrderedSet[VT]]:
    """
    Build a set valued map from `(key, values)` entries. Values of repeated keys are
    merged and keys without any value are left out.
    """
    data: dict[KT, dict[VT, None]] = {}
    for k, vs in entries:
        bucket = data.get(k)
        if bucket is None:
            bucket = {}
        for v in vs:
            bucket[v] = None
        if bucket:
            data[k] = bucket
    return OrderedMap._wrap({k: OrderedSet._wrap(vs) for k, vs in data.items()})


def drop_empty(
    forward: OrderedMap[KT, OrderedSet[VT]],
) -> OrderedMap[KT, OrderedSet[VT]]:
    return forward.filter(lambda _, vs: len(vs) > 0)
