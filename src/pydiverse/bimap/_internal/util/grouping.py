# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T")
KT = TypeVar("KT", bound=Hashable)

__all__ = ("group_by", "group_pairs")


def group_by(items: Iterable[T], key: Callable[[T], KT]) -> list[tuple[KT, list[T]]]:
    """
    Partition `items` into groups of elements with equal keys.

    Unlike `itertools.groupby`, elements don't need to be adjacent to end up in the
    same group. Groups are ordered by the first occurrence of their key and the
    elements of a group keep their relative input order.

    >>> group_by(["ab", "c", "ad", "ef", "g"], len)
    [(2, ['ab', 'ad', 'ef']), (1, ['c', 'g'])]
    """
    groups: dict[KT, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return list(groups.items())


def group_pairs(pairs: Iterable[tuple[KT, T]]) -> list[tuple[KT, list[T]]]:
    """Group `(key, value)` pairs by key, keeping only the values in each group."""
    return [
        (k, [v for _, v in group]) for k, group in group_by(pairs, lambda p: p[0])
    ]
