# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from typing import Any, overload

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.backend.targets import Target
from pydiverse.bimap._internal.containers.base import Container
from pydiverse.bimap._internal.pipe.pipeable import Pipeable, verb

__all__ = [
    "insert",
    "update",
    "remove",
    "remove_all",
    "map",
    "filter",
    "partition",
    "union",
    "intersect",
    "diff",
    "export",
]


def _check_container(fn: str, d: Any):
    errors.check_arg_type(Container, fn, "container", d)


@overload
def insert(key, value) -> Pipeable: ...


@verb
def insert(d: Container, key, value) -> Container:
    """
    Add a `(key, value)` pair.

    Examples
    --------
    >>> BiDict.empty() >> insert("Tom", "cat") >> insert("Spike", "cat")
    BiDict({'Tom': 'cat', 'Spike': 'cat'})
    """
    _check_container("insert", d)
    return d.insert(key, value)


@overload
def update(key, fn) -> Pipeable: ...


@verb
def update(d: Container, key, fn) -> Container:
    _check_container("update", d)
    return d.update(key, fn)


@overload
def remove(key, *value) -> Pipeable: ...


@verb
def remove(d: Container, key, *value) -> Container:
    """
    Remove a key from a BiDict, or a single `(key, value)` pair from a MultiDict or
    MultiBiDict.
    """
    _check_container("remove", d)
    return d.remove(key, *value)


@overload
def remove_all(key) -> Pipeable: ...


@verb
def remove_all(d: Container, key) -> Container:
    _check_container("remove_all", d)
    if not hasattr(d, "remove_all"):
        # a BiDict holds at most one value per key
        return d.remove(key)
    return d.remove_all(key)


@overload
def map(fn) -> Pipeable: ...


@verb
def map(d: Container, fn) -> Container:  # noqa: A001
    _check_container("map", d)
    return d.map(fn)


@overload
def filter(predicate) -> Pipeable: ...


@verb
def filter(d: Container, predicate) -> Container:  # noqa: A001
    _check_container("filter", d)
    return d.filter(predicate)


@overload
def partition(predicate) -> Pipeable: ...


@verb
def partition(d: Container, predicate) -> tuple[Container, Container]:
    _check_container("partition", d)
    return d.partition(predicate)


@overload
def union(other: Container) -> Pipeable: ...


@verb
def union(d: Container, other: Container) -> Container:
    _check_container("union", d)
    return d.union(other)


@overload
def intersect(other: Container) -> Pipeable: ...


@verb
def intersect(d: Container, other: Container) -> Container:
    _check_container("intersect", d)
    return d.intersect(other)


@overload
def diff(other: Container) -> Pipeable: ...


@verb
def diff(d: Container, other: Container) -> Container:
    _check_container("diff", d)
    return d.diff(other)


@overload
def export(target: Target | type[Target]) -> Pipeable: ...


@verb
def export(d: Container, target: Target | type[Target]) -> Any:
    """
    Convert a container to a table with one row per `(key, value)` pair.

    Examples
    --------
    >>> MultiDict.from_flat_list([("a", 1), ("a", 2)]) >> export(DictOfLists())
    {'key': ['a', 'a'], 'value': [1, 2]}
    """
    _check_container("export", d)
    return d.export(target)
