# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# ruff: noqa: A004

from ._internal.pipe.pipeable import verb
from ._internal.pipe.verbs import (
    diff,
    export,
    filter,
    insert,
    intersect,
    map,
    partition,
    remove,
    remove_all,
    union,
    update,
)

__all__ = [
    "verb",
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
