# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .grouping import group_by, group_pairs
from .ordered_map import OrderedMap
from .ordered_set import OrderedSet

__all__ = ["OrderedMap", "OrderedSet", "group_by", "group_pairs"]
