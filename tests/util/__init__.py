# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .assertion import assert_consistent, assert_same_state

__all__ = [
    "assert_consistent",
    "assert_same_state",
]
