# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .bidict import BiDict
from .multibidict import MultiBiDict
from .multidict import MultiDict

__all__ = ["BiDict", "MultiDict", "MultiBiDict"]
