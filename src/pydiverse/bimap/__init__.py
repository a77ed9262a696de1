# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.containers import BiDict, MultiBiDict, MultiDict
from ._internal.util import OrderedMap, OrderedSet, group_by
from .errors import *
from .errors import __all__ as __errors
from .targets import *
from .targets import __all__ as __targets
from .version import __version__

__all__ = (
    [
        "__version__",
        "BiDict",
        "MultiDict",
        "MultiBiDict",
        "OrderedMap",
        "OrderedSet",
        "group_by",
    ]
    + __targets
    + __errors
)
