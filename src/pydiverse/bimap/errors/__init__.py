# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from pydiverse.bimap._internal.errors import ColumnNotFoundError, NotSupportedError

__all__ = ["NotSupportedError", "ColumnNotFoundError"]
