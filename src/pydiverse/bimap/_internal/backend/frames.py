# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

import pandas as pd
import polars as pl
import structlog

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.backend.targets import (
    DictOfLists,
    ListOfDicts,
    Pandas,
    Polars,
    Target,
)
from pydiverse.bimap._internal.errors import ColumnNotFoundError, NotSupportedError

logger = structlog.get_logger(__name__)

Pair = tuple[Hashable, Any]


def _to_series(name: str, values: list) -> pl.Series:
    try:
        return pl.Series(name, values)
    except (TypeError, ValueError, pl.exceptions.PolarsError):
        # heterogeneous python values, keep them as they are
        return pl.Series(name, values, dtype=pl.Object)


def _as_tuple(cell: Any) -> Any:
    if isinstance(cell, list):
        return tuple(_as_tuple(c) for c in cell)
    return cell


def _column_values(series: pl.Series) -> list:
    # tuples are stored as list / array columns by polars
    if series.dtype.base_type() in (pl.List, pl.Array):
        return [_as_tuple(cell) for cell in series.to_list()]
    return series.to_list()


def export_pairs(pairs: list[Pair], target: Target | type[Target]) -> Any:
    """
    Convert `(key, value)` pairs to the representation described by `target`, one
    row per pair.
    """
    errors.check_arg_type(Target | type, "export", "target", target)
    if not isinstance(target, Target):
        if not issubclass(target, Target):
            raise TypeError(
                f"argument for parameter `target` of `export` must be a `Target`, "
                f"found `{target.__name__}` instead"
            )
        target = target()

    keys = [k for k, _ in pairs]
    values = [v for _, v in pairs]
    logger.debug("exporting pairs", target=target, rows=len(pairs))

    if isinstance(target, Polars):
        df = pl.DataFrame(
            [_to_series(target.key, keys), _to_series(target.value, values)]
        )
        return df.lazy() if target.lazy else df

    elif isinstance(target, Pandas):
        return pd.DataFrame({target.key: keys, target.value: values})

    elif isinstance(target, DictOfLists):
        return {target.key: keys, target.value: values}

    elif isinstance(target, ListOfDicts):
        return [{target.key: k, target.value: v} for k, v in pairs]

    raise NotSupportedError(
        f"export to target `{type(target).__name__}` is not supported\n"
        "hint: Use one of `Polars`, `Pandas`, `DictOfLists` or `ListOfDicts`."
    )


def import_pairs(
    resource: pl.DataFrame | pl.LazyFrame | pd.DataFrame,
    *,
    key: str = "key",
    value: str = "value",
) -> list[Pair]:
    """Read the `key` and `value` columns of a data frame as a list of pairs."""
    errors.check_arg_type(
        pl.DataFrame | pl.LazyFrame | pd.DataFrame, "from_frame", "resource", resource
    )

    if isinstance(resource, pl.LazyFrame):
        resource = resource.collect()

    columns = list(resource.columns)
    for col in (key, value):
        if col not in columns:
            raise ColumnNotFoundError(
                f"column `{col}` does not exist in the data frame\n"
                f"available columns: {', '.join(map(str, columns))}"
            )

    if isinstance(resource, pl.DataFrame):
        keys = _column_values(resource.get_column(key))
        values = _column_values(resource.get_column(value))
    else:
        keys = resource[key].tolist()
        values = resource[value].tolist()

    logger.debug("imported pairs", rows=len(keys))
    return list(zip(keys, values, strict=True))
