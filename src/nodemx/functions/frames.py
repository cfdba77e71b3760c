"""
Row materialization helpers.

Set-returning accessors hand back Polars DataFrames with fixed schemas so
that an empty result still carries typed columns.
"""

from typing import Dict, Iterable, Sequence

import polars as pl

PATH_SCHEMA = {"controller": pl.Utf8, "path": pl.Utf8}
MEMBER_SCHEMA = {"pid": pl.Int64}
BIGINT_SCHEMA = {"val": pl.Int64}
TEXT_SCHEMA = {"val": pl.Utf8}
KV_SCHEMA = {"key": pl.Utf8, "val": pl.Int64}
TEXT_KV_SCHEMA = {"key": pl.Utf8, "val": pl.Utf8}
KSV_SCHEMA = {"key": pl.Utf8, "subkey": pl.Utf8, "val": pl.Int64}
NKV_SCHEMA = {"key": pl.Utf8, "subkey": pl.Utf8, "val": pl.Float64}


def frame(rows: Iterable[Sequence], schema: Dict[str, pl.DataType]) -> pl.DataFrame:
    """
    Build a DataFrame from row tuples.

    Examples:
        >>> frame([("a", 1)], KV_SCHEMA).shape
        (1, 2)
        >>> frame([], KV_SCHEMA).columns
        ['key', 'val']
    """
    rows = list(rows)
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema, orient="row")


def empty(schema: Dict[str, pl.DataType]) -> pl.DataFrame:
    return pl.DataFrame(schema=schema)
