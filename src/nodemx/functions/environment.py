"""
Environment variable and Kubernetes Downward API accessors.

Downward API files live under the configured directory (default
/etc/podinfo) and are either a single number (cpu_limit, mem_request) or
`key="value"` lines (labels, annotations).
"""

import logging
import os
from typing import Optional

import polars as pl

from ..cgroup import TopologyContext
from ..validation import FormatError, NotFoundError, ValidationError
from ..vfs import read_one_nlsv, read_quoted_kv_file, to_int64
from .frames import TEXT_KV_SCHEMA, empty, frame

logger = logging.getLogger(__name__)


def envvar_text(name: str) -> str:
    """
    Value of an environment variable of this process.

    Raises:
        NotFoundError: If the variable is not set
    """
    if not name or "=" in name:
        raise ValidationError(f"invalid environment variable name: \"{name}\"", field_name="name", value=name)
    value = os.environ.get(name)
    if value is None:
        raise NotFoundError(f"environment variable not found: \"{name}\"")
    return value


def envvar_bigint(name: str) -> int:
    """Environment variable parsed as int64. "max" is not accepted here."""
    value = envvar_text(name)
    try:
        return to_int64(value, allow_max=False)
    except FormatError as e:
        raise FormatError(f"contents not an integer: env variable \"{name}\"") from e


def kdapi_scalar_bigint(ctx: TopologyContext, filename: str) -> Optional[int]:
    """Single integer Downward API file, e.g. "mem_limit"."""
    if not ctx.kdapi_enabled:
        return None
    path = ctx.kdapi_file_path(filename)
    return to_int64(read_one_nlsv(path, ctx.config.reader))


def kdapi_setof_kv(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    """
    Rows of a Downward API `key="value"` file, e.g. "labels".

    Values have their quotes removed and escapes decoded.
    """
    if not ctx.kdapi_enabled:
        return empty(TEXT_KV_SCHEMA)
    path = ctx.kdapi_file_path(filename)
    pairs = read_quoted_kv_file(path, ctx.config.reader)
    logger.debug(f"Read {len(pairs)} Downward API entries from {path}")
    return frame(pairs, TEXT_KV_SCHEMA)
