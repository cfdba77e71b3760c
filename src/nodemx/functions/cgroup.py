"""
Accessors for cgroup virtual files.

Every accessor takes an initialized TopologyContext and a controller file
name such as "memory.max" or "cpu.stat". File names are routed to the
controller directory named by their first component. When cgroup access is
disabled, scalar accessors return None and set accessors return an empty
frame with the usual schema; only cgroup_mode() answers in every mode.
"""

import logging
from typing import List, Optional

import polars as pl

from ..cgroup import TopologyContext
from ..validation import FormatError
from ..vfs import (
    parse_lines,
    read_flat_keyed_file,
    read_keyed_subkey_file,
    read_nested_keyed_file,
    read_nlsv,
    read_one_nlsv,
    read_space_separated_file,
    to_float64,
    to_int64,
)
from .frames import (
    BIGINT_SCHEMA,
    KSV_SCHEMA,
    KV_SCHEMA,
    MEMBER_SCHEMA,
    NKV_SCHEMA,
    PATH_SCHEMA,
    TEXT_SCHEMA,
    empty,
    frame,
)

logger = logging.getLogger(__name__)


def _no_lines(kind: str, path) -> FormatError:
    return FormatError(f"no lines in {kind} file: {path}", path=path)


def cgroup_mode(ctx: TopologyContext) -> str:
    """Name of the detected cgroup mode: unified, legacy, hybrid or disabled."""
    return ctx.mode.value


def cgroup_path(ctx: TopologyContext) -> pl.DataFrame:
    """Topology table rows as (controller, path)."""
    if not ctx.enabled:
        return empty(PATH_SCHEMA)
    return frame(ctx.table.rows(), PATH_SCHEMA)


def cgroup_process_count(ctx: TopologyContext) -> Optional[int]:
    if not ctx.enabled:
        return None
    _, count = ctx.members()
    return count


def cgroup_members(ctx: TopologyContext) -> pl.DataFrame:
    """Distinct pids in this process's cgroup, ascending."""
    if not ctx.enabled:
        return empty(MEMBER_SCHEMA)
    pids, _ = ctx.members()
    return frame([(pid,) for pid in pids], MEMBER_SCHEMA)


# ----------------------------------------------------------------------
# Scalars
# ----------------------------------------------------------------------


def cgroup_scalar_bigint(ctx: TopologyContext, filename: str) -> Optional[int]:
    """
    Single integer from a one-line file, e.g. memory.max.

    "max" is returned as the largest int64.
    """
    if not ctx.enabled:
        return None
    path = ctx.file_path(filename)
    return to_int64(read_one_nlsv(path, ctx.config.reader))


def cgroup_scalar_float8(ctx: TopologyContext, filename: str) -> Optional[float]:
    if not ctx.enabled:
        return None
    path = ctx.file_path(filename)
    return to_float64(read_one_nlsv(path, ctx.config.reader))


def cgroup_scalar_text(ctx: TopologyContext, filename: str) -> Optional[str]:
    if not ctx.enabled:
        return None
    return read_one_nlsv(ctx.file_path(filename), ctx.config.reader)


# ----------------------------------------------------------------------
# One value per line
# ----------------------------------------------------------------------


def cgroup_setof_bigint(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    """One int64 per line, e.g. cgroup.procs. "max" lines become the largest int64."""
    if not ctx.enabled:
        return empty(BIGINT_SCHEMA)
    path = ctx.file_path(filename)
    values = parse_lines(read_nlsv(path, ctx.config.reader), to_int64, path)
    return frame([(value,) for value in values], BIGINT_SCHEMA)


def cgroup_setof_text(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    if not ctx.enabled:
        return empty(TEXT_SCHEMA)
    lines = read_nlsv(ctx.file_path(filename), ctx.config.reader)
    return frame([(line,) for line in lines], TEXT_SCHEMA)


# ----------------------------------------------------------------------
# Space separated single line
# ----------------------------------------------------------------------


def cgroup_array_text(ctx: TopologyContext, filename: str) -> Optional[List[str]]:
    """Tokens of a one-line space separated file such as cgroup.controllers."""
    if not ctx.enabled:
        return None
    tokens = read_space_separated_file(ctx.file_path(filename), ctx.config.reader)
    return tokens or None


def cgroup_array_bigint(ctx: TopologyContext, filename: str) -> Optional[List[int]]:
    """Integers of a one-line space separated file such as cpu.max."""
    if not ctx.enabled:
        return None
    path = ctx.file_path(filename)
    tokens = read_space_separated_file(path, ctx.config.reader)
    if not tokens:
        return None
    return parse_lines(tokens, to_int64, path)


# ----------------------------------------------------------------------
# Keyed files
# ----------------------------------------------------------------------


def cgroup_setof_kv(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    """
    Rows of a flat keyed file such as memory.stat or cpu.stat.

    Raises:
        FormatError: If the file is empty or a line is not "key value"
    """
    if not ctx.enabled:
        return empty(KV_SCHEMA)
    path = ctx.file_path(filename)
    pairs = read_flat_keyed_file(path, ctx.config.reader)
    if not pairs:
        raise _no_lines("flat keyed", path)

    rows = parse_lines(pairs, lambda pair: (pair[0], to_int64(pair[1])), path)
    return frame(rows, KV_SCHEMA)


def cgroup_setof_ksv(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    """
    Rows of a "key subkey value" file such as blkio.throttle.io_serviced.

    The two-column grand total line is reported under the key "all".
    """
    if not ctx.enabled:
        return empty(KSV_SCHEMA)
    path = ctx.file_path(filename)
    triples = read_keyed_subkey_file(path, ctx.config.reader)
    if not triples:
        raise _no_lines("key subkey value", path)

    rows = parse_lines(triples, lambda t: (t[0], t[1], to_int64(t[2])), path)
    return frame(rows, KSV_SCHEMA)


def cgroup_setof_nkv(ctx: TopologyContext, filename: str) -> pl.DataFrame:
    """
    Rows of a nested keyed file such as io.stat or memory.pressure.

    Each line expands to one (key, subkey, val) row per subkey, where key
    is the line's leading value.
    """
    if not ctx.enabled:
        return empty(NKV_SCHEMA)
    path = ctx.file_path(filename)
    lines = read_nested_keyed_file(path, ctx.config.reader)
    if not lines:
        raise _no_lines("nested keyed", path)

    def expand(line):
        return [(line.key, subkey, to_float64(value)) for subkey, value in line.subkey_pairs]

    rows = [row for expanded in parse_lines(lines, expand, path) for row in expanded]
    logger.debug(f"{filename}: {len(lines)} lines, {len(rows)} rows")
    return frame(rows, NKV_SCHEMA)
