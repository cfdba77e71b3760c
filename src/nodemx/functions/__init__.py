"""
Query functions over an initialized TopologyContext.

Scalar accessors return plain Python values; set accessors return Polars
DataFrames with fixed schemas.
"""

from .cgroup import (
    cgroup_array_bigint,
    cgroup_array_text,
    cgroup_members,
    cgroup_mode,
    cgroup_path,
    cgroup_process_count,
    cgroup_scalar_bigint,
    cgroup_scalar_float8,
    cgroup_scalar_text,
    cgroup_setof_bigint,
    cgroup_setof_ksv,
    cgroup_setof_kv,
    cgroup_setof_nkv,
    cgroup_setof_text,
)
from .environment import envvar_bigint, envvar_text, kdapi_scalar_bigint, kdapi_setof_kv
from .snapshot import take_snapshot

__all__ = [
    "cgroup_array_bigint",
    "cgroup_array_text",
    "cgroup_members",
    "cgroup_mode",
    "cgroup_path",
    "cgroup_process_count",
    "cgroup_scalar_bigint",
    "cgroup_scalar_float8",
    "cgroup_scalar_text",
    "cgroup_setof_bigint",
    "cgroup_setof_ksv",
    "cgroup_setof_kv",
    "cgroup_setof_nkv",
    "cgroup_setof_text",
    "envvar_bigint",
    "envvar_text",
    "kdapi_scalar_bigint",
    "kdapi_setof_kv",
    "take_snapshot",
]
