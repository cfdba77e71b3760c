"""
Snapshot export.

Captures the topology table, the cgroup members and any number of parsed
keyed files into a directory through a DataStorage backend, together with a
metadata.json describing where and when the snapshot was taken.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..cgroup import TopologyContext
from ..storage import DataStorage
from .cgroup import cgroup_members, cgroup_path, cgroup_setof_kv, cgroup_setof_nkv

logger = logging.getLogger(__name__)

TOPOLOGY_TABLE = "topology"
MEMBERS_TABLE = "members"
METADATA_FILE = "metadata.json"


def _table_name(filename: str) -> str:
    # "memory.stat" -> "memory_stat"
    return filename.replace(".", "_").replace("/", "_")


def take_snapshot(
    ctx: TopologyContext,
    storage: DataStorage,
    output_dir: Union[str, Path],
    kv_files: Optional[Iterable[str]] = None,
    nkv_files: Optional[Iterable[str]] = None,
) -> Dict[str, str]:
    """
    Write a snapshot of the current cgroup state.

    Args:
        ctx: Initialized topology context
        storage: Backend used to write tables and metadata
        output_dir: Destination directory, created if missing
        kv_files: Flat keyed files to include, e.g. ["memory.stat"]
        nkv_files: Nested keyed files to include, e.g. ["io.stat"]

    Returns:
        Mapping of table name to the file written for it
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        TOPOLOGY_TABLE: cgroup_path(ctx),
        MEMBERS_TABLE: cgroup_members(ctx),
    }
    for filename in kv_files or ():
        tables[_table_name(filename)] = cgroup_setof_kv(ctx, filename)
    for filename in nkv_files or ():
        tables[_table_name(filename)] = cgroup_setof_nkv(ctx, filename)

    written = {}
    for name, df in tables.items():
        path = str(output_dir / f"{name}{storage.suffix}")
        storage.save_dataframe(df, path)
        written[name] = path

    metadata = {
        "mode": ctx.mode.value,
        "containerized": ctx.containerized,
        "root": str(ctx.config.cgroup.root),
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        "tables": {name: len(tables[name]) for name in tables},
    }
    metadata_path = str(output_dir / METADATA_FILE)
    storage.save_dict(metadata, metadata_path)
    written["metadata"] = metadata_path

    total = sum(storage.get_file_size(path) for path in written.values())
    logger.info(f"Snapshot of {len(tables)} tables written to {output_dir} ({total} bytes)")
    return written
