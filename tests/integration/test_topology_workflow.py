"""
Integration tests for the configuration -> topology -> accessor workflow.

A configuration file points at a fake cgroup tree; the context is built from
the global configuration and queried through the public accessors.
"""

import toml
import pytest

from conftest import make_probe, write_file
from nodemx.cgroup import TopologyContext
from nodemx.config import get_config, set_config_path
from nodemx.functions import (
    cgroup_mode,
    cgroup_path,
    cgroup_process_count,
    cgroup_scalar_bigint,
    cgroup_setof_kv,
    take_snapshot,
)
from nodemx.models import TopologyMode
from nodemx.storage import create_storage
from nodemx.validation import ReadError


@pytest.mark.integration
class TestUnifiedWorkflow:
    """End-to-end use of the library against a fake cgroup v2 tree."""

    def test_query_and_snapshot(self, config_files, unified_tree, temp_dir):
        set_config_path(config_files["config"])
        ctx = TopologyContext.from_config(probe=unified_tree["probe"])

        assert cgroup_mode(ctx) == "unified"
        assert cgroup_process_count(ctx) == 3
        assert dict(cgroup_setof_kv(ctx, "memory.stat").rows())["file"] == 2048

        config = get_config()
        storage = create_storage(config.storage.format, config.storage.compression)
        written = take_snapshot(ctx, storage, temp_dir / "out", kv_files=["memory.stat"])

        assert storage.compression == "zstd"
        assert len(storage.load_dataframe(written["memory_stat"])) == 3

    def test_reinitialize_after_cgroup_move(self, unified_tree):
        """A new pass picks up a changed cgroup membership."""
        ctx = TopologyContext(unified_tree["config"], probe=unified_tree["probe"]).initialize()
        new_dir = unified_tree["root"] / "system.slice" / "db.service"
        write_file(new_dir / "cgroup.controllers", "memory\n")
        write_file(new_dir / "memory.max", "1073741824\n")
        unified_tree["self_cgroup"].write_text("0::/system.slice/db.service\n")

        ctx.initialize()

        assert cgroup_path(ctx).rows() == [
            ("memory", str(new_dir)),
            ("cgroup,default", str(new_dir)),
        ]
        assert cgroup_scalar_bigint(ctx, "memory.max") == 1073741824


@pytest.mark.integration
class TestLegacyWorkflow:
    """Library use against a fake cgroup v1 tree with a configuration file."""

    def test_explicit_containerized_layout(self, legacy_tree, temp_dir):
        root = legacy_tree["root"]
        write_file(root / "memory" / "memory.usage_in_bytes", "4096\n")
        config_file = temp_dir / "config.toml"
        with open(config_file, "w") as f:
            toml.dump(
                {
                    "cgroup": {
                        "root": str(root),
                        "proc_self_cgroup": str(legacy_tree["self_cgroup"]),
                        "containerized": True,
                    }
                },
                f,
            )
        set_config_path(config_file)

        ctx = TopologyContext.from_config(probe=legacy_tree["probe"])

        assert ctx.mode == TopologyMode.LEGACY
        assert ctx.containerized is True
        assert cgroup_scalar_bigint(ctx, "memory.usage_in_bytes") == 4096
        assert ctx.table.lookup("cpuacct").path == root / "cpuacct,cpu"

        with pytest.raises(ReadError):
            cgroup_scalar_bigint(ctx, "pids.current")

    def test_mode_probe_failure_degrades_to_disabled(self, legacy_tree):
        ctx = TopologyContext(legacy_tree["config"], probe=make_probe({})).initialize()

        assert cgroup_mode(ctx) == "disabled"
        assert cgroup_process_count(ctx) is None
        assert len(cgroup_path(ctx)) == 0
