"""
Pytest configuration and shared fixtures for the nodemx test suite.

The cgroup fixtures build fake cgroup trees under a temporary directory: a
mount root, a stand-in for /proc/self/cgroup and the controller
directories. Filesystem types come from a fake probe instead of the real
mount table.
"""

import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nodemx.models.config import CgroupSettings, KdapiSettings, NodemxConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Helpers
# ============================================================================


def write_file(path: Path, content: str) -> Path:
    """Write `content` to `path`, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def make_probe(types: Dict[Path, str]) -> Callable[[Path], str]:
    """
    Build a filesystem type probe from a {path: fstype} mapping.

    Paths missing from the mapping behave like a failed statfs().
    """
    lookup = {str(path): fstype for path, fstype in types.items()}

    def probe(path):
        try:
            return lookup[str(path)]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", str(path))

    return probe


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for test files."""
    return tmp_path


@pytest.fixture
def unified_tree(tmp_path):
    """
    A cgroup v2 host: the process lives in /user.slice/session-1.scope.
    """
    base = tmp_path / "v2"
    root = base / "cgroup"
    root.mkdir(parents=True)
    self_cgroup = write_file(base / "proc" / "self_cgroup", "0::/user.slice/session-1.scope\n")
    cgdir = root / "user.slice" / "session-1.scope"

    write_file(cgdir / "cgroup.controllers", "cpuset cpu io memory pids\n")
    write_file(cgdir / "cgroup.procs", "30\n10\n10\n20\n")
    write_file(cgdir / "memory.max", "max\n")
    write_file(cgdir / "memory.current", "123456\n")
    write_file(cgdir / "memory.stat", "anon 1024\nfile 2048\nkernel_stack 0\n")
    write_file(cgdir / "cpu.max", "max 100000\n")
    write_file(cgdir / "cpu.weight", "100\n")
    write_file(cgdir / "cpu.uclamp.min", "0.00\n")
    write_file(
        cgdir / "io.stat",
        "8:0 rbytes=90430 wbytes=0 rios=12 wios=0\n"
        "8:16 rbytes=1 wbytes=2 rios=3 wios=4\n",
    )
    write_file(
        cgdir / "memory.pressure",
        "some avg10=0.00 avg60=0.00 avg300=0.00 total=0\n"
        "full avg10=0.00 avg60=0.00 avg300=0.00 total=0\n",
    )
    write_file(cgdir / "cgroup.type", "domain\n")

    podinfo = base / "podinfo"
    write_file(podinfo / "cpu_limit", "2\n")
    write_file(podinfo / "mem_limit", "536870912\n")
    write_file(
        podinfo / "labels",
        'cluster="test-cluster1"\nname="hippo"\nmultiline="multi\\nline"\n',
    )

    config = NodemxConfig(
        cgroup=CgroupSettings(root=root, proc_self_cgroup=self_cgroup),
        kdapi=KdapiSettings(path=podinfo),
    )
    return {
        "root": root,
        "self_cgroup": self_cgroup,
        "cgroup_dir": cgdir,
        "podinfo": podinfo,
        "config": config,
        "probe": make_probe({root: "cgroup2"}),
    }


@pytest.fixture
def legacy_tree(tmp_path):
    """
    A cgroup v1 host.

    cpu and cpuacct are co-mounted as "cpuacct,cpu" on disk while the kernel
    reports "cpu,cpuacct"; the pids hierarchy has no directory at all.
    """
    base = tmp_path / "v1"
    root = base / "cgroup"
    root.mkdir(parents=True)
    self_cgroup = write_file(
        base / "proc" / "self_cgroup",
        "12:memory:/user.slice\n"
        "11:cpu,cpuacct:/user.slice\n"
        "10:pids:/user.slice\n"
        "9:blkio:/user.slice\n"
        "1:name=systemd:/user.slice\n"
        "0::/user.slice\n",
    )

    memory = root / "memory" / "user.slice"
    write_file(memory / "cgroup.procs", "4\n2\n3\n")
    write_file(memory / "memory.limit_in_bytes", "9223372036854771712\n")
    write_file(memory / "memory.stat", "cache 4096\nrss 8192\n")

    cpu = root / "cpuacct,cpu" / "user.slice"
    write_file(cpu / "cpuacct.usage", "987654321\n")
    write_file(cpu / "cpu.shares", "1024\n")

    blkio = root / "blkio" / "user.slice"
    write_file(
        blkio / "blkio.throttle.io_serviced",
        "8:0 Read 10\n8:0 Write 5\n8:0 Sync 1\n8:0 Async 14\n8:0 Total 15\nTotal 15\n",
    )

    (root / "systemd" / "user.slice").mkdir(parents=True)

    config = NodemxConfig(
        cgroup=CgroupSettings(root=root, proc_self_cgroup=self_cgroup),
        kdapi=KdapiSettings(path=base / "podinfo"),
    )
    return {
        "root": root,
        "self_cgroup": self_cgroup,
        "memory_dir": memory,
        "cpu_dir": cpu,
        "blkio_dir": blkio,
        "config": config,
        "probe": make_probe({root: "tmpfs"}),
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data(unified_tree):
    """Configuration file contents pointing at the fake unified tree."""
    return {
        "cgroup": {
            "enabled": True,
            "root": str(unified_tree["root"]),
            "proc_self_cgroup": str(unified_tree["self_cgroup"]),
            "max_comount_controllers": 6,
        },
        "reader": {
            "min_read_size": 4096,
            "max_file_size": 1 << 20,
        },
        "kdapi": {
            "enabled": True,
            "path": str(unified_tree["podinfo"]),
        },
        "storage": {
            "format": "parquet",
            "compression": "zstd",
        },
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary config.toml for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from nodemx.config import clear_config_cache, set_config_path

    clear_config_cache()

    # Always reset to original config path
    set_config_path(original_config_path)
