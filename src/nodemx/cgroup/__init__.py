"""
cgroup topology: mode detection, containerization detection, controller path
resolution and cgroup membership.

The components run in order once per TopologyContext initialization:

    detect_mode -> detect_containerized -> resolve_topology

and publish a TopologyTable that every later query reads.
"""

from .containers import detect_containerized
from .context import TopologyContext, TopologySnapshot
from .members import enumerate_members
from .mode import CGROUP2_FSTYPE, TMPFS_FSTYPE, detect_mode, probe_fs_type
from .paths import controller_candidate, find_comount_path, resolve_topology
from .selfinfo import SelfCgroupLine, parse_self_cgroup_line

__all__ = [
    "CGROUP2_FSTYPE",
    "TMPFS_FSTYPE",
    "SelfCgroupLine",
    "TopologyContext",
    "TopologySnapshot",
    "controller_candidate",
    "detect_containerized",
    "detect_mode",
    "enumerate_members",
    "find_comount_path",
    "parse_self_cgroup_line",
    "probe_fs_type",
    "resolve_topology",
]
