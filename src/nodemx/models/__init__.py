"""
Data models for the nodemx package.

Configuration Models:
- cgroup access, reader limits, Downward API and storage settings

Topology Models:
- cgroup mode, controller path entries and the topology table
"""

from .config import (
    CgroupSettings,
    KdapiSettings,
    NodemxConfig,
    ReaderSettings,
    StorageSettings,
)
from .topology import (
    CONTROLLER_NOT_FOUND,
    DEFAULT_CONTROLLER_KEY,
    ControllerPathEntry,
    TopologyMode,
    TopologyTable,
)

__all__ = [
    # Configuration
    "CgroupSettings",
    "KdapiSettings",
    "NodemxConfig",
    "ReaderSettings",
    "StorageSettings",
    # Topology
    "CONTROLLER_NOT_FOUND",
    "DEFAULT_CONTROLLER_KEY",
    "ControllerPathEntry",
    "TopologyMode",
    "TopologyTable",
]
