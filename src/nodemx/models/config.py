"""
Configuration data models.

This module contains the configuration structures loaded from `config.toml`:
cgroup access settings, virtual file reader limits, Kubernetes Downward API
settings and snapshot storage settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

DEFAULT_CGROUP_ROOT = Path("/sys/fs/cgroup")
PROC_SELF_CGROUP = Path("/proc/self/cgroup")
DEFAULT_KDAPI_PATH = Path("/etc/podinfo")

# Minimum amount to read at a time
MIN_READ_SIZE = 4096
# Largest virtual file we agree to buffer (1 GiB - 1)
MAX_FILE_SIZE = (1 << 30) - 1
# Longest co-mounted controller list searched by permutation
MAX_COMOUNT_CONTROLLERS = 10


@dataclass
class CgroupSettings:
    """
    Settings for cgroup virtual file system access, loaded from `[cgroup]`.
    """

    # False forces the "disabled" mode before anything is probed.
    enabled: bool = True
    # Mount point of the cgroup file system.
    root: Path = DEFAULT_CGROUP_ROOT
    # None means "not set in the configuration file": derive it at runtime.
    containerized: Optional[bool] = None
    # Self-description file listing this process's cgroup membership.
    proc_self_cgroup: Path = PROC_SELF_CGROUP
    max_comount_controllers: int = MAX_COMOUNT_CONTROLLERS

    @property
    def containerized_is_explicit(self) -> bool:
        return self.containerized is not None


@dataclass
class ReaderSettings:
    """
    Limits applied while reading virtual files, loaded from `[reader]`.
    """

    min_read_size: int = MIN_READ_SIZE
    max_file_size: int = MAX_FILE_SIZE


@dataclass
class KdapiSettings:
    """
    Kubernetes Downward API settings, loaded from `[kdapi]`.
    """

    enabled: bool = True
    path: Path = DEFAULT_KDAPI_PATH


@dataclass
class StorageSettings:
    """
    Snapshot storage settings, loaded from `[storage]`.
    """

    format: Literal["parquet"] = "parquet"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"


@dataclass
class NodemxConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    cgroup: CgroupSettings = field(default_factory=CgroupSettings)
    reader: ReaderSettings = field(default_factory=ReaderSettings)
    kdapi: KdapiSettings = field(default_factory=KdapiSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
