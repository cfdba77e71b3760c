"""
The topology context: resolve once, read many.

A TopologyContext is created once by the host process and handed to every
accessor. It owns the detected cgroup mode, the containerized flag and the
topology table. Re-initialization builds a complete new snapshot and
publishes it with a single assignment, so readers never observe a partly
rebuilt table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..models.config import NodemxConfig
from ..models.topology import CONTROLLER_NOT_FOUND, TopologyMode, TopologyTable
from ..validation import ConfigurationError, ReadError, ValidationError, validate_relative_filename
from .containers import detect_containerized
from .members import enumerate_members
from .mode import FsTypeProbe, detect_mode, probe_fs_type
from .paths import resolve_topology

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopologySnapshot:
    """Result of one detection and resolution pass."""

    mode: TopologyMode = TopologyMode.DISABLED
    containerized: bool = False
    table: TopologyTable = field(default_factory=TopologyTable)


class TopologyContext:
    """
    Long-lived owner of the cgroup topology.

    Usage:
        ctx = TopologyContext(get_config()).initialize()
        ctx.file_path("memory.stat")
    """

    def __init__(self, config: Optional[NodemxConfig] = None, probe: FsTypeProbe = probe_fs_type):
        self.config = config or NodemxConfig()
        self._probe = probe
        self._snapshot = TopologySnapshot()

    @classmethod
    def from_config(cls, probe: FsTypeProbe = probe_fs_type) -> "TopologyContext":
        """Create and initialize a context from the global configuration."""
        from ..config import get_config

        return cls(get_config(), probe=probe).initialize()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def mode(self) -> TopologyMode:
        return self._snapshot.mode

    @property
    def containerized(self) -> bool:
        return self._snapshot.containerized

    @property
    def table(self) -> TopologyTable:
        return self._snapshot.table

    @property
    def enabled(self) -> bool:
        """Whether cgroup virtual files can be accessed."""
        return self.mode.is_supported

    @property
    def kdapi_enabled(self) -> bool:
        return self.config.kdapi.enabled

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> "TopologyContext":
        """
        Detect the mode and containerization, then resolve controller paths.

        Mode detection never fails; path resolution errors propagate and
        leave the previously published snapshot in place.
        """
        cgroup = self.config.cgroup
        reader = self.config.reader

        mode = detect_mode(cgroup, probe=self._probe, reader_settings=reader)
        containerized = detect_containerized(mode, cgroup, reader)
        if mode.is_supported:
            table = resolve_topology(mode, containerized, cgroup, reader)
        else:
            table = TopologyTable()

        self._snapshot = TopologySnapshot(mode, containerized, table)
        logger.info(
            f"cgroup mode={mode.value} containerized={containerized} "
            f"root={cgroup.root} controllers={len(table)}"
        )
        return self

    def reconfigure(self, config: NodemxConfig) -> "TopologyContext":
        """Replace the configuration and run a full new pass."""
        self.config = config
        return self.initialize()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def require_enabled(self) -> None:
        if not self.enabled:
            raise ConfigurationError(
                f"cgroup virtual file system access is not available in {self.mode.value} mode"
            )

    def file_path(self, filename: str) -> Path:
        """
        Fully qualified path of a controller file.

        The controller is the part of the name before the first ".", so
        "memory.stat" is read from the memory controller's directory and
        "cgroup.procs" from the default entry.

        Raises:
            ValidationError: If the name is unsafe or has no "."
            NotFoundError: If no controller of that name exists
            ReadError: If the controller's directory was not found
        """
        name = validate_relative_filename(filename)
        controller, dot, _ = name.partition(".")
        if not dot or not controller:
            raise ValidationError(
                f"missing \".\" in filename {name}", field_name="filename", value=filename
            )

        entry = self.table.lookup(controller)
        if not entry.resolved:
            missing = f"{CONTROLLER_NOT_FOUND}/{name}"
            raise ReadError(
                f"could not open file \"{missing}\" for reading: "
                f"controller {controller} was not found",
                path=missing,
            )
        return entry.path / name

    def kdapi_file_path(self, filename: str) -> Path:
        """Fully qualified path of a Kubernetes Downward API file."""
        return Path(self.config.kdapi.path, validate_relative_filename(filename))

    def members(self) -> Tuple[List[int], int]:
        """Distinct pids of this cgroup and their count."""
        self.require_enabled()
        return enumerate_members(self.table, self.config.reader)
