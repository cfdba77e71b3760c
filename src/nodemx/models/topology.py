"""
Cgroup topology data models.

The topology table maps controller names to the directories holding their
virtual files. It is built in one pass by the controller path resolver and
never patched afterwards; a new pass produces a new table.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..validation import NotFoundError

# Rendered in place of a path when a controller directory was not found.
CONTROLLER_NOT_FOUND = "Controller_Not_Found"

# Key of the synthetic entry locating cgroup.procs. Both names are aliases.
DEFAULT_CONTROLLER_KEY = "cgroup,default"


class TopologyMode(Enum):
    """Layout of the cgroup file system as seen by this process."""
    UNIFIED = "unified"
    LEGACY = "legacy"
    HYBRID = "hybrid"
    DISABLED = "disabled"

    @property
    def is_supported(self) -> bool:
        """Whether controller paths can be resolved in this mode."""
        return self in (TopologyMode.UNIFIED, TopologyMode.LEGACY)


@dataclass(frozen=True)
class ControllerPathEntry:
    """
    One row of the topology table.

    `controller` may be a comma-joined list of co-mounted controllers
    (e.g. "cpu,cpuacct"); each member is a lookup key of its own.
    `path` is None when the controller directory could not be found.
    """

    controller: str
    path: Optional[Path]

    @property
    def resolved(self) -> bool:
        return self.path is not None

    @property
    def display_path(self) -> str:
        return str(self.path) if self.path is not None else CONTROLLER_NOT_FOUND

    @property
    def aliases(self) -> List[str]:
        return self.controller.split(",")

    def matches(self, key: str) -> bool:
        return key == self.controller or key in self.aliases


@dataclass(frozen=True)
class TopologyTable:
    """Immutable, ordered collection of controller path entries."""

    entries: Tuple[ControllerPathEntry, ...] = ()

    def __iter__(self) -> Iterator[ControllerPathEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, key: str) -> ControllerPathEntry:
        """
        Find the entry serving a controller key.

        Raises:
            NotFoundError: If no entry carries the key
        """
        for entry in self.entries:
            if entry.matches(key):
                return entry
        raise NotFoundError(f"failed to find controller {key}")

    def resolve_path(self, key: str) -> str:
        """Path of a controller, or the not-found sentinel if it was unresolved."""
        return self.lookup(key).display_path

    @property
    def default_entry(self) -> ControllerPathEntry:
        return self.lookup("cgroup")

    def rows(self) -> List[Tuple[str, str]]:
        """(controller, path) pairs in table order."""
        return [(entry.controller, entry.display_path) for entry in self.entries]
