"""
Controller path resolution.

Builds the topology table mapping every cgroup controller available to this
process to the directory holding its virtual files.

Under cgroup v1 each line of /proc/self/cgroup names a hierarchy. Its
controllers are mounted at `<root>/<controller-list>`, and outside a
container the process's cgroup is `<relative-path>` below that. Co-mounted
controllers are a problem: the directory name is the comma-joined list, but
its order on disk may differ from the order the kernel reports in
/proc/self/cgroup (it varies by distribution). When the reported order does
not exist, every permutation of the list is tried.

Under cgroup v2 all controllers share one directory; the controllers
enabled there are listed in its `cgroup.controllers` file.

A controller whose directory cannot be found is recorded unresolved rather
than failing the whole pass, so one missing, rarely used controller does not
stop the host process; reading a file under it fails later.
"""

import itertools
import logging
from pathlib import Path
from typing import List, Optional

from ..models.config import CgroupSettings, ReaderSettings
from ..models.topology import (
    DEFAULT_CONTROLLER_KEY,
    ControllerPathEntry,
    TopologyMode,
    TopologyTable,
)
from ..validation import ConfigurationError
from ..vfs import read_space_separated_file
from .selfinfo import read_self_cgroup, read_unified_relative_path

logger = logging.getLogger(__name__)

CONTROLLERS_FILE = "cgroup.controllers"


def controller_candidate(
    root: Path, controller_list: str, relative_path: str, containerized: bool
) -> Path:
    """Directory where a v1 hierarchy's files are expected."""
    if containerized:
        return Path(root, controller_list)
    return Path(root, controller_list, relative_path)


def find_comount_path(
    root: Path,
    controllers: List[str],
    relative_path: str,
    containerized: bool,
    max_controllers: int,
) -> Optional[Path]:
    """
    Search the orderings of co-mounted controllers for an existing directory.

    The reported order is expected to have been tried already, so it is
    skipped. Lists longer than `max_controllers` are not searched.

    Returns:
        The first existing candidate, or None
    """
    if len(controllers) > max_controllers:
        logger.warning(
            f"Not searching orderings of {len(controllers)} co-mounted controllers "
            f"{','.join(controllers)} (limit {max_controllers})"
        )
        return None

    orderings = itertools.permutations(controllers)
    next(orderings, None)
    for ordering in orderings:
        candidate = controller_candidate(root, ",".join(ordering), relative_path, containerized)
        if candidate.exists():
            logger.debug(f"Co-mounted controllers {','.join(controllers)} found at {candidate}")
            return candidate
    return None


def _resolve_legacy(
    settings: CgroupSettings,
    containerized: bool,
    reader_settings: Optional[ReaderSettings],
) -> List[ControllerPathEntry]:
    lines = read_self_cgroup(settings, reader_settings)
    if not lines:
        raise ConfigurationError(
            f"no cgroup paths found in file {settings.proc_self_cgroup}",
            path=settings.proc_self_cgroup,
        )

    root = Path(settings.root)
    entries: List[ControllerPathEntry] = []
    default_path: Optional[Path] = None

    for line in lines:
        if not line.controller_list:
            logger.debug(f"Skipping hierarchy {line.hierarchy_id} with no controllers")
            continue

        path: Optional[Path] = controller_candidate(
            root, line.controller_list, line.relative_path, containerized
        )
        if not path.exists():
            if len(line.controllers) > 1:
                path = find_comount_path(
                    root,
                    line.controllers,
                    line.relative_path,
                    containerized,
                    settings.max_comount_controllers,
                )
            else:
                path = None

        if path is None:
            logger.warning(f"No directory found for cgroup controller {line.controller_list}")

        entries.append(ControllerPathEntry(line.controller_list, path))
        if "memory" in line.controllers and default_path is None:
            default_path = path

    entries.append(ControllerPathEntry(DEFAULT_CONTROLLER_KEY, default_path))
    return entries


def _resolve_unified(
    settings: CgroupSettings,
    containerized: bool,
    reader_settings: Optional[ReaderSettings],
) -> List[ControllerPathEntry]:
    root = Path(settings.root)
    if containerized:
        base = root
    else:
        base = Path(root, read_unified_relative_path(settings, reader_settings))

    controllers = read_space_separated_file(base / CONTROLLERS_FILE, reader_settings)

    # v2 is one hierarchy; every controller shares the same directory
    entries = [ControllerPathEntry(controller, base) for controller in controllers]
    entries.append(ControllerPathEntry(DEFAULT_CONTROLLER_KEY, base))
    return entries


def resolve_topology(
    mode: TopologyMode,
    containerized: bool,
    settings: CgroupSettings,
    reader_settings: Optional[ReaderSettings] = None,
) -> TopologyTable:
    """
    Build a new topology table from scratch.

    Args:
        mode: Detected cgroup mode
        containerized: Whether controller files live directly under the root
        settings: cgroup settings
        reader_settings: Limits for reading virtual files

    Returns:
        A fully populated TopologyTable ending with the default entry

    Raises:
        ConfigurationError: If the mode is hybrid, disabled or otherwise unsupported
    """
    if mode == TopologyMode.LEGACY:
        entries = _resolve_legacy(settings, containerized, reader_settings)
    elif mode == TopologyMode.UNIFIED:
        entries = _resolve_unified(settings, containerized, reader_settings)
    else:
        raise ConfigurationError(f"unsupported cgroup configuration: {mode.value}")

    table = TopologyTable(tuple(entries))
    logger.info(
        f"Resolved {len(table)} cgroup controller paths "
        f"({sum(1 for e in table if not e.resolved)} unresolved)"
    )
    return table
