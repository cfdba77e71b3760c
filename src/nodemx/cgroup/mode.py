"""
Detection of the cgroup file system layout.

From https://systemd.io/CGROUP_DELEGATION/: if the cgroup root is a cgroup2
mount the system runs in unified mode. If it is a tmpfs the system runs in
legacy or hybrid mode; hybrid mode additionally mounts cgroup2 at
`<root>/unified`.

The filesystem type is taken from the mount table (psutil) rather than from
statfs() magic numbers, which Python does not expose.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

import psutil

from ..models.config import CgroupSettings, ReaderSettings
from ..models.topology import TopologyMode
from ..validation import ErrorSeverity, NodemxError, handle_file_error
from ..vfs import read_nlsv

logger = logging.getLogger(__name__)

CGROUP2_FSTYPE = "cgroup2"
TMPFS_FSTYPE = "tmpfs"

FsTypeProbe = Callable[[Path], str]


def probe_fs_type(path: Union[str, Path]) -> str:
    """
    Return the filesystem type of the mount holding `path`.

    The deepest mount point containing the path wins; among mounts stacked
    on the same point the last one listed wins.

    Raises:
        OSError: If the path does not exist or no mount contains it
    """
    real = os.path.realpath(path)
    os.stat(real)

    best = None
    for partition in psutil.disk_partitions(all=True):
        mountpoint = partition.mountpoint
        if real == mountpoint or real.startswith(mountpoint.rstrip("/") + "/"):
            if best is None or len(mountpoint) >= len(best.mountpoint):
                best = partition

    if best is None:
        raise OSError(errno.ENOENT, "no mount point found", real)
    return best.fstype


def detect_mode(
    settings: CgroupSettings,
    probe: FsTypeProbe = probe_fs_type,
    reader_settings: Optional[ReaderSettings] = None,
) -> TopologyMode:
    """
    Determine whether cgroup v1, v2, or systemd hybrid mode is in use.

    Never raises: probe failures and unexpected mount types disable cgroup
    access with a warning instead of failing the host process.

    Args:
        settings: cgroup settings (enabled flag, root, self-description file)
        probe: Callable returning the filesystem type of a path
        reader_settings: Limits for reading the self-description file

    Returns:
        The detected TopologyMode
    """
    if not settings.enabled:
        logger.info("cgroup virtual file system access disabled by configuration")
        return TopologyMode.DISABLED

    root = Path(settings.root)
    try:
        fstype = probe(root)
    except OSError as e:
        handle_file_error(
            error=e,
            context=f"statfs on cgroup mount {root}",
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger,
        )
        logger.warning("Disabling cgroup virtual file system access")
        return TopologyMode.DISABLED

    if fstype == CGROUP2_FSTYPE:
        # Some systems report hybrid-looking membership although the root
        # probes as cgroup2.
        try:
            lines = read_nlsv(settings.proc_self_cgroup, reader_settings)
        except NodemxError as e:
            handle_file_error(
                error=e,
                context=f"reading {settings.proc_self_cgroup}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            logger.warning("Disabling cgroup virtual file system access")
            return TopologyMode.DISABLED

        if len(lines) != 1:
            logger.warning(
                f"cgroup root {root} is cgroup2 but {settings.proc_self_cgroup} has "
                f"{len(lines)} lines; treating as hybrid mode"
            )
            return TopologyMode.HYBRID
        logger.debug(f"cgroup root {root} is {fstype}: unified mode")
        return TopologyMode.UNIFIED

    if fstype == TMPFS_FSTYPE:
        unified = root / "unified"
        try:
            unified_type = probe(unified)
        except OSError as e:
            logger.debug(f"No cgroup2 mount at {unified}: {e}")
            unified_type = None

        if unified_type == CGROUP2_FSTYPE:
            logger.debug(f"cgroup2 mounted at {unified}: hybrid mode")
            return TopologyMode.HYBRID
        logger.debug(f"cgroup root {root} is {fstype}: legacy mode")
        return TopologyMode.LEGACY

    logger.warning(
        f"Unexpected mount type {fstype!r} on cgroup root {root}; "
        f"disabling cgroup virtual file system access"
    )
    return TopologyMode.DISABLED
