"""
Detection of whether this process runs inside a container.

Outside a container the controller files live where /proc/self/cgroup says,
below the cgroup root. Container runtimes typically mount the process's own
cgroup directly at the root instead, so the kernel-reported path does not
exist there.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import CgroupSettings, ReaderSettings
from ..models.topology import TopologyMode
from ..validation import ConfigurationError
from .selfinfo import read_self_cgroup, read_unified_relative_path

logger = logging.getLogger(__name__)


def _legacy_candidate(
    settings: CgroupSettings, reader_settings: Optional[ReaderSettings]
) -> Optional[Path]:
    lines = read_self_cgroup(settings, reader_settings)
    if not lines:
        raise ConfigurationError(
            f"no cgroup paths found in file {settings.proc_self_cgroup}",
            path=settings.proc_self_cgroup,
        )
    # the memory controller path is the one tested
    for line in lines:
        if "memory" in line.controllers:
            return Path(settings.root, "memory", line.relative_path)
    return None


def detect_containerized(
    mode: TopologyMode,
    settings: CgroupSettings,
    reader_settings: Optional[ReaderSettings] = None,
) -> bool:
    """
    Decide whether controller files are found directly under the cgroup root.

    Only legacy and unified hierarchies can be containerized. For those, a
    value set explicitly in the configuration file wins over the probe.

    Raises:
        ConfigurationError: If /proc/self/cgroup lists no hierarchies in legacy mode
    """
    if mode not in (TopologyMode.LEGACY, TopologyMode.UNIFIED):
        return False

    if settings.containerized_is_explicit:
        logger.info(f"containerized={settings.containerized} set by configuration")
        return bool(settings.containerized)

    if mode == TopologyMode.LEGACY:
        candidate = _legacy_candidate(settings, reader_settings)
    else:
        candidate = Path(settings.root, read_unified_relative_path(settings, reader_settings))

    if candidate is None:
        logger.info("No memory controller listed in self cgroup file; assuming containerized")
        return True

    containerized = not candidate.exists()
    logger.info(f"Probed {candidate}: containerized={containerized}")
    return containerized
