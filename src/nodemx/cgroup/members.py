"""
Enumeration of the processes that belong to this process's cgroup.
"""

import logging
from typing import List, Optional, Tuple

from ..models.config import ReaderSettings
from ..models.topology import CONTROLLER_NOT_FOUND, TopologyTable
from ..validation import FormatError, ReadError
from ..vfs import read_nlsv, to_int64

logger = logging.getLogger(__name__)

PROCS_FILE = "cgroup.procs"


def enumerate_members(
    table: TopologyTable, reader_settings: Optional[ReaderSettings] = None
) -> Tuple[List[int], int]:
    """
    List the distinct pids in the cgroup, ascending.

    In cgroup v2 cgroup.procs is neither sorted nor guaranteed unique.

    Args:
        table: Topology table whose default entry locates cgroup.procs
        reader_settings: Limits for reading the file

    Returns:
        (pids, count) with pids sorted ascending and free of duplicates

    Raises:
        ReadError: If the default controller is unresolved or the file is unreadable
        FormatError: If a line is not an integer
    """
    entry = table.default_entry
    if not entry.resolved:
        raise ReadError(
            f"could not open file \"{CONTROLLER_NOT_FOUND}/{PROCS_FILE}\" for reading: "
            f"memory controller was not found",
            path=f"{CONTROLLER_NOT_FOUND}/{PROCS_FILE}",
        )

    path = entry.path / PROCS_FILE
    pids = []
    for lineno, line in enumerate(read_nlsv(path, reader_settings), start=1):
        try:
            pids.append(to_int64(line, allow_max=False))
        except FormatError as e:
            raise FormatError(
                f"contents not an integer, file \"{path}\", line {lineno}", path=path
            ) from e

    members = sorted(set(pids))
    logger.debug(f"{len(members)} distinct pids in {path}")
    return members, len(members)
