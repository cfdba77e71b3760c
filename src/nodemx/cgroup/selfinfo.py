"""
Parsing of the process's self-description file, /proc/self/cgroup.

Lines look like `<hierarchy-id>:<controller-list>:<relative-path>`, e.g.
`4:cpu,cpuacct:/user.slice` under cgroup v1 or the single line `0::/foo`
under cgroup v2.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..models.config import CgroupSettings, ReaderSettings
from ..validation import FormatError
from ..vfs import read_nlsv, read_one_nlsv

UNIFIED_PREFIX = "0::/"
NAMED_HIERARCHY_PREFIX = "name="


@dataclass(frozen=True)
class SelfCgroupLine:
    hierarchy_id: str
    # Controller list with any "name=" prefix removed, e.g. "cpu,cpuacct" or "systemd"
    controller_list: str
    # Path below the hierarchy mount, without its leading "/"
    relative_path: str

    @property
    def controllers(self) -> List[str]:
        return self.controller_list.split(",") if self.controller_list else []


def parse_self_cgroup_line(line: str, source: Optional[Path] = None) -> SelfCgroupLine:
    """
    Parse one line of /proc/self/cgroup.

    Named hierarchies ("name=systemd") use the name as their directory, so
    the prefix is dropped.

    Raises:
        FormatError: If the line does not have three colon separated fields
    """
    fields = line.split(":", 2)
    if len(fields) != 3:
        raise FormatError(f"malformed cgroup path found in file {source}: \"{line}\"", path=source)

    hierarchy_id, controller_list, relative_path = fields
    if controller_list.startswith(NAMED_HIERARCHY_PREFIX):
        controller_list = controller_list[len(NAMED_HIERARCHY_PREFIX):]
    return SelfCgroupLine(hierarchy_id, controller_list, relative_path.lstrip("/"))


def read_self_cgroup(
    settings: CgroupSettings, reader_settings: Optional[ReaderSettings] = None
) -> List[SelfCgroupLine]:
    """Read and parse every line of the self-description file."""
    source = settings.proc_self_cgroup
    return [parse_self_cgroup_line(line, source) for line in read_nlsv(source, reader_settings)]


def read_unified_relative_path(
    settings: CgroupSettings, reader_settings: Optional[ReaderSettings] = None
) -> str:
    """
    Relative path of this process's cgroup under cgroup v2.

    The file has exactly one line, which always starts with "0::/".
    """
    source = settings.proc_self_cgroup
    line = read_one_nlsv(source, reader_settings)
    if not line.startswith(UNIFIED_PREFIX):
        raise FormatError(
            f"expected a \"{UNIFIED_PREFIX}\" line in file {source}, got \"{line}\"", path=source
        )
    return line[len(UNIFIED_PREFIX):]
