"""
Virtual file reader.

Kernel pseudo-files report a size of zero (or a meaningless one) to stat(),
so their contents can only be obtained by reading until EOF. The reader grows
its request size with the buffer and refuses to buffer more than a
configured upper bound.
"""

import logging
from pathlib import Path
from typing import Union

from ..models.config import MAX_FILE_SIZE, MIN_READ_SIZE
from ..validation import ReadError, ResourceLimitError

logger = logging.getLogger(__name__)


def read_vfs(
    path: Union[str, Path],
    max_bytes: int = MAX_FILE_SIZE,
    min_read_size: int = MIN_READ_SIZE,
) -> str:
    """
    Read the full contents of a virtual file.

    Args:
        path: Absolute path of the file
        max_bytes: Largest content accepted
        min_read_size: Smallest read request issued

    Returns:
        File contents decoded as UTF-8 (undecodable bytes are replaced)

    Raises:
        ReadError: If the file cannot be opened or a read fails
        ResourceLimitError: If the file holds more than max_bytes bytes
    """
    try:
        vfile = open(path, "rb", buffering=0)
    except OSError as e:
        raise ReadError(
            f"could not open file \"{path}\" for reading: {e.strerror or e}", path=path
        ) from e

    buf = bytearray()
    with vfile:
        request = min_read_size
        while True:
            # Ask for one byte past the limit so an oversized file is detected
            # without buffering all of it.
            want = min(request, max_bytes - len(buf) + 1)
            try:
                chunk = vfile.read(want)
            except OSError as e:
                raise ReadError(
                    f"could not read file \"{path}\": {e.strerror or e}", path=path
                ) from e
            if not chunk:
                break
            buf += chunk
            if len(buf) > max_bytes:
                raise ResourceLimitError(
                    f"file length too large: \"{path}\" exceeds {max_bytes} bytes", path=path
                )
            request = max(min_read_size, len(buf))

    logger.debug(f"Read {len(buf)} bytes from {path}")
    return buf.decode("utf-8", errors="replace")
