"""
Factory for creating storage instances.
"""

import logging

from .base import DataStorage
from .parquet_storage import Compression, ParquetStorage

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("parquet",)


def create_storage(format_type: str = "parquet", compression: Compression = "snappy") -> DataStorage:
    """
    Create a storage backend for snapshots.

    Args:
        format_type: Storage format type (only 'parquet' is supported)
        compression: Parquet compression algorithm

    Returns:
        DataStorage instance

    Raises:
        ValueError: If an unsupported format type is specified
    """
    if format_type.lower() == "parquet":
        logger.debug(f"Creating ParquetStorage with compression: {compression}")
        return ParquetStorage(compression=compression)
    raise ValueError(f"Unsupported storage format: {format_type}")
