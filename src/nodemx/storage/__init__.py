"""
Storage backends for topology snapshots.

Tables are written as compressed Parquet through Polars; snapshot
metadata is written as JSON next to them.
"""

from .base import DataStorage
from .factory import SUPPORTED_FORMATS, create_storage
from .parquet_storage import ParquetStorage

__all__ = ["DataStorage", "ParquetStorage", "SUPPORTED_FORMATS", "create_storage"]
