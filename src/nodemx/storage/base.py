"""
Abstract interface for snapshot storage backends.

A snapshot is a handful of small tables (topology rows, member pids,
parsed virtual files) plus a metadata dictionary. Backends decide how
those are laid out on disk.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import polars as pl


class DataStorage(ABC):
    """Abstract base class for snapshot storage implementations."""

    #: File suffix used for tables written by this backend.
    suffix: str = ""

    @abstractmethod
    def save_dataframe(self, df: pl.DataFrame, path: str) -> None:
        """
        Write a table to `path`, creating parent directories.

        Args:
            df: Polars DataFrame to save
            path: Destination file path
        """

    @abstractmethod
    def load_dataframe(self, path: str, columns: Optional[List[str]] = None) -> pl.DataFrame:
        """
        Read a table back, optionally restricted to `columns`.
        """

    @abstractmethod
    def save_dict(self, data: Dict[str, Any], path: str) -> None:
        """Write snapshot metadata."""

    @abstractmethod
    def load_dict(self, path: str) -> Dict[str, Any]:
        """Read snapshot metadata."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def get_file_size(self, path: str) -> int:
        """Size of a written file in bytes, 0 when it does not exist."""
