"""
nodemx: cgroup topology resolution and virtual file access.

Works out how the cgroup file system is mounted for the current process
(unified v2, legacy v1, hybrid or unavailable), maps every controller to the
directory holding its virtual files, and parses those files into Python
values and Polars DataFrames.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Settings dataclasses and the topology table
- validation: Exception hierarchy, input validation and error handling
- vfs: Bounded virtual file reader, format parsers and numeric normalization
- cgroup: Mode detection, containerization detection, path resolution
- functions: Scalar and set accessors over an initialized context
- storage: Parquet snapshot storage
- cli: Command-line interface

Usage:
    From command line:
        nodemx paths
        nodemx setof kv memory.stat

    Programmatically:
        from nodemx import TopologyContext, get_config
        from nodemx.functions import cgroup_setof_kv
        ctx = TopologyContext(get_config()).initialize()
        cgroup_setof_kv(ctx, "memory.stat")
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .cgroup import TopologyContext
from .cli import main_cli

# Model classes for external use
from .models import (
    CgroupSettings,
    ControllerPathEntry,
    KdapiSettings,
    NodemxConfig,
    ReaderSettings,
    StorageSettings,
    TopologyMode,
    TopologyTable,
)

# Errors
from .validation import (
    ConfigurationError,
    FormatError,
    NodemxError,
    NotFoundError,
    ReadError,
    ResourceLimitError,
    ValidationError,
    validate_relative_filename,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "TopologyContext",
    "main_cli",
    # Models
    "CgroupSettings",
    "ControllerPathEntry",
    "KdapiSettings",
    "NodemxConfig",
    "ReaderSettings",
    "StorageSettings",
    "TopologyMode",
    "TopologyTable",
    # Errors
    "ConfigurationError",
    "FormatError",
    "NodemxError",
    "NotFoundError",
    "ReadError",
    "ResourceLimitError",
    "ValidationError",
    "validate_relative_filename",
]
