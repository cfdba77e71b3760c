"""
Configuration validation utilities.

This module turns the raw TOML sections into validated settings objects.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    DEFAULT_CGROUP_ROOT,
    DEFAULT_KDAPI_PATH,
    MAX_COMOUNT_CONTROLLERS,
    MAX_FILE_SIZE,
    MIN_READ_SIZE,
    PROC_SELF_CGROUP,
    CgroupSettings,
    KdapiSettings,
    NodemxConfig,
    ReaderSettings,
    StorageSettings,
)
from ..validation import (
    ValidationError,
    validate_absolute_path,
    validate_boolean,
    validate_enum_choice,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_cgroup_settings(cgroup_data: Dict[str, Any]) -> CgroupSettings:
    """
    Validate and create CgroupSettings from the `[cgroup]` section.

    `containerized` is only treated as explicit when the key is present.

    Raises:
        ValidationError: If validation fails
    """
    enabled = validate_boolean(cgroup_data.get("enabled", True), "cgroup.enabled")
    root = validate_absolute_path(cgroup_data.get("root", str(DEFAULT_CGROUP_ROOT)), "cgroup.root")
    proc_self_cgroup = validate_absolute_path(
        cgroup_data.get("proc_self_cgroup", str(PROC_SELF_CGROUP)), "cgroup.proc_self_cgroup"
    )

    containerized = None
    if "containerized" in cgroup_data:
        containerized = validate_boolean(cgroup_data["containerized"], "cgroup.containerized")

    max_comount_controllers = validate_positive_integer(
        cgroup_data.get("max_comount_controllers", MAX_COMOUNT_CONTROLLERS),
        min_value=1,
        max_value=12,  # 12! orderings is already ~479M stat() calls
        field_name="cgroup.max_comount_controllers",
    )

    return CgroupSettings(
        enabled=enabled,
        root=root,
        containerized=containerized,
        proc_self_cgroup=proc_self_cgroup,
        max_comount_controllers=max_comount_controllers,
    )


def validate_reader_settings(reader_data: Dict[str, Any]) -> ReaderSettings:
    """Validate and create ReaderSettings from the `[reader]` section."""
    min_read_size = validate_positive_integer(
        reader_data.get("min_read_size", MIN_READ_SIZE),
        min_value=MIN_READ_SIZE,
        max_value=1 << 20,
        field_name="reader.min_read_size",
    )
    max_file_size = validate_positive_integer(
        reader_data.get("max_file_size", MAX_FILE_SIZE),
        min_value=min_read_size,
        max_value=MAX_FILE_SIZE,
        field_name="reader.max_file_size",
    )
    return ReaderSettings(min_read_size=min_read_size, max_file_size=max_file_size)


def validate_kdapi_settings(kdapi_data: Dict[str, Any]) -> KdapiSettings:
    """Validate and create KdapiSettings from the `[kdapi]` section."""
    enabled = validate_boolean(kdapi_data.get("enabled", True), "kdapi.enabled")
    path = validate_absolute_path(kdapi_data.get("path", str(DEFAULT_KDAPI_PATH)), "kdapi.path")
    return KdapiSettings(enabled=enabled, path=path)


def validate_storage_settings(storage_data: Dict[str, Any]) -> StorageSettings:
    """Validate and create StorageSettings from the `[storage]` section."""
    storage_format = validate_enum_choice(
        storage_data.get("format", "parquet"),
        choices=["parquet"],
        field_name="storage.format",
        case_sensitive=False,
    )
    compression = validate_enum_choice(
        storage_data.get("compression", "snappy"),
        choices=["snappy", "gzip", "brotli", "lz4", "zstd"],
        field_name="storage.compression",
        case_sensitive=False,
    )
    return StorageSettings(format=storage_format, compression=compression)


def validate_config(config_data: Dict[str, Any]) -> NodemxConfig:
    """
    Validate the whole configuration file.

    Args:
        config_data: Parsed TOML data

    Returns:
        Validated NodemxConfig instance

    Raises:
        ValidationError: If any section fails validation
    """
    known = {"cgroup", "reader", "kdapi", "storage"}
    for name in config_data:
        if name not in known:
            logger.warning(f"Ignoring unknown configuration section [{name}]")

    return NodemxConfig(
        cgroup=validate_cgroup_settings(_section(config_data, "cgroup")),
        reader=validate_reader_settings(_section(config_data, "reader")),
        kdapi=validate_kdapi_settings(_section(config_data, "kdapi")),
        storage=validate_storage_settings(_section(config_data, "storage")),
    )
