"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Read a TOML file into a dictionary of configuration sections.

    Section contents are not checked here; config.validators turns the
    result into a NodemxConfig.

    Raises:
        FileNotFoundError: If `file_path` does not exist. The CLI reports
            this as a configuration loading failure and exits with code 1.
        tomllib.TOMLDecodeError: If the file is not valid TOML. Logged at
            critical severity with the traceback before propagating.
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.is_file():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with file_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            logger=logger,
        )
        raise

    logger.debug(f"{description} sections: {sorted(data)}")
    return data


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """
    Load the main configuration file (config.toml).

    Args:
        config_path: Path to the config.toml file

    Returns:
        Parsed configuration data
    """
    return load_toml_file(config_path, "main configuration file")
