"""
Validation and error handling for the nodemx package.

This module provides the exception hierarchy shared by every component,
input validation for configuration values and caller-supplied file names,
and consistent error logging helpers.
"""

from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    FormatError,
    NodemxError,
    NotFoundError,
    ReadError,
    ResourceLimitError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)

from .validators import (
    validate_absolute_path,
    validate_boolean,
    validate_enum_choice,
    validate_positive_integer,
    validate_relative_filename,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "ErrorSeverity",
    "FormatError",
    "NodemxError",
    "NotFoundError",
    "ReadError",
    "ResourceLimitError",
    "ValidationError",
    # Error handling
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_file_error",
    # Validators
    "validate_absolute_path",
    "validate_boolean",
    "validate_enum_choice",
    "validate_positive_integer",
    "validate_relative_filename",
]
