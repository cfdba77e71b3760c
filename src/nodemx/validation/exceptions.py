"""
Exception hierarchy and error handling helpers.

Every failure raised by nodemx derives from NodemxError. The subclasses map
onto the categories callers need to tell apart: unreadable virtual files,
content that does not match the expected grammar, oversized pseudo-files,
operations invoked in an unsupported cgroup mode, and lookups of controllers
that do not exist.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class NodemxError(Exception):
    """
    Base class for all nodemx errors.

    Carries the path of the virtual file involved, when there is one.
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None,
                 severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.severity = severity


class ReadError(NodemxError):
    """A virtual file could not be opened or a read failed mid-stream."""


class FormatError(NodemxError):
    """File content does not match the expected grammar."""


class ResourceLimitError(NodemxError):
    """A virtual file is larger than the configured read limit."""


class ConfigurationError(NodemxError):
    """An operation was invoked in an unsupported cgroup configuration."""


class NotFoundError(NodemxError):
    """A lookup key (controller, environment variable) does not exist."""


class ValidationError(NodemxError):
    """
    Exception raised when validation fails.

    Used for configuration values and for caller-supplied file names.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message, severity=severity)
        self.field_name = field_name
        self.value = value


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI-level error and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    # critical is the level that logs exc_info
    default = ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR
    severity = kwargs.pop('severity', default)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
