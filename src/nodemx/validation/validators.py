"""
Validation functions for configuration values and caller-supplied file names.
"""

import os
import posixpath
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; a TOML `true` is never a meaningful size
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """Validate that a value is a real boolean (not a truthy string or int)."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_absolute_path(path: Union[str, Path], field_name: str = "path") -> Path:
    """
    Validate that a configured path is a non-empty absolute path.

    The path is not required to exist; cgroup roots and Downward API
    directories are probed at runtime.
    """
    if not path or not isinstance(path, (str, Path)):
        raise ValidationError(
            f"{field_name} must be a non-empty path string",
            field_name=field_name,
            value=path
        )
    path_obj = Path(path)
    if not path_obj.is_absolute():
        raise ValidationError(
            f"{field_name} must be an absolute path: {path}",
            field_name=field_name,
            value=path
        )
    return path_obj


def validate_relative_filename(filename: Any, field_name: str = "filename") -> str:
    """
    Validate a caller-supplied file name before it is joined to a base directory.

    The name is normalized first, then rejected if it is empty, absolute, or
    still refers to a parent directory.

    Args:
        filename: Relative file name, e.g. "memory.stat"
        field_name: Name of the field being validated

    Returns:
        The normalized file name

    Raises:
        ValidationError: If the name is unsafe

    Examples:
        >>> validate_relative_filename("./memory.stat")
        'memory.stat'
        >>> validate_relative_filename("../etc/passwd")
        Traceback (most recent call last):
        ...
        nodemx.validation.exceptions.ValidationError: reference to parent directory ("..") not allowed: ../etc/passwd
    """
    if not filename or not isinstance(filename, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=filename
        )
    if "\x00" in filename:
        raise ValidationError(
            f"{field_name} must not contain NUL bytes",
            field_name=field_name,
            value=filename
        )
    if os.path.isabs(filename):
        raise ValidationError(
            f"reference to absolute path not allowed: {filename}",
            field_name=field_name,
            value=filename
        )

    normalized = posixpath.normpath(filename)
    if normalized == ".." or normalized.startswith("../"):
        raise ValidationError(
            f"reference to parent directory (\"..\") not allowed: {filename}",
            field_name=field_name,
            value=filename
        )
    if normalized in (".", ""):
        raise ValidationError(
            f"{field_name} does not name a file: {filename}",
            field_name=field_name,
            value=filename
        )
    return normalized


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        Validated choice (in the spelling used by `choices`)

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]
