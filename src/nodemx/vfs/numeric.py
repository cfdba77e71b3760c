"""
Numeric normalization of virtual file tokens.

cgroup v2 reports the literal "max" where a limit is unbounded. Callers that
want a number get the largest representable value of the target type
instead.
"""

import math
import re
import sys

from ..validation import FormatError

INT64_MAX = (1 << 63) - 1
INT64_MIN = -(1 << 63)
FLOAT64_MAX = sys.float_info.max

MAX_TOKEN = "max"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
    r"|nan|inf|infinity)",
    re.IGNORECASE,
)


def is_max_token(token: str) -> bool:
    return token.strip().lower() == MAX_TOKEN


def to_int64(token: str, allow_max: bool = True) -> int:
    """
    Convert a token to a signed 64-bit integer.

    Args:
        token: Raw token, e.g. "12288" or "max"
        allow_max: Whether "max" (any case) maps to the largest int64

    Returns:
        The integer value

    Raises:
        FormatError: If the token is not a base-10 integer in int64 range

    Examples:
        >>> to_int64("max")
        9223372036854775807
        >>> to_int64("-42")
        -42
    """
    if allow_max and is_max_token(token):
        return INT64_MAX

    text = token.strip()
    if not _INT_RE.fullmatch(text):
        raise FormatError(f"contents not an integer: \"{token}\"")

    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise FormatError(f"value \"{token}\" is out of range for type bigint")
    return value


def to_float64(token: str, allow_max: bool = True) -> float:
    """
    Convert a token to a double precision float.

    NaN and infinity spellings are accepted; "max" maps to the largest finite
    double when allowed.

    Raises:
        FormatError: If the token is not a floating point literal
    """
    if allow_max and is_max_token(token):
        return FLOAT64_MAX

    text = token.strip()
    if not _FLOAT_RE.fullmatch(text):
        raise FormatError(f"invalid input syntax for type double precision: \"{token}\"")

    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise FormatError(f"\"{token}\" is out of range for type double precision")
    return value
