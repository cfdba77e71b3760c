"""
Virtual file access: reading pseudo-files and parsing their text formats.
"""

from .formats import (
    NestedKeyedLine,
    parse_flat_keyed,
    parse_keyed_subkey_value,
    parse_lines,
    parse_nested_keyed,
    parse_nlsv,
    parse_quoted_key_value,
    parse_single_nlsv,
    parse_space_separated,
    read_flat_keyed_file,
    read_keyed_subkey_file,
    read_nested_keyed_file,
    read_nlsv,
    read_one_nlsv,
    read_quoted_kv_file,
    read_space_separated_file,
)
from .numeric import FLOAT64_MAX, INT64_MAX, is_max_token, to_float64, to_int64
from .reader import read_vfs

__all__ = [
    # Reader
    "read_vfs",
    # Line parsers
    "NestedKeyedLine",
    "parse_flat_keyed",
    "parse_keyed_subkey_value",
    "parse_lines",
    "parse_nested_keyed",
    "parse_nlsv",
    "parse_quoted_key_value",
    "parse_single_nlsv",
    "parse_space_separated",
    # File readers
    "read_flat_keyed_file",
    "read_keyed_subkey_file",
    "read_nested_keyed_file",
    "read_nlsv",
    "read_one_nlsv",
    "read_quoted_kv_file",
    "read_space_separated_file",
    # Numbers
    "FLOAT64_MAX",
    "INT64_MAX",
    "is_max_token",
    "to_float64",
    "to_int64",
]
