"""
Parsers for the text formats used by cgroup and procfs virtual files.

See https://www.kernel.org/doc/Documentation/cgroup-v2.txt for examples of
the formats. The line parsers are pure functions; the `read_*` helpers at
the bottom combine them with the virtual file reader and report the file
name and line number when a line does not parse.
"""

import logging
import string
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple, TypeVar, Union

from ..models.config import ReaderSettings
from ..validation import FormatError
from .reader import read_vfs

logger = logging.getLogger(__name__)

T = TypeVar('T')

NESTED_LEAD_KEY = "key"
GRAND_TOTAL_KEY = "all"

_HEX_DIGITS = frozenset(string.hexdigits)

_SIMPLE_ESCAPES = {
    "\\": b"\\",
    '"': b'"',
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
}


class NestedKeyedLine(NamedTuple):
    """
    One parsed line of a nested keyed file, e.g. "8:0 rbytes=90430 wbytes=0".

    `pairs[0]` is always ("key", <lead value>).
    """

    key: str
    pairs: List[Tuple[str, str]]

    @property
    def subkey_pairs(self) -> List[Tuple[str, str]]:
        return self.pairs[1:]


# ----------------------------------------------------------------------
# Line parsers
# ----------------------------------------------------------------------


def parse_nlsv(text: str) -> List[str]:
    """
    Split "new-line separated values" text into lines.

    Only the empty segment produced by a final newline is dropped.

    Examples:
        >>> parse_nlsv("10\\n20\\n")
        ['10', '20']
        >>> parse_nlsv("")
        []
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_single_nlsv(text: str) -> str:
    """Return the only line of `text`, failing unless there is exactly one."""
    lines = parse_nlsv(text)
    if len(lines) != 1:
        raise FormatError(f"expected 1, got {len(lines)}, lines")
    return lines[0]


def parse_space_separated(line: str) -> List[str]:
    """Split a line on spaces; runs of spaces collapse and an empty line yields []."""
    return [token for token in line.split(" ") if token]


def parse_flat_keyed(line: str) -> Tuple[str, str]:
    """Parse a "key value" line."""
    tokens = parse_space_separated(line)
    if len(tokens) != 2:
        raise FormatError(f"incorrect format for key value line: expected 2 tokens, found {len(tokens)}")
    return tokens[0], tokens[1]


def parse_keyed_subkey_value(line: str) -> Tuple[str, str, str]:
    """
    Parse a "key subkey value" line, as in blkio.throttle.io_serviced.

    Those files end with a two-column grand total line ("Total 1234"), which
    is returned under the key "all".
    """
    tokens = parse_space_separated(line)
    if len(tokens) == 3:
        return tokens[0], tokens[1], tokens[2]
    if len(tokens) == 2:
        return GRAND_TOTAL_KEY, tokens[0], tokens[1]
    raise FormatError(f"incorrect format for key subkey value line: expected 3 tokens, found {len(tokens)}")


def parse_nested_keyed(line: str) -> NestedKeyedLine:
    """
    Parse a "nested keyed" line.

    The first column has a value only; every other column must be a
    `subkey=value` pair.

    Examples:
        >>> parse_nested_keyed("253952 anon=0 file=12288")
        NestedKeyedLine(key='253952', pairs=[('key', '253952'), ('anon', '0'), ('file', '12288')])
    """
    tokens = parse_space_separated(line)
    if not tokens:
        raise FormatError("empty nested keyed line")

    lead = tokens[0]
    pairs = [(NESTED_LEAD_KEY, lead)]
    for token in tokens[1:]:
        subkey, sep, value = token.partition("=")
        if not sep or not subkey:
            raise FormatError(f"missing key in nested keyed line: \"{token}\"")
        if not value:
            raise FormatError(f"missing value in nested keyed line: \"{token}\"")
        if "=" in value:
            raise FormatError(f"more than one \"=\" in nested keyed token: \"{token}\"")
        pairs.append((subkey, value))
    return NestedKeyedLine(lead, pairs)


def _decode_quoted(source: str) -> str:
    """Strip the surrounding quotes from `source` and decode its escapes."""
    if not source.startswith('"'):
        raise FormatError("value is not a double-quoted string")

    out = bytearray()
    i = 1
    n = len(source)
    while i < n:
        c = source[i]
        if c == "\\":
            if i + 1 >= n:
                raise FormatError("unterminated escape sequence")
            esc = source[i + 1]
            if esc in _SIMPLE_ESCAPES:
                out += _SIMPLE_ESCAPES[esc]
                i += 2
            elif esc == "x":
                digits = source[i + 2:i + 4]
                if len(digits) != 2 or not _HEX_DIGITS.issuperset(digits):
                    raise FormatError("malformed \\x literal")
                out.append(int(digits, 16))
                i += 4
            elif esc in ("u", "U"):
                width = 4 if esc == "u" else 8
                digits = source[i + 2:i + 2 + width]
                if len(digits) != width or not _HEX_DIGITS.issuperset(digits):
                    raise FormatError("malformed unicode literal")
                try:
                    out += chr(int(digits, 16)).encode("utf-8")
                except (ValueError, UnicodeEncodeError) as e:
                    raise FormatError(f"invalid unicode code point \\{esc}{digits}") from e
                i += 2 + width
            else:
                # unrecognized escape passes through untouched
                out += ("\\" + esc).encode("utf-8")
                i += 2
        elif c == '"':
            if i != n - 1:
                raise FormatError("unexpected characters after closing quote")
            return out.decode("utf-8", errors="replace")
        else:
            out += c.encode("utf-8")
            i += 1

    raise FormatError("missing closing quote")


def parse_quoted_key_value(line: str) -> Tuple[str, str]:
    """
    Parse a `key="quoted value"` line, as written by the Kubernetes Downward API.

    Only the first "=" separates key and value.

    Examples:
        >>> parse_quoted_key_value('var="abc=123"')
        ('var', 'abc=123')
    """
    key, sep, rest = line.partition("=")
    if not sep or not key:
        found = 1 if line else 0
        raise FormatError(
            f"incorrect format for key equals quoted value line: expected 2 tokens, found {found}"
        )
    return key, _decode_quoted(rest)


# ----------------------------------------------------------------------
# File readers
# ----------------------------------------------------------------------


def _read_text(path: Union[str, Path], settings: Optional[ReaderSettings]) -> str:
    settings = settings or ReaderSettings()
    return read_vfs(path, max_bytes=settings.max_file_size, min_read_size=settings.min_read_size)


def parse_lines(
    lines: List[str],
    parser: Callable[[str], T],
    path: Union[str, Path],
) -> List[T]:
    """Apply `parser` to every line, naming the file and line on a FormatError."""
    parsed = []
    for lineno, line in enumerate(lines, start=1):
        try:
            parsed.append(parser(line))
        except FormatError as e:
            raise FormatError(f"{e}, file {path}, line {lineno}", path=path) from e
    return parsed


def read_nlsv(path: Union[str, Path], settings: Optional[ReaderSettings] = None) -> List[str]:
    """Read the lines of a "new-line separated values" virtual file."""
    return parse_nlsv(_read_text(path, settings))


def read_one_nlsv(path: Union[str, Path], settings: Optional[ReaderSettings] = None) -> str:
    """Read a virtual file that must hold exactly one line."""
    lines = read_nlsv(path, settings)
    if len(lines) != 1:
        raise FormatError(f"expected 1, got {len(lines)}, lines from file {path}", path=path)
    return lines[0]


def read_space_separated_file(
    path: Union[str, Path], settings: Optional[ReaderSettings] = None
) -> List[str]:
    """Read a one-line file of space separated values, e.g. cgroup.controllers."""
    return parse_space_separated(read_one_nlsv(path, settings))


def read_flat_keyed_file(
    path: Union[str, Path], settings: Optional[ReaderSettings] = None
) -> List[Tuple[str, str]]:
    """Read a "flat keyed" file such as memory.stat."""
    return parse_lines(read_nlsv(path, settings), parse_flat_keyed, path)


def read_keyed_subkey_file(
    path: Union[str, Path], settings: Optional[ReaderSettings] = None
) -> List[Tuple[str, str, str]]:
    """Read a "key subkey value" file such as blkio.throttle.io_service_bytes."""
    return parse_lines(read_nlsv(path, settings), parse_keyed_subkey_value, path)


def read_nested_keyed_file(
    path: Union[str, Path], settings: Optional[ReaderSettings] = None
) -> List[NestedKeyedLine]:
    """
    Read a "nested keyed" file such as io.stat or memory.pressure.

    Every line must have the same number of columns as the first one.
    """
    parsed = parse_lines(read_nlsv(path, settings), parse_nested_keyed, path)
    if parsed:
        width = len(parsed[0].pairs)
        for lineno, line in enumerate(parsed, start=1):
            if len(line.pairs) != width:
                raise FormatError(
                    f"not nested keyed file: {path}, line {lineno} has {len(line.pairs)} "
                    f"columns, expected {width}",
                    path=path,
                )
    return parsed


def read_quoted_kv_file(
    path: Union[str, Path], settings: Optional[ReaderSettings] = None
) -> List[Tuple[str, str]]:
    """Read a file of `key="value"` lines, e.g. Downward API labels."""
    return parse_lines(read_nlsv(path, settings), parse_quoted_key_value, path)
