"""
Unit tests for the virtual file format parsers.
"""

import pytest

from nodemx.models.config import ReaderSettings
from nodemx.validation import FormatError, ResourceLimitError
from nodemx.vfs import (
    parse_flat_keyed,
    parse_keyed_subkey_value,
    parse_nested_keyed,
    parse_nlsv,
    parse_quoted_key_value,
    parse_single_nlsv,
    parse_space_separated,
    read_flat_keyed_file,
    read_nested_keyed_file,
    read_one_nlsv,
    read_quoted_kv_file,
    read_space_separated_file,
)


@pytest.mark.unit
class TestNlsv:
    """Test cases for new-line separated values."""

    def test_trailing_newline_dropped(self):
        assert parse_nlsv("10\n20\n") == ["10", "20"]

    def test_no_trailing_newline(self):
        assert parse_nlsv("10\n20") == ["10", "20"]

    def test_empty(self):
        assert parse_nlsv("") == []

    def test_interior_empty_line_kept(self):
        assert parse_nlsv("a\n\nb\n") == ["a", "", "b"]

    def test_single_newline_is_one_empty_line(self):
        assert parse_nlsv("\n") == [""]

    def test_single_line(self):
        assert parse_single_nlsv("max\n") == "max"

    def test_single_line_wrong_count(self):
        with pytest.raises(FormatError) as exc_info:
            parse_single_nlsv("a\nb\n")

        assert "expected 1, got 2" in str(exc_info.value)


@pytest.mark.unit
class TestSpaceSeparated:
    """Test cases for space separated values."""

    def test_split(self):
        assert parse_space_separated("cpuset cpu io memory") == ["cpuset", "cpu", "io", "memory"]

    def test_runs_of_spaces_collapse(self):
        assert parse_space_separated("  max   100000 ") == ["max", "100000"]

    def test_empty_line(self):
        assert parse_space_separated("") == []


@pytest.mark.unit
class TestKeyedLines:
    """Test cases for flat keyed and key subkey value lines."""

    def test_flat_keyed(self):
        assert parse_flat_keyed("anon 1024") == ("anon", "1024")

    def test_flat_keyed_wrong_token_count(self):
        with pytest.raises(FormatError) as exc_info:
            parse_flat_keyed("anon 1 2")

        assert "expected 2 tokens, found 3" in str(exc_info.value)

    def test_ksv_three_tokens(self):
        assert parse_keyed_subkey_value("8:0 Read 10") == ("8:0", "Read", "10")

    def test_ksv_grand_total(self):
        assert parse_keyed_subkey_value("Total 15") == ("all", "Total", "15")

    def test_ksv_wrong_token_count(self):
        with pytest.raises(FormatError):
            parse_keyed_subkey_value("lonely")


@pytest.mark.unit
class TestNestedKeyed:
    """Test cases for nested keyed lines."""

    def test_parse(self):
        line = parse_nested_keyed("253952 anon=0 file=12288 kernel=0")

        assert line.key == "253952"
        assert line.pairs == [
            ("key", "253952"),
            ("anon", "0"),
            ("file", "12288"),
            ("kernel", "0"),
        ]
        assert line.subkey_pairs[0] == ("anon", "0")

    def test_missing_value(self):
        with pytest.raises(FormatError) as exc_info:
            parse_nested_keyed("8:0 rbytes=")

        assert "missing value" in str(exc_info.value)

    def test_missing_key(self):
        with pytest.raises(FormatError) as exc_info:
            parse_nested_keyed("8:0 rbytes")

        assert "missing key" in str(exc_info.value)

    def test_empty_key(self):
        with pytest.raises(FormatError):
            parse_nested_keyed("8:0 =5")

    def test_extra_equals(self):
        with pytest.raises(FormatError):
            parse_nested_keyed("8:0 a=b=c")

    def test_empty_line(self):
        with pytest.raises(FormatError):
            parse_nested_keyed("")


@pytest.mark.unit
class TestQuotedKeyValue:
    """Test cases for Downward API key="value" lines."""

    def test_simple(self):
        assert parse_quoted_key_value('cluster="test-cluster1"') == ("cluster", "test-cluster1")

    def test_equals_inside_value(self):
        assert parse_quoted_key_value('var="abc=123"') == ("var", "abc=123")

    def test_newline_escape(self):
        assert parse_quoted_key_value('multiline="multi\\nline"') == ("multiline", "multi\nline")

    def test_escaped_quote_and_backslash(self):
        assert parse_quoted_key_value('k="say \\"hi\\" \\\\ bye"') == ("k", 'say "hi" \\ bye')

    def test_hex_escape(self):
        assert parse_quoted_key_value('k="\\x41\\x42"') == ("k", "AB")

    def test_unicode_escapes(self):
        assert parse_quoted_key_value('k="\\u00e9"') == ("k", "é")
        assert parse_quoted_key_value('k="\\U0001F600"') == ("k", "\U0001F600")

    def test_unknown_escape_passes_through(self):
        assert parse_quoted_key_value('k="a\\qb"') == ("k", "a\\qb")

    def test_empty_value(self):
        assert parse_quoted_key_value('k=""') == ("k", "")

    def test_missing_equals(self):
        with pytest.raises(FormatError) as exc_info:
            parse_quoted_key_value("nothing")

        assert "expected 2 tokens, found 1" in str(exc_info.value)

    def test_unquoted_value(self):
        with pytest.raises(FormatError):
            parse_quoted_key_value("k=value")

    def test_missing_closing_quote(self):
        with pytest.raises(FormatError):
            parse_quoted_key_value('k="open')

    def test_text_after_closing_quote(self):
        with pytest.raises(FormatError):
            parse_quoted_key_value('k="a"b')

    def test_malformed_hex(self):
        with pytest.raises(FormatError):
            parse_quoted_key_value('k="\\xZZ"')


@pytest.mark.unit
class TestFileReaders:
    """Test cases for the read_* helpers."""

    def test_read_one_nlsv_reports_file(self, temp_dir):
        path = temp_dir / "two"
        path.write_text("1\n2\n")

        with pytest.raises(FormatError) as exc_info:
            read_one_nlsv(path)

        assert str(path) in str(exc_info.value)

    def test_read_space_separated(self, temp_dir):
        path = temp_dir / "cgroup.controllers"
        path.write_text("cpu io memory\n")

        assert read_space_separated_file(path) == ["cpu", "io", "memory"]

    def test_flat_keyed_error_names_line(self, temp_dir):
        path = temp_dir / "memory.stat"
        path.write_text("anon 1\nbroken\n")

        with pytest.raises(FormatError) as exc_info:
            read_flat_keyed_file(path)

        assert f"file {path}, line 2" in str(exc_info.value)

    def test_nested_keyed_width_mismatch(self, temp_dir):
        path = temp_dir / "io.stat"
        path.write_text("8:0 rbytes=1 wbytes=2\n8:16 rbytes=1\n")

        with pytest.raises(FormatError) as exc_info:
            read_nested_keyed_file(path)

        assert "not nested keyed file" in str(exc_info.value)

    def test_quoted_kv_file(self, temp_dir):
        path = temp_dir / "labels"
        path.write_text('a="1"\nb="two words"\n')

        assert read_quoted_kv_file(path) == [("a", "1"), ("b", "two words")]

    def test_reader_settings_limit_applies(self, temp_dir):
        path = temp_dir / "big"
        path.write_text("x" * 5000)

        with pytest.raises(ResourceLimitError):
            read_one_nlsv(path, ReaderSettings(min_read_size=4096, max_file_size=4096))
