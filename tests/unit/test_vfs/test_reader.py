"""
Unit tests for the bounded virtual file reader.
"""

import pytest

from nodemx.validation import ReadError, ResourceLimitError
from nodemx.vfs import read_vfs


@pytest.mark.unit
class TestReadVfs:
    """Test cases for read_vfs."""

    def test_reads_whole_file(self, temp_dir):
        """Contents larger than one read request are read completely."""
        path = temp_dir / "big"
        content = "x" * 10000 + "\n"
        path.write_text(content)

        assert read_vfs(path, min_read_size=16) == content

    def test_empty_file(self, temp_dir):
        path = temp_dir / "empty"
        path.write_text("")

        assert read_vfs(path) == ""

    def test_missing_file_raises_read_error(self, temp_dir):
        """Test that an unopenable file reports its path."""
        path = temp_dir / "missing"

        with pytest.raises(ReadError) as exc_info:
            read_vfs(path)

        assert "could not open file" in str(exc_info.value)
        assert exc_info.value.path == str(path)

    def test_read_error_is_not_os_error(self, temp_dir):
        with pytest.raises(ReadError) as exc_info:
            read_vfs(temp_dir / "missing")

        assert not isinstance(exc_info.value, OSError)

    def test_file_at_limit_is_accepted(self, temp_dir):
        path = temp_dir / "exact"
        path.write_text("a" * 64)

        assert read_vfs(path, max_bytes=64, min_read_size=8) == "a" * 64

    def test_file_over_limit_is_rejected(self, temp_dir):
        """Test that one byte over the limit fails."""
        path = temp_dir / "over"
        path.write_text("a" * 65)

        with pytest.raises(ResourceLimitError) as exc_info:
            read_vfs(path, max_bytes=64, min_read_size=8)

        assert "file length too large" in str(exc_info.value)

    def test_invalid_utf8_is_replaced(self, temp_dir):
        path = temp_dir / "binary"
        path.write_bytes(b"ok\xff\n")

        assert read_vfs(path) == "ok\ufffd\n"
