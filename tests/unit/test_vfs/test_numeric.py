"""
Unit tests for numeric normalization of virtual file tokens.
"""

import math
import sys

import pytest

from nodemx.validation import FormatError
from nodemx.vfs import FLOAT64_MAX, INT64_MAX, is_max_token, to_float64, to_int64


@pytest.mark.unit
class TestToInt64:
    """Test cases for to_int64."""

    def test_max_any_case(self):
        assert to_int64("max") == to_int64("MAX") == to_int64("Max") == 2**63 - 1
        assert INT64_MAX == 2**63 - 1

    def test_plain_integers(self):
        assert to_int64("12288") == 12288
        assert to_int64("-42") == -42
        assert to_int64("+7") == 7
        assert to_int64(" 15 ") == 15

    def test_max_disallowed(self):
        with pytest.raises(FormatError):
            to_int64("max", allow_max=False)

    @pytest.mark.parametrize("token", ["not-a-number", "", "12a", "1.5", "0x10", "1 2"])
    def test_rejects_non_integers(self, token):
        with pytest.raises(FormatError) as exc_info:
            to_int64(token)

        assert "contents not an integer" in str(exc_info.value)

    def test_range_limits(self):
        assert to_int64(str(2**63 - 1)) == 2**63 - 1
        assert to_int64(str(-(2**63))) == -(2**63)

        with pytest.raises(FormatError):
            to_int64(str(2**63))
        with pytest.raises(FormatError):
            to_int64(str(-(2**63) - 1))


@pytest.mark.unit
class TestToFloat64:
    """Test cases for to_float64."""

    def test_max(self):
        assert to_float64("max") == FLOAT64_MAX == sys.float_info.max
        assert to_float64("MAX") == FLOAT64_MAX

    def test_values(self):
        assert to_float64("0.00") == 0.0
        assert to_float64("1.5e3") == 1500.0
        assert to_float64("-.25") == -0.25
        assert to_float64("42") == 42.0

    def test_special_values(self):
        assert math.isnan(to_float64("NaN"))
        assert to_float64("Infinity") == math.inf
        assert to_float64("-inf") == -math.inf

    def test_overflow_without_inf_spelling(self):
        with pytest.raises(FormatError):
            to_float64("1e999")

    @pytest.mark.parametrize("token", ["abc", "", "1.2.3", "max1"])
    def test_rejects_garbage(self, token):
        with pytest.raises(FormatError):
            to_float64(token)


@pytest.mark.unit
def test_is_max_token():
    assert is_max_token("max")
    assert is_max_token(" MAX ")
    assert not is_max_token("maximum")
