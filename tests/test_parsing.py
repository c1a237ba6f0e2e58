"""Unit tests for number parsing helpers."""

import pytest

from app.services.parsing import INT64_MAX, as_stored_number


@pytest.mark.unit
class TestAsStoredNumber:
    def test_integral_float_becomes_int(self):
        assert as_stored_number(5.0) == 5
        assert isinstance(as_stored_number(5.0), int)

    def test_fractional_float_kept(self):
        assert as_stored_number(2.5) == 2.5

    @pytest.mark.parametrize("value", [1e19, -1e19, float(2 ** 63), INT64_MAX + 1, -(INT64_MAX + 2)])
    def test_out_of_int64_range_stays_float(self, value):
        assert isinstance(as_stored_number(value), float)

    def test_int64_bounds_kept_as_int(self):
        assert as_stored_number(INT64_MAX) == INT64_MAX
        assert isinstance(as_stored_number(-INT64_MAX), int)
