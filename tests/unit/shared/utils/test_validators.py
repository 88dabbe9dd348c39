from decimal import Decimal

import pytest

from apartment_booking.shared.utils import to_decimal


class TestToDecimal:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("12.50"), Decimal("12.50")),
            ("12.50", Decimal("12.50")),
            (200, Decimal("200")),
            (0.1, Decimal("0.1")),
        ],
    )
    def test_converts(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [True, "NaN", "Infinity", "cheap"])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)
