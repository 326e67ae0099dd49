"""Tests for bm_common.money: Decimal helpers."""

from decimal import Decimal

import pytest

from src.bm_common.money import amount_to_display, line_total, to_amount


class TestToAmount:
    def test_decimal_passthrough(self) -> None:
        d = Decimal("1.10")
        assert to_amount(d) is d

    def test_float_has_no_binary_noise(self) -> None:
        assert to_amount(0.1) == Decimal("0.1")

    def test_string(self) -> None:
        assert to_amount("99.95") == Decimal("99.95")

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="decimal"):
            to_amount("abc")


class TestLineTotal:
    def test_basic(self) -> None:
        assert line_total(Decimal("100"), 2) == Decimal("200")

    def test_zero_qty(self) -> None:
        assert line_total(Decimal("12.5"), 0) == Decimal("0")


class TestAmountToDisplay:
    def test_basic(self) -> None:
        assert amount_to_display(Decimal("1250.5"), "PKR") == "PKR 1,250.50"

    def test_zero(self) -> None:
        assert amount_to_display(Decimal("0"), "PKR") == "PKR 0.00"

    def test_negative(self) -> None:
        assert amount_to_display(Decimal("-200"), "PKR") == "-PKR 200.00"

    def test_rounds_half_up(self) -> None:
        assert amount_to_display(Decimal("0.005"), "PKR") == "PKR 0.01"

    def test_default_currency_from_settings(self) -> None:
        assert amount_to_display(Decimal("5")).endswith(" 5.00")
