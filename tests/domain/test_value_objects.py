"""Unit tests for Money and Quantity."""

from decimal import Decimal

import pytest

from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_defaults_to_usd(self):
        assert Money(Decimal("12.40")).currency == "USD"

    @pytest.mark.parametrize("raw", ["18.75", " 18.75 ", Decimal("18.75")])
    def test_parses_input(self, raw):
        assert Money.of(raw).amount == Decimal("18.75")

    @pytest.mark.parametrize("raw", ["twelve", "", "1.2.3"])
    def test_rejects_unparseable_input(self, raw):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of(raw)

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-0.01")

    @pytest.mark.parametrize("raw", ["NaN", "Infinity"])
    def test_rejects_non_finite_amount(self, raw):
        with pytest.raises(ValidationError, match="must be finite"):
            Money.of(raw)

    def test_rejects_float(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(12.4)

    def test_line_total_arithmetic(self):
        assert Money.of("4.25") * 4 + Money.of("3.00") == Money.of("20.00")

    @pytest.mark.parametrize("units", [1.5, True])
    def test_multiplier_must_be_a_unit_count(self, units):
        with pytest.raises(TypeError):
            Money.of("4.25") * units

    def test_tax_rounds_half_up_to_the_cent(self):
        rate = Decimal("0.06")
        assert Money.of("20.00").apply_rate(rate) == Money.of("1.20")
        assert Money.of("0.25").apply_rate(rate) == Money.of("0.02")    # 0.015
        assert Money.of("10.75").apply_rate(rate) == Money.of("0.65")   # 0.645

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "CAD")

    def test_total(self):
        assert Money.total([Money.of("1.10"), Money.of("2.20")]) == Money.of("3.30")
        assert Money.total([]) == Money.zero()

    def test_displays_in_dollars(self):
        assert str(Money.of("7")) == "$7.00"
        assert str(Money.of("21.2")) == "$21.20"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive_units(self):
        assert Quantity(12).value == 12

    @pytest.mark.parametrize("units", [0, -1])
    def test_non_positive_rejected(self, units):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(units)

    @pytest.mark.parametrize("units", [1.0, "3", False])
    def test_non_integer_rejected(self, units):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(units)
