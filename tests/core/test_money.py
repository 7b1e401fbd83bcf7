"""金额换算单元测试"""

from decimal import Decimal

import pytest
from taskcoin.core.money import from_cents, to_cents


class TestToCents:
    @pytest.mark.parametrize(
        "amount,cents",
        [
            (Decimal("30.00"), 3000),
            (Decimal("30"), 3000),
            (Decimal("0.01"), 1),
            (Decimal("12.5"), 1250),
            (Decimal("0"), 0),
        ],
    )
    def test_exact_conversion(self, amount: Decimal, cents: int):
        assert to_cents(amount) == cents

    def test_rejects_sub_cent_precision(self):
        """超过两位小数的金额被拒绝，而不是静默舍入"""
        with pytest.raises(ValueError):
            to_cents(Decimal("1.005"))

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            to_cents(Decimal("NaN"))


class TestFromCents:
    def test_always_two_places(self):
        assert str(from_cents(7000)) == "70.00"
        assert str(from_cents(0)) == "0.00"
        assert str(from_cents(1)) == "0.01"

    def test_no_float_drift(self):
        """0.1 + 0.2 类累加在分单位上是精确的"""
        total = to_cents(Decimal("0.10")) + to_cents(Decimal("0.20"))
        assert from_cents(total) == Decimal("0.30")
