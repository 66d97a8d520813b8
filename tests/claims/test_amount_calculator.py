from decimal import Decimal

import pytest

from src.claim_system.claim_system.claims.calculator.capped_calculator import CappedAmountCalculator
from src.claim_system.claim_system.core.exceptions import InvalidInputError, ValidationError


def test_total_is_hours_times_rate_below_cap():
    calc = CappedAmountCalculator(Decimal("50000"))
    assert calc.total_amount(Decimal("100"), Decimal("80")) == Decimal("8000")
    assert calc.total_amount(Decimal("0.5"), Decimal("55.50")) == Decimal("27.750")


def test_total_is_capped_at_maximum_amount():
    calc = CappedAmountCalculator(Decimal("50000"))
    assert calc.total_amount(Decimal("200"), Decimal("1000")) == Decimal("50000")


def test_custom_cap_is_respected():
    calc = CappedAmountCalculator(Decimal("1000"))
    assert calc.total_amount(Decimal("20"), Decimal("60")) == Decimal("1000")


@pytest.mark.parametrize(
    "hours, rate",
    [("0", "80"), ("-1", "80"), ("10", "0"), ("10", "-5")],
)
def test_non_positive_input_raises_invalid_input(hours, rate):
    calc = CappedAmountCalculator()
    with pytest.raises(InvalidInputError):
        calc.total_amount(Decimal(hours), Decimal(rate))


def test_invalid_input_is_a_validation_error():
    with pytest.raises(ValidationError):
        CappedAmountCalculator().total_amount(Decimal("0"), Decimal("0"))


def test_overflowing_product_is_invalid_input():
    with pytest.raises(InvalidInputError):
        CappedAmountCalculator().total_amount(Decimal("9e999999"), Decimal("1e999999"))
