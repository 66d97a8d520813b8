from __future__ import annotations

from decimal import Decimal, DecimalException

from ...core.constants import DEFAULT_MAXIMUM_AMOUNT
from ...core.exceptions import InvalidInputError
from .base import AmountCalculator


class CappedAmountCalculator(AmountCalculator):
    """Standard rule: hours * rate, capped at the configured maximum amount."""

    def __init__(self, maximum_amount: Decimal = DEFAULT_MAXIMUM_AMOUNT):
        self._maximum_amount = Decimal(maximum_amount)

    def total_amount(self, hours_worked: Decimal, hourly_rate: Decimal) -> Decimal:
        if hours_worked <= 0 or hourly_rate <= 0:
            raise InvalidInputError("Hours worked and hourly rate must be positive")
        try:
            amount = hours_worked * hourly_rate
        except DecimalException:
            raise InvalidInputError("Hours worked and hourly rate are out of range")
        return min(amount, self._maximum_amount)
