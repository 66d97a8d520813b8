from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class AmountCalculator(ABC):
    """Calculator interface (Strategy Pattern for claim amounts)."""

    @abstractmethod
    def total_amount(self, hours_worked: Decimal, hourly_rate: Decimal) -> Decimal:
        raise NotImplementedError
