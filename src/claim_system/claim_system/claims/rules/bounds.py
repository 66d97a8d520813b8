from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..model import Claim
from .base import ClaimRule


class HoursBoundRule(ClaimRule):
    def __init__(self, minimum: Decimal, maximum: Decimal):
        self._minimum = minimum
        self._maximum = maximum

    def check(self, claim: Claim) -> Optional[str]:
        if claim.hours_worked < self._minimum or claim.hours_worked > self._maximum:
            return f"Hours worked must be between {self._minimum} and {self._maximum}"
        return None


class RateBoundRule(ClaimRule):
    def __init__(self, minimum: Decimal, maximum: Decimal):
        self._minimum = minimum
        self._maximum = maximum

    def check(self, claim: Claim) -> Optional[str]:
        if claim.hourly_rate < self._minimum or claim.hourly_rate > self._maximum:
            return f"Hourly rate must be between {self._minimum} and {self._maximum}"
        return None
