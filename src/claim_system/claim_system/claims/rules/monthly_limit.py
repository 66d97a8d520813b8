from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.datetime_utils import month_bounds
from ...core.enums import ClaimStatus
from ..model import Claim
from ..repository import ClaimRepository
from .base import ClaimRule


class MonthlyLimitRule(ClaimRule):
    """Cumulative non-rejected hours in the claim's calendar month must stay within the limit."""

    def __init__(self, claims: ClaimRepository, monthly_limit: Decimal):
        self._claims = claims
        self._monthly_limit = monthly_limit

    def check(self, claim: Claim) -> Optional[str]:
        start, end = month_bounds(claim.submitted_at.date())
        current = self._claims.sum_hours_in_range(
            lecturer_id=claim.lecturer_id,
            start=start,
            end=end,
            exclude_status=ClaimStatus.REJECTED,
            exclude_claim_id=claim.claim_id,
        )
        if current + claim.hours_worked > self._monthly_limit:
            return f"Monthly hours limit exceeded. Current: {current}, Limit: {self._monthly_limit}"
        return None
