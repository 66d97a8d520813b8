from __future__ import annotations

import logging
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..core.constants import AUTO_APPROVAL_ACTOR
from ..core.enums import ClaimStatus
from ..core.exceptions import StaleClaimError
from ..core.settings import ClaimSettings
from ..lecturers.repository import LecturerRepository
from .model import Claim
from .repository import ClaimRepository

logger = logging.getLogger(__name__)


class ApprovalEngine:
    """Approval criteria and system-driven auto-approval.

    Two tiers: a claim that meets the criteria (total up to
    ``approval_max_amount``) is *eligible*, but only a claim whose total is
    strictly below ``auto_approval_ceiling`` is approved without a human.
    """

    def __init__(
        self,
        claims: ClaimRepository,
        lecturers: LecturerRepository,
        settings: Optional[ClaimSettings] = None,
        *,
        clock: Optional[Clock] = None,
    ):
        self._claims = claims
        self._lecturers = lecturers
        self._settings = settings or ClaimSettings()
        self._clock = clock or SystemClock()

    def has_valid_contract(self, lecturer_id: str) -> bool:
        lecturer = self._lecturers.get_by_id(lecturer_id)
        if lecturer is None:
            return False
        if self._settings.enforce_contract_dates:
            return lecturer.contract_covers(self._clock.now().date())
        return True

    def has_duplicate_claim(self, claim: Claim) -> bool:
        return self._claims.exists_duplicate(
            lecturer_id=claim.lecturer_id,
            submitted_on=claim.submitted_at.date(),
            hours_worked=claim.hours_worked,
            exclude_claim_id=claim.claim_id,
        )

    def evaluate_criteria(self, claim: Claim) -> dict[str, bool]:
        s = self._settings
        return {
            "hours_within_limit": claim.hours_worked <= s.approval_max_hours,
            "rate_within_limit": claim.hourly_rate <= s.approval_max_rate,
            "amount_within_limit": claim.total_amount <= s.approval_max_amount,
            "valid_contract": self.has_valid_contract(claim.lecturer_id),
            "no_duplicate": not self.has_duplicate_claim(claim),
        }

    def meets_approval_criteria(self, claim: Claim) -> bool:
        return all(self.evaluate_criteria(claim).values())

    def process_auto_approval(self, claim: Claim) -> Claim:
        """Approve ``claim`` if it qualifies; return the resulting claim value.

        Returns the input unchanged when the claim is not Pending, fails a
        criterion, or is at or above the auto-approval ceiling. Raises
        :class:`StaleClaimError` if the stored claim changed concurrently.
        """

        if claim.claim_id is None or claim.status != ClaimStatus.PENDING:
            return claim

        criteria = self.evaluate_criteria(claim)
        if not all(criteria.values()):
            failed = [name for name, ok in criteria.items() if not ok]
            logger.info("Claim %s not auto-approved, failed criteria: %s", claim.claim_id, ", ".join(failed))
            return claim

        if claim.total_amount >= self._settings.auto_approval_ceiling:
            logger.info(
                "Claim %s eligible but routed to manual review (amount %s >= %s)",
                claim.claim_id,
                claim.total_amount,
                self._settings.auto_approval_ceiling,
            )
            return claim

        approved = claim.transition(
            ClaimStatus.APPROVED,
            processed_at=self._clock.now(),
            processed_by=AUTO_APPROVAL_ACTOR,
        )
        if not self._claims.update_status(approved, expected_version=claim.version, expected_status=ClaimStatus.PENDING):
            raise StaleClaimError(f"Claim {claim.claim_id} was modified concurrently")

        logger.info("Claim %s auto-approved (amount %s)", claim.claim_id, claim.total_amount)
        return approved
