from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_bounds
from ..common.validators import require_decimal
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_RECENT_CLAIMS
from ..core.enums import REVIEWER_ROLES, ClaimStatus, Role
from ..core.exceptions import AuthorizationError, InvalidStateError, StaleClaimError, ValidationError
from .approval import ApprovalEngine
from .calculator.base import AmountCalculator
from .model import Claim, SubmissionResult
from .repository import ClaimRepository
from .validation import ClaimValidator

logger = logging.getLogger(__name__)

EARNING_STATUSES = (ClaimStatus.APPROVED, ClaimStatus.PAID)


class ClaimService:
    """Use cases around the claim lifecycle: submit, review, pay."""

    def __init__(
        self,
        claims: ClaimRepository,
        *,
        calculator: AmountCalculator,
        validator: ClaimValidator,
        approval: ApprovalEngine,
        clock: Optional[Clock] = None,
    ):
        self._claims = claims
        self._calculator = calculator
        self._validator = validator
        self._approval = approval
        self._clock = clock or SystemClock()

    def submit_claim(
        self,
        *,
        current_role: Role,
        lecturer_id: Optional[str],
        hours_worked: Any,
        hourly_rate: Any,
        notes: Optional[str] = None,
    ) -> SubmissionResult:
        if current_role != Role.LECTURER:
            raise AuthorizationError("Only lecturers can submit claims")
        if not lecturer_id:
            raise ValidationError("Account is not linked to a lecturer record")

        hours = require_decimal(hours_worked, "Hours worked", places=2)
        rate = require_decimal(hourly_rate, "Hourly rate", places=2)
        total = self._calculator.total_amount(hours, rate)

        candidate = Claim(
            claim_id=None,
            lecturer_id=lecturer_id,
            hours_worked=hours,
            hourly_rate=rate,
            total_amount=total,
            submitted_at=self._clock.now(),
            notes=(notes or "").strip() or None,
        )

        result = self._validator.validate(candidate)
        if not result.is_valid:
            return SubmissionResult(claim=None, violations=result.messages)

        claim_id = self._claims.create(candidate)
        stored = self._claims.get_by_id(claim_id)
        if stored is None:
            raise InvalidStateError(f"Claim {claim_id} disappeared after insert")
        logger.info("Claim %s submitted by lecturer %s (amount %s)", claim_id, lecturer_id, total)

        try:
            claim = self._approval.process_auto_approval(stored)
        except StaleClaimError:
            # The claim is stored either way; report whatever state it is in now.
            logger.warning("Claim %s changed during auto-approval", claim_id)
            claim = self._claims.get_by_id(claim_id) or stored
        return SubmissionResult(claim=claim)

    def _require_claim(self, claim_id: int) -> Claim:
        claim = self._claims.get_by_id(int(claim_id))
        if claim is None:
            raise InvalidStateError("Claim not found")
        return claim

    def _transition(self, claim: Claim, status: ClaimStatus, *, actor: str) -> Claim:
        updated = claim.transition(status, processed_at=self._clock.now(), processed_by=actor)
        if not self._claims.update_status(updated, expected_version=claim.version, expected_status=claim.status):
            raise StaleClaimError(f"Claim {claim.claim_id} was modified concurrently")
        logger.info("Claim %s %s -> %s by %s", claim.claim_id, claim.status.value, status.value, actor)
        return updated

    def _review(self, *, current_role: Role, reviewer_name: str, claim_id: int, status: ClaimStatus) -> Claim:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("Only coordinators and managers can review claims")

        claim = self._require_claim(claim_id)
        if claim.status != ClaimStatus.PENDING:
            raise InvalidStateError("Claim has already been processed")
        return self._transition(claim, status, actor=reviewer_name)

    def approve_claim(self, *, current_role: Role, reviewer_name: str, claim_id: int) -> Claim:
        return self._review(
            current_role=current_role,
            reviewer_name=reviewer_name,
            claim_id=claim_id,
            status=ClaimStatus.APPROVED,
        )

    def reject_claim(self, *, current_role: Role, reviewer_name: str, claim_id: int) -> Claim:
        return self._review(
            current_role=current_role,
            reviewer_name=reviewer_name,
            claim_id=claim_id,
            status=ClaimStatus.REJECTED,
        )

    def mark_paid(self, *, current_role: Role, actor_name: str, claim_id: int) -> Claim:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can mark claims as paid")

        claim = self._require_claim(claim_id)
        if claim.status != ClaimStatus.APPROVED:
            raise InvalidStateError("Only approved claims can be paid")
        return self._transition(claim, ClaimStatus.PAID, actor=actor_name)

    def list_my_claims(self, *, lecturer_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Claim]:
        return list(self._claims.list_for_lecturer(lecturer_id, limit=limit))

    def list_pending(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Claim]:
        return list(self._claims.list_by_status(ClaimStatus.PENDING, limit=limit))

    def lecturer_dashboard(self, *, lecturer_id: str) -> dict:
        counts = self._claims.count_by_status(lecturer_id=lecturer_id)
        earnings = self._claims.sum_amount(lecturer_id=lecturer_id, statuses=EARNING_STATUSES)
        return {
            "pending_claims": counts.get(ClaimStatus.PENDING, 0),
            "approved_claims": counts.get(ClaimStatus.APPROVED, 0),
            "rejected_claims": counts.get(ClaimStatus.REJECTED, 0),
            "paid_claims": counts.get(ClaimStatus.PAID, 0),
            "total_earnings": earnings,
            "recent_claims": list(self._claims.list_for_lecturer(lecturer_id, limit=DEFAULT_RECENT_CLAIMS)),
        }

    def coordinator_dashboard(self) -> dict:
        """Review queue size and this month's decisions.

        A claim approved and then paid in the same month counts as approved.
        """

        start, end = month_bounds(self._clock.now().date())
        totals = self._claims.count_by_status()
        decided = self._claims.count_processed_between(start=start, end=end)
        return {
            "pending_approvals": totals.get(ClaimStatus.PENDING, 0),
            "approved_this_month": decided.get(ClaimStatus.APPROVED, 0) + decided.get(ClaimStatus.PAID, 0),
            "rejected_this_month": decided.get(ClaimStatus.REJECTED, 0),
            "total_claims_processed": sum(n for status, n in totals.items() if status != ClaimStatus.PENDING),
            "recent_actions": list(self._claims.list_recently_processed(limit=DEFAULT_RECENT_CLAIMS)),
        }

    def manager_dashboard(self) -> dict:
        """Figures over claims submitted in the current month."""

        start, end = month_bounds(self._clock.now().date())
        claims = self._claims.list_submitted_between(start=start, end=end)

        approved = [c for c in claims if c.status in EARNING_STATUSES]
        rejected = [c for c in claims if c.status == ClaimStatus.REJECTED]
        decided = len(approved) + len(rejected)

        processed = [c for c in claims if c.processed_at is not None]
        processing_days = Decimal("0.0")
        if processed:
            seconds = sum(int((c.processed_at - c.submitted_at).total_seconds()) for c in processed)
            processing_days = (Decimal(seconds) / Decimal(86400 * len(processed))).quantize(Decimal("0.1"))

        average = Decimal("0.00")
        if claims:
            average = (sum((c.total_amount for c in claims), Decimal("0")) / len(claims)).quantize(Decimal("0.01"))

        return {
            "month": start.strftime("%Y-%m"),
            "claims_this_month": len(claims),
            "approved_amount": sum((c.total_amount for c in approved), Decimal("0")),
            "approval_rate": _percent(len(approved), decided),
            "rejection_rate": _percent(len(rejected), decided),
            "average_claim_value": average,
            "average_processing_days": processing_days,
        }


def _percent(part: int, whole: int) -> Decimal:
    if not whole:
        return Decimal("0.0")
    return (Decimal(part) * 100 / whole).quantize(Decimal("0.1"))
