from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ClaimStatus
from ..lecturers.model import Lecturer


@dataclass(frozen=True)
class Claim:
    """Domain entity: a lecturer's monthly hours/rate claim.

    Instances are immutable. A status change produces a new value through
    :meth:`transition` and is persisted with an explicit repository update
    guarded by ``version``.
    """

    claim_id: Optional[int]
    lecturer_id: str
    hours_worked: Decimal
    hourly_rate: Decimal
    total_amount: Decimal
    submitted_at: datetime
    status: ClaimStatus = ClaimStatus.PENDING
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    notes: Optional[str] = None
    version: int = 1

    @property
    def is_final(self) -> bool:
        return self.status in (ClaimStatus.REJECTED, ClaimStatus.PAID)

    def transition(self, status: ClaimStatus, *, processed_at: datetime, processed_by: str) -> "Claim":
        return replace(
            self,
            status=status,
            processed_at=processed_at,
            processed_by=processed_by,
            version=self.version + 1,
        )


@dataclass(frozen=True)
class ClaimWithLecturer:
    """Read-model: claim joined with its lecturer (lecturer may be missing)."""

    claim: Claim
    lecturer: Optional[Lecturer] = None

    @property
    def lecturer_name(self) -> Optional[str]:
        return self.lecturer.full_name if self.lecturer else None


@dataclass(frozen=True)
class ValidationResult:
    messages: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.messages


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a submission: either a persisted claim or the rule violations."""

    claim: Optional[Claim]
    violations: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.claim is not None
