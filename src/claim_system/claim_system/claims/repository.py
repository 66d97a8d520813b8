from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ClaimStatus
from .model import Claim, ClaimWithLecturer


class ClaimRepository(Protocol):
    """Repository interface for claims.

    Note (DIP): the rule engines depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, claim_id: int) -> Optional[Claim]:
        raise NotImplementedError

    def get_with_lecturer(self, claim_id: int) -> Optional[ClaimWithLecturer]:
        raise NotImplementedError

    def sum_hours_in_range(
        self,
        *,
        lecturer_id: str,
        start: datetime,
        end: datetime,
        exclude_status: ClaimStatus,
        exclude_claim_id: Optional[int] = None,
    ) -> Decimal:
        """Sum of hours for claims submitted in ``[start, end)``."""

        raise NotImplementedError

    def exists_duplicate(
        self,
        *,
        lecturer_id: str,
        submitted_on: date,
        hours_worked: Decimal,
        exclude_claim_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def create(self, claim: Claim) -> int:
        raise NotImplementedError

    def update_status(self, claim: Claim, *, expected_version: int, expected_status: ClaimStatus) -> bool:
        """Persist ``claim``'s status fields and version if the stored row still matches.

        Returns False when the row was changed by someone else in the meantime.
        """

        raise NotImplementedError

    def list_submitted_between(self, *, start: datetime, end: datetime) -> Sequence[Claim]:
        raise NotImplementedError

    def list_for_lecturer(self, lecturer_id: str, *, limit: int) -> Sequence[Claim]:
        raise NotImplementedError

    def list_by_status(self, status: ClaimStatus, *, limit: int) -> Sequence[Claim]:
        raise NotImplementedError

    def count_by_status(self, *, lecturer_id: Optional[str] = None) -> dict[ClaimStatus, int]:
        """Number of claims per status, for one lecturer or for everyone."""

        raise NotImplementedError

    def sum_amount(self, *, lecturer_id: str, statuses: Sequence[ClaimStatus]) -> Decimal:
        raise NotImplementedError

    def count_processed_between(self, *, start: datetime, end: datetime) -> dict[ClaimStatus, int]:
        """Claims per resulting status whose ``processed_at`` falls in ``[start, end)``."""

        raise NotImplementedError

    def list_recently_processed(self, *, limit: int) -> Sequence[Claim]:
        raise NotImplementedError
