from __future__ import annotations

import logging
from typing import Optional

from ..claims.repository import ClaimRepository
from ..common.clock import Clock, SystemClock
from ..core.enums import ClaimStatus
from ..core.exceptions import InvalidStateError
from .model import Invoice
from .serialization import dumps

logger = logging.getLogger(__name__)


class InvoiceGenerator:
    def __init__(self, claims: ClaimRepository, *, clock: Optional[Clock] = None):
        self._claims = claims
        self._clock = clock or SystemClock()

    def build_invoice(self, claim_id: int) -> Invoice:
        found = self._claims.get_with_lecturer(int(claim_id))
        if found is None or found.claim.status != ClaimStatus.APPROVED:
            raise InvalidStateError("Claim not found or not approved")

        claim = found.claim
        now = self._clock.now()
        return Invoice(
            invoice_number=f"INV-{claim.claim_id}-{now:%Y%m%d}",
            claim_id=int(claim.claim_id),
            lecturer_name=found.lecturer_name,
            hours_worked=claim.hours_worked,
            hourly_rate=claim.hourly_rate,
            total_amount=claim.total_amount,
            submission_date=claim.submitted_at,
            invoice_date=now,
        )

    def generate_invoice(self, claim_id: int) -> str:
        """Serialized invoice payload (JSON) for an approved claim."""

        invoice = self.build_invoice(claim_id)
        logger.info("Invoice %s generated", invoice.invoice_number)
        return dumps(invoice.to_payload())
