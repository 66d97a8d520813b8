from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional

from ..claims.repository import ClaimRepository
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_bounds
from ..core.constants import REPORT_TYPE_MONTHLY, SYSTEM_ACTOR
from ..core.enums import ClaimStatus
from .model import MonthlyReport, MonthlySummary
from .repository import ReportRepository
from .serialization import dumps

logger = logging.getLogger(__name__)


class ReportingService:
    """Monthly aggregation over claims, persisted as append-only HR reports."""

    def __init__(self, claims: ClaimRepository, reports: ReportRepository, *, clock: Optional[Clock] = None):
        self._claims = claims
        self._reports = reports
        self._clock = clock or SystemClock()

    def summarize_month(self, month: date) -> MonthlySummary:
        start, end = month_bounds(month)
        claims = self._claims.list_submitted_between(start=start, end=end)

        approved = [c for c in claims if c.status == ClaimStatus.APPROVED]
        by_status = Counter(c.status.value for c in claims)

        return MonthlySummary(
            month=start.strftime("%Y-%m"),
            total_claims=len(claims),
            approved_claims=len(approved),
            total_amount=sum((c.total_amount for c in approved), Decimal("0")),
            claims_by_status=dict(by_status),
        )

    def generate_monthly_report(self, month: date, *, generated_by: str = SYSTEM_ACTOR) -> MonthlyReport:
        """Aggregate ``month`` and append a new report row.

        Each call creates a new row, even for a month that was reported before.
        """

        summary = self.summarize_month(month)
        generated_at = self._clock.now()
        report_data = dumps(summary.to_payload())

        report_id = self._reports.append(
            report_type=REPORT_TYPE_MONTHLY,
            generated_at=generated_at,
            generated_by=generated_by,
            report_data=report_data,
        )
        logger.info(
            "Monthly report %s generated for %s (%s claims, %s approved)",
            report_id,
            summary.month,
            summary.total_claims,
            summary.approved_claims,
        )
        return MonthlyReport(
            report_id=report_id,
            report_type=REPORT_TYPE_MONTHLY,
            generated_at=generated_at,
            generated_by=generated_by,
            report_data=report_data,
        )

    def list_reports(self, *, limit: int = 50) -> list[MonthlyReport]:
        return list(self._reports.list_recent(report_type=REPORT_TYPE_MONTHLY, limit=limit))
