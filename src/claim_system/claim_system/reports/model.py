from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class MonthlyReport:
    """Append-only HR report row. ``report_data`` holds the serialized snapshot."""

    report_id: int
    report_type: str
    generated_at: datetime
    generated_by: str
    report_data: str
    file_path: Optional[str] = None


@dataclass(frozen=True)
class MonthlySummary:
    month: str
    total_claims: int
    approved_claims: int
    total_amount: Decimal
    claims_by_status: dict[str, int]

    def to_payload(self) -> dict:
        return {
            "Month": self.month,
            "TotalClaims": self.total_claims,
            "ApprovedClaims": self.approved_claims,
            "TotalAmount": self.total_amount,
            "ClaimsByStatus": dict(self.claims_by_status),
        }


@dataclass(frozen=True)
class Invoice:
    """Projection of an approved claim; never persisted."""

    invoice_number: str
    claim_id: int
    lecturer_name: Optional[str]
    hours_worked: Decimal
    hourly_rate: Decimal
    total_amount: Decimal
    submission_date: datetime
    invoice_date: datetime

    def to_payload(self) -> dict:
        return {
            "InvoiceNumber": self.invoice_number,
            "ClaimId": self.claim_id,
            "LecturerName": self.lecturer_name,
            "HoursWorked": self.hours_worked,
            "HourlyRate": self.hourly_rate,
            "TotalAmount": self.total_amount,
            "SubmissionDate": self.submission_date,
            "InvoiceDate": self.invoice_date,
        }
