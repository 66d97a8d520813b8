from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import MonthlyReport


class ReportRepository(Protocol):
    def append(
        self,
        *,
        report_type: str,
        generated_at: datetime,
        generated_by: str,
        report_data: str,
        file_path: Optional[str] = None,
    ) -> int:
        """Insert a new report row; existing rows are never updated."""

        raise NotImplementedError

    def get_by_id(self, report_id: int) -> Optional[MonthlyReport]:
        raise NotImplementedError

    def list_recent(self, *, report_type: Optional[str] = None, limit: int = 50) -> Sequence[MonthlyReport]:
        raise NotImplementedError
