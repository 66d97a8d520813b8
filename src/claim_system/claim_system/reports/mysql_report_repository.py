from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import MonthlyReport
from .repository import ReportRepository

REPORT_COLUMNS = "report_id, report_type, generated_at, generated_by, report_data, file_path"


def _report_from_row(r: Dict[str, Any]) -> MonthlyReport:
    return MonthlyReport(
        report_id=int(r["report_id"]),
        report_type=r["report_type"],
        generated_at=r["generated_at"],
        generated_by=r["generated_by"],
        report_data=r["report_data"],
        file_path=r.get("file_path"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        report_type: str,
        generated_at: datetime,
        generated_by: str,
        report_data: str,
        file_path: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO hr_reports(report_type, generated_at, generated_by, report_data, file_path)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (report_type, generated_at, generated_by, report_data, file_path),
            )
            return int(cur.lastrowid)

    def get_by_id(self, report_id: int) -> Optional[MonthlyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {REPORT_COLUMNS} FROM hr_reports WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            return _report_from_row(r) if r else None

    def list_recent(self, *, report_type: Optional[str] = None, limit: int = 50) -> Sequence[MonthlyReport]:
        where = ""
        params: list[object] = []
        if report_type is not None:
            where = "WHERE report_type=%s"
            params.append(report_type)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {REPORT_COLUMNS}
                FROM hr_reports
                {where}
                ORDER BY generated_at DESC, report_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_report_from_row(r) for r in fetchall(cur)]
