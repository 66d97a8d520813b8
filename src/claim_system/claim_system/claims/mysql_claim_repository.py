from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ClaimStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from ..lecturers.mysql_lecturer_repository import lecturer_from_row
from .model import Claim, ClaimWithLecturer
from .repository import ClaimRepository

CLAIM_COLUMNS = (
    "c.claim_id, c.lecturer_id, c.hours_worked, c.hourly_rate, c.total_amount, c.submitted_at, "
    "c.status, c.processed_at, c.processed_by, c.notes, c.version"
)


def _claim_from_row(r: Dict[str, Any]) -> Claim:
    return Claim(
        claim_id=int(r["claim_id"]),
        lecturer_id=str(r["lecturer_id"]),
        hours_worked=to_decimal(r["hours_worked"]),
        hourly_rate=to_decimal(r["hourly_rate"]),
        total_amount=to_decimal(r["total_amount"]),
        submitted_at=r["submitted_at"],
        status=ClaimStatus(r["status"]),
        processed_at=r.get("processed_at"),
        processed_by=r.get("processed_by"),
        notes=r.get("notes"),
        version=int(r.get("version") or 1),
    )


class MySQLClaimRepository(ClaimRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, claim_id: int) -> Optional[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {CLAIM_COLUMNS} FROM claims c WHERE c.claim_id=%s", (int(claim_id),))
            r = fetchone(cur)
            return _claim_from_row(r) if r else None

    def get_with_lecturer(self, claim_id: int) -> Optional[ClaimWithLecturer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLAIM_COLUMNS},
                       l.lecturer_id AS l_lecturer_id, l.full_name, l.email, l.contact_number,
                       l.bank_account, l.contract_start, l.contract_end, l.is_active
                FROM claims c
                LEFT JOIN lecturers l ON l.lecturer_id = c.lecturer_id
                WHERE c.claim_id=%s
                """,
                (int(claim_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            lecturer = None
            if r.get("l_lecturer_id") is not None:
                lecturer = lecturer_from_row({**r, "lecturer_id": r["l_lecturer_id"]})
            return ClaimWithLecturer(claim=_claim_from_row(r), lecturer=lecturer)

    def sum_hours_in_range(
        self,
        *,
        lecturer_id: str,
        start: datetime,
        end: datetime,
        exclude_status: ClaimStatus,
        exclude_claim_id: Optional[int] = None,
    ) -> Decimal:
        clauses = ["lecturer_id=%s", "submitted_at >= %s", "submitted_at < %s", "status <> %s"]
        params: list[object] = [lecturer_id, start, end, exclude_status.value]
        if exclude_claim_id is not None:
            clauses.append("claim_id <> %s")
            params.append(int(exclude_claim_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT SUM(hours_worked) AS total FROM claims WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            r = fetchone(cur)
            return to_decimal(r["total"] if r else None)

    def exists_duplicate(
        self,
        *,
        lecturer_id: str,
        submitted_on: date,
        hours_worked: Decimal,
        exclude_claim_id: Optional[int],
    ) -> bool:
        # Range on the day keeps the index on (lecturer_id, submitted_at) usable.
        day_start = datetime.combine(submitted_on, datetime.min.time())
        clauses = ["lecturer_id=%s", "submitted_at >= %s", "submitted_at < %s", "hours_worked=%s"]
        params: list[object] = [lecturer_id, day_start, day_start + timedelta(days=1), hours_worked]
        if exclude_claim_id is not None:
            clauses.append("claim_id <> %s")
            params.append(int(exclude_claim_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT EXISTS(SELECT 1 FROM claims WHERE {' AND '.join(clauses)}) AS dup",
                tuple(params),
            )
            r = fetchone(cur)
            return bool(r and r["dup"])

    def create(self, claim: Claim) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO claims(lecturer_id, hours_worked, hourly_rate, total_amount, submitted_at,
                                   status, processed_at, processed_by, notes, version)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    claim.lecturer_id,
                    claim.hours_worked,
                    claim.hourly_rate,
                    claim.total_amount,
                    claim.submitted_at,
                    claim.status.value,
                    claim.processed_at,
                    claim.processed_by,
                    claim.notes,
                    claim.version,
                ),
            )
            return int(cur.lastrowid)

    def update_status(self, claim: Claim, *, expected_version: int, expected_status: ClaimStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE claims
                SET status=%s, processed_at=%s, processed_by=%s, version=%s
                WHERE claim_id=%s AND version=%s AND status=%s
                """,
                (
                    claim.status.value,
                    claim.processed_at,
                    claim.processed_by,
                    claim.version,
                    int(claim.claim_id),
                    int(expected_version),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def list_submitted_between(self, *, start: datetime, end: datetime) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLAIM_COLUMNS}
                FROM claims c
                WHERE c.submitted_at >= %s AND c.submitted_at < %s
                ORDER BY c.submitted_at ASC, c.claim_id ASC
                """,
                (start, end),
            )
            return [_claim_from_row(r) for r in fetchall(cur)]

    def list_for_lecturer(self, lecturer_id: str, *, limit: int) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLAIM_COLUMNS}
                FROM claims c
                WHERE c.lecturer_id=%s
                ORDER BY c.submitted_at DESC, c.claim_id DESC
                LIMIT %s
                """,
                (lecturer_id, int(limit)),
            )
            return [_claim_from_row(r) for r in fetchall(cur)]

    def list_by_status(self, status: ClaimStatus, *, limit: int) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLAIM_COLUMNS}
                FROM claims c
                WHERE c.status=%s
                ORDER BY c.submitted_at ASC, c.claim_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_claim_from_row(r) for r in fetchall(cur)]

    def count_by_status(self, *, lecturer_id: Optional[str] = None) -> dict[ClaimStatus, int]:
        where, params = ("WHERE lecturer_id=%s", (lecturer_id,)) if lecturer_id is not None else ("", ())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT status, COUNT(*) AS n FROM claims {where} GROUP BY status", params)
            return {ClaimStatus(r["status"]): int(r["n"]) for r in fetchall(cur)}

    def sum_amount(self, *, lecturer_id: str, statuses: Sequence[ClaimStatus]) -> Decimal:
        if not statuses:
            return Decimal("0")
        placeholders = ", ".join(["%s"] * len(statuses))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT SUM(total_amount) AS total FROM claims WHERE lecturer_id=%s AND status IN ({placeholders})",
                (lecturer_id, *(s.value for s in statuses)),
            )
            r = fetchone(cur)
            return to_decimal(r["total"] if r else None)

    def count_processed_between(self, *, start: datetime, end: datetime) -> dict[ClaimStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS n
                FROM claims
                WHERE processed_at >= %s AND processed_at < %s
                GROUP BY status
                """,
                (start, end),
            )
            return {ClaimStatus(r["status"]): int(r["n"]) for r in fetchall(cur)}

    def list_recently_processed(self, *, limit: int) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {CLAIM_COLUMNS}
                FROM claims c
                WHERE c.processed_at IS NOT NULL
                ORDER BY c.processed_at DESC, c.claim_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_claim_from_row(r) for r in fetchall(cur)]
