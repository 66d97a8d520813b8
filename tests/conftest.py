from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from src.claim_system.claim_system.claims.model import Claim, ClaimWithLecturer
from src.claim_system.claim_system.common.clock import FixedClock
from src.claim_system.claim_system.core.enums import ClaimStatus
from src.claim_system.claim_system.core.settings import ClaimSettings
from src.claim_system.claim_system.lecturers.model import Lecturer
from src.claim_system.claim_system.reports.model import MonthlyReport
from src.claim_system.claim_system.users.model import User


class InMemoryClaims:
    def __init__(self, lecturers: Optional["InMemoryLecturers"] = None):
        self._rows: dict[int, Claim] = {}
        self._id = 0
        self._lecturers = lecturers
        self.update_calls = 0

    def add(self, claim: Claim) -> Claim:
        """Seed helper: store a claim as-is, assigning an id when missing."""
        if claim.claim_id is None:
            self._id += 1
            claim = replace(claim, claim_id=self._id)
        else:
            self._id = max(self._id, claim.claim_id)
        self._rows[claim.claim_id] = claim
        return claim

    def get_by_id(self, claim_id: int) -> Optional[Claim]:
        return self._rows.get(int(claim_id))

    def get_with_lecturer(self, claim_id: int) -> Optional[ClaimWithLecturer]:
        claim = self.get_by_id(claim_id)
        if claim is None:
            return None
        lecturer = self._lecturers.get_by_id(claim.lecturer_id) if self._lecturers else None
        return ClaimWithLecturer(claim=claim, lecturer=lecturer)

    def sum_hours_in_range(self, *, lecturer_id, start, end, exclude_status, exclude_claim_id=None) -> Decimal:
        return sum(
            (
                c.hours_worked
                for c in self._rows.values()
                if c.lecturer_id == lecturer_id
                and start <= c.submitted_at < end
                and c.status != exclude_status
                and c.claim_id != exclude_claim_id
            ),
            Decimal("0"),
        )

    def exists_duplicate(self, *, lecturer_id, submitted_on: date, hours_worked, exclude_claim_id) -> bool:
        return any(
            c.lecturer_id == lecturer_id
            and c.submitted_at.date() == submitted_on
            and c.hours_worked == hours_worked
            and c.claim_id != exclude_claim_id
            for c in self._rows.values()
        )

    def create(self, claim: Claim) -> int:
        return self.add(replace(claim, claim_id=None)).claim_id

    def update_status(self, claim: Claim, *, expected_version: int, expected_status: ClaimStatus) -> bool:
        self.update_calls += 1
        stored = self._rows.get(claim.claim_id)
        if stored is None or stored.version != expected_version or stored.status != expected_status:
            return False
        self._rows[claim.claim_id] = replace(
            stored,
            status=claim.status,
            processed_at=claim.processed_at,
            processed_by=claim.processed_by,
            version=claim.version,
        )
        return True

    def list_submitted_between(self, *, start: datetime, end: datetime):
        return sorted(
            (c for c in self._rows.values() if start <= c.submitted_at < end),
            key=lambda c: (c.submitted_at, c.claim_id),
        )

    def list_for_lecturer(self, lecturer_id: str, *, limit: int):
        items = [c for c in self._rows.values() if c.lecturer_id == lecturer_id]
        items.sort(key=lambda c: (c.submitted_at, c.claim_id), reverse=True)
        return items[:limit]

    def list_by_status(self, status: ClaimStatus, *, limit: int):
        items = [c for c in self._rows.values() if c.status == status]
        items.sort(key=lambda c: (c.submitted_at, c.claim_id))
        return items[:limit]

    def count_by_status(self, *, lecturer_id=None) -> dict:
        return dict(Counter(c.status for c in self._rows.values() if lecturer_id is None or c.lecturer_id == lecturer_id))

    def sum_amount(self, *, lecturer_id, statuses) -> Decimal:
        return sum(
            (c.total_amount for c in self._rows.values() if c.lecturer_id == lecturer_id and c.status in statuses),
            Decimal("0"),
        )

    def count_processed_between(self, *, start: datetime, end: datetime) -> dict:
        return dict(Counter(c.status for c in self._rows.values() if c.processed_at and start <= c.processed_at < end))

    def list_recently_processed(self, *, limit: int):
        items = [c for c in self._rows.values() if c.processed_at is not None]
        items.sort(key=lambda c: (c.processed_at, c.claim_id), reverse=True)
        return items[:limit]


class InMemoryLecturers:
    def __init__(self, *lecturers: Lecturer):
        self._by_id = {lec.lecturer_id: lec for lec in lecturers}

    def get_by_id(self, lecturer_id: str) -> Optional[Lecturer]:
        return self._by_id.get(lecturer_id)


class InMemoryReports:
    def __init__(self):
        self.rows: list[MonthlyReport] = []

    def append(self, *, report_type, generated_at, generated_by, report_data, file_path=None) -> int:
        report = MonthlyReport(
            report_id=len(self.rows) + 1,
            report_type=report_type,
            generated_at=generated_at,
            generated_by=generated_by,
            report_data=report_data,
            file_path=file_path,
        )
        self.rows.append(report)
        return report.report_id

    def get_by_id(self, report_id: int) -> Optional[MonthlyReport]:
        return next((r for r in self.rows if r.report_id == report_id), None)

    def list_recent(self, *, report_type=None, limit=50):
        items = [r for r in self.rows if report_type is None or r.report_type == report_type]
        return list(reversed(items))[:limit]


class InMemoryUsers:
    def __init__(self, *users: User):
        self._by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 9, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def settings() -> ClaimSettings:
    return ClaimSettings()


@pytest.fixture
def lecturer() -> Lecturer:
    return Lecturer(
        lecturer_id="LEC-001",
        full_name="Dr. Smith",
        email="smith@cmcs.example.com",
        contract_start=date(2025, 1, 1),
        contract_end=date(2025, 12, 31),
    )


@pytest.fixture
def lecturers(lecturer) -> InMemoryLecturers:
    return InMemoryLecturers(lecturer)


@pytest.fixture
def claims_repo(lecturers) -> InMemoryClaims:
    return InMemoryClaims(lecturers)


@pytest.fixture
def reports_repo() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def make_claim(fixed_now):
    def _make(
        *,
        hours: str = "100",
        rate: str = "80",
        total: Optional[str] = None,
        lecturer_id: str = "LEC-001",
        submitted_at: Optional[datetime] = None,
        status: ClaimStatus = ClaimStatus.PENDING,
        claim_id: Optional[int] = None,
        processed_at: Optional[datetime] = None,
    ) -> Claim:
        h, r = Decimal(hours), Decimal(rate)
        return Claim(
            claim_id=claim_id,
            lecturer_id=lecturer_id,
            hours_worked=h,
            hourly_rate=r,
            total_amount=Decimal(total) if total is not None else h * r,
            submitted_at=submitted_at or fixed_now - timedelta(hours=1),
            status=status,
            processed_at=processed_at,
        )

    return _make


@pytest.fixture
def lecturer_repo_of():
    return InMemoryLecturers


@pytest.fixture
def user_repo_of():
    return InMemoryUsers
