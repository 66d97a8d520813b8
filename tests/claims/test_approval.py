from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.claim_system.claim_system.claims.approval import ApprovalEngine
from src.claim_system.claim_system.common.clock import FixedClock
from src.claim_system.claim_system.core.constants import AUTO_APPROVAL_ACTOR
from src.claim_system.claim_system.core.enums import ClaimStatus
from src.claim_system.claim_system.core.exceptions import StaleClaimError
from src.claim_system.claim_system.core.settings import ClaimSettings
from src.claim_system.claim_system.lecturers.model import Lecturer


@pytest.fixture
def engine(claims_repo, lecturers, settings, clock):
    return ApprovalEngine(claims_repo, lecturers, settings, clock=clock)


def test_small_valid_claim_meets_criteria_and_is_auto_approved(engine, claims_repo, make_claim, fixed_now):
    claim = claims_repo.add(make_claim(hours="100", rate="80"))

    assert engine.meets_approval_criteria(claim) is True

    result = engine.process_auto_approval(claim)

    assert result.status == ClaimStatus.APPROVED
    assert result.processed_by == AUTO_APPROVAL_ACTOR
    assert result.processed_at == fixed_now
    stored = claims_repo.get_by_id(claim.claim_id)
    assert stored.status == ClaimStatus.APPROVED
    assert stored.processed_by == AUTO_APPROVAL_ACTOR
    assert stored.version == claim.version + 1


def test_large_eligible_claim_is_left_for_manual_review(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="150", rate="300"))
    assert claim.total_amount == Decimal("45000")

    assert engine.meets_approval_criteria(claim) is True

    result = engine.process_auto_approval(claim)

    assert result is claim
    assert claims_repo.get_by_id(claim.claim_id).status == ClaimStatus.PENDING
    assert claims_repo.update_calls == 0


def test_amount_exactly_at_ceiling_is_not_auto_approved(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="100", rate="100"))

    assert engine.process_auto_approval(claim).status == ClaimStatus.PENDING


@pytest.mark.parametrize(
    "hours, rate, total",
    [
        ("161", "50", None),
        ("10", "501", None),
        ("100", "400", "50000.01"),
    ],
)
def test_each_numeric_criterion_can_fail(engine, claims_repo, make_claim, hours, rate, total):
    claim = claims_repo.add(make_claim(hours=hours, rate=rate, total=total))

    assert engine.meets_approval_criteria(claim) is False
    assert engine.process_auto_approval(claim).status == ClaimStatus.PENDING


def test_unknown_lecturer_has_no_valid_contract(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(lecturer_id="LEC-404", hours="10"))

    assert engine.has_valid_contract("LEC-404") is False
    assert engine.meets_approval_criteria(claim) is False


def test_contract_dates_are_ignored_by_default(claims_repo, settings, clock, lecturer_repo_of):
    expired = Lecturer(lecturer_id="LEC-001", full_name="Old", contract_end=date(2024, 1, 1), is_active=False)
    engine = ApprovalEngine(claims_repo, lecturer_repo_of(expired), settings, clock=clock)

    assert engine.has_valid_contract("LEC-001") is True


def test_contract_dates_enforced_when_enabled(claims_repo, clock, lecturer_repo_of):
    expired = Lecturer(lecturer_id="LEC-001", full_name="Old", contract_end=date(2024, 1, 1))
    current = Lecturer(lecturer_id="LEC-002", full_name="New", contract_start=date(2025, 1, 1), contract_end=date(2025, 12, 31))
    inactive = Lecturer(lecturer_id="LEC-003", full_name="Off", is_active=False)
    engine = ApprovalEngine(
        claims_repo,
        lecturer_repo_of(expired, current, inactive),
        ClaimSettings(enforce_contract_dates=True),
        clock=clock,
    )

    assert engine.has_valid_contract("LEC-001") is False
    assert engine.has_valid_contract("LEC-002") is True
    assert engine.has_valid_contract("LEC-003") is False


def test_duplicates_are_detected_both_ways(engine, claims_repo, make_claim):
    first = claims_repo.add(make_claim(hours="12", submitted_at=datetime(2025, 3, 14, 8, 0)))
    second = claims_repo.add(make_claim(hours="12", submitted_at=datetime(2025, 3, 14, 17, 45)))

    assert engine.has_duplicate_claim(first) is True
    assert engine.has_duplicate_claim(second) is True
    assert engine.meets_approval_criteria(first) is False


def test_claim_is_not_its_own_duplicate(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="12"))

    assert engine.has_duplicate_claim(claim) is False


def test_different_day_or_hours_is_not_a_duplicate(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="12", submitted_at=datetime(2025, 3, 14, 8, 0)))
    claims_repo.add(make_claim(hours="12", submitted_at=datetime(2025, 3, 15, 8, 0)))
    claims_repo.add(make_claim(hours="12.5", submitted_at=datetime(2025, 3, 14, 9, 0)))
    claims_repo.add(make_claim(hours="12", lecturer_id="LEC-002", submitted_at=datetime(2025, 3, 14, 9, 0)))

    assert engine.has_duplicate_claim(claim) is False


def test_non_pending_claims_are_not_touched(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(status=ClaimStatus.REJECTED))

    assert engine.process_auto_approval(claim) is claim
    assert claims_repo.update_calls == 0


def test_second_concurrent_auto_approval_loses(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="100", rate="80"))

    engine.process_auto_approval(claim)

    # A second caller still holding the old Pending snapshot.
    with pytest.raises(StaleClaimError):
        engine.process_auto_approval(claim)
    assert claims_repo.get_by_id(claim.claim_id).version == claim.version + 1


def test_evaluate_criteria_names_every_check(engine, claims_repo, make_claim):
    claim = claims_repo.add(make_claim(hours="170", rate="80"))

    criteria = engine.evaluate_criteria(claim)

    assert set(criteria) == {
        "hours_within_limit",
        "rate_within_limit",
        "amount_within_limit",
        "valid_contract",
        "no_duplicate",
    }
    assert criteria["hours_within_limit"] is False
    assert criteria["valid_contract"] is True


def test_contract_check_uses_clock_date(claims_repo, lecturer_repo_of):
    lec = Lecturer(lecturer_id="LEC-001", full_name="A", contract_start=date(2025, 1, 1), contract_end=date(2025, 1, 31))
    settings = ClaimSettings(enforce_contract_dates=True)

    inside = ApprovalEngine(claims_repo, lecturer_repo_of(lec), settings, clock=FixedClock(datetime(2025, 1, 31, 23, 0)))
    outside = ApprovalEngine(claims_repo, lecturer_repo_of(lec), settings, clock=FixedClock(datetime(2025, 2, 1, 0, 0)))

    assert inside.has_valid_contract("LEC-001") is True
    assert outside.has_valid_contract("LEC-001") is False
