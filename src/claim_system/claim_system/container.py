from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .claims.approval import ApprovalEngine
from .claims.calculator.capped_calculator import CappedAmountCalculator
from .claims.mysql_claim_repository import MySQLClaimRepository
from .claims.repository import ClaimRepository
from .claims.service import ClaimService
from .claims.validation import ClaimValidator
from .common.clock import Clock, SystemClock
from .core.settings import ClaimSettings
from .database.connection import DBConfig, DatabaseConnection
from .lecturers.mysql_lecturer_repository import MySQLLecturerRepository
from .lecturers.repository import LecturerRepository
from .reports.invoice import InvoiceGenerator
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    settings: ClaimSettings
    clock: Clock

    users_repo: UserRepository
    lecturers_repo: LecturerRepository
    claims_repo: ClaimRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    validator: ClaimValidator
    approval_engine: ApprovalEngine
    claim_service: ClaimService
    reporting_service: ReportingService
    invoice_generator: InvoiceGenerator


def wire_container(
    *,
    users_repo: UserRepository,
    lecturers_repo: LecturerRepository,
    claims_repo: ClaimRepository,
    reports_repo: ReportRepository,
    settings: Optional[ClaimSettings] = None,
    clock: Optional[Clock] = None,
) -> Container:
    settings = settings or ClaimSettings()
    clock = clock or SystemClock()

    validator = ClaimValidator(claims_repo, settings)
    approval_engine = ApprovalEngine(claims_repo, lecturers_repo, settings, clock=clock)
    claim_service = ClaimService(
        claims_repo,
        calculator=CappedAmountCalculator(settings.maximum_amount),
        validator=validator,
        approval=approval_engine,
        clock=clock,
    )

    return Container(
        settings=settings,
        clock=clock,
        users_repo=users_repo,
        lecturers_repo=lecturers_repo,
        claims_repo=claims_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(users_repo),
        validator=validator,
        approval_engine=approval_engine,
        claim_service=claim_service,
        reporting_service=ReportingService(claims_repo, reports_repo, clock=clock),
        invoice_generator=InvoiceGenerator(claims_repo, clock=clock),
    )


def build_container(*, db_config: dict, claim_settings: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        lecturers_repo=MySQLLecturerRepository(conn),
        claims_repo=MySQLClaimRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        settings=ClaimSettings.from_mapping(claim_settings),
    )
