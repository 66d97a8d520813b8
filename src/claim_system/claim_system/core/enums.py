from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    LECTURER = "lecturer"
    PROGRAMME_COORDINATOR = "coordinator"
    ACADEMIC_MANAGER = "manager"
    HR = "hr"


class ClaimStatus(str, Enum):
    """Claim lifecycle status as stored in the database."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PAID = "Paid"


REVIEWER_ROLES = frozenset({Role.PROGRAMME_COORDINATOR, Role.ACADEMIC_MANAGER})
