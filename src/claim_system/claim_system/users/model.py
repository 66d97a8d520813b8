from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: login account.

    Lecturer accounts carry ``lecturer_id`` linking them to their lecturer record.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    lecturer_id: Optional[str] = None
    is_active: bool = True
