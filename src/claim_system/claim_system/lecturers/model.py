from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Lecturer:
    """Contract lecturer reference data (read-only for the claim engine)."""

    lecturer_id: str
    full_name: str
    email: Optional[str] = None
    contact_number: Optional[str] = None
    bank_account: Optional[str] = None
    contract_start: Optional[date] = None
    contract_end: Optional[date] = None
    is_active: bool = True

    def contract_covers(self, day: date) -> bool:
        if not self.is_active:
            return False
        if self.contract_start and day < self.contract_start:
            return False
        if self.contract_end and day > self.contract_end:
            return False
        return True
