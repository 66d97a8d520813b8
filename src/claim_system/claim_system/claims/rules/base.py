from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import Claim


class ClaimRule(ABC):
    """Strategy Pattern: one business rule, returning a violation message or None."""

    @abstractmethod
    def check(self, claim: Claim) -> Optional[str]:
        raise NotImplementedError
