from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.settings import ClaimSettings
from .model import Claim, ValidationResult
from .repository import ClaimRepository
from .rules.base import ClaimRule
from .rules.bounds import HoursBoundRule, RateBoundRule
from .rules.monthly_limit import MonthlyLimitRule

logger = logging.getLogger(__name__)


def default_rules(claims: ClaimRepository, settings: ClaimSettings) -> list[ClaimRule]:
    return [
        HoursBoundRule(settings.min_hours, settings.max_hours),
        RateBoundRule(settings.min_rate, settings.max_rate),
        MonthlyLimitRule(claims, settings.monthly_limit),
    ]


class ClaimValidator:
    """Checks one candidate claim against every business rule.

    All rules run (no short-circuit) so the caller gets the complete list of
    violations. Rule failures are returned as values, never raised.
    """

    def __init__(
        self,
        claims: ClaimRepository,
        settings: Optional[ClaimSettings] = None,
        *,
        rules: Optional[Sequence[ClaimRule]] = None,
    ):
        settings = settings or ClaimSettings()
        self._rules = list(rules) if rules is not None else default_rules(claims, settings)

    def validate(self, claim: Claim) -> ValidationResult:
        messages = [msg for msg in (rule.check(claim) for rule in self._rules) if msg]
        if messages:
            logger.warning(
                "Claim for lecturer %s failed validation: %s", claim.lecturer_id, "; ".join(messages)
            )
        return ValidationResult(messages=messages)
