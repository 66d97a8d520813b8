from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from . import constants


@dataclass(frozen=True)
class ClaimSettings:
    """Thresholds used by the claim rule engine.

    Built once at startup from the ``CLAIM_SETTINGS`` mapping of the active
    settings module and passed into the engines' constructors.
    """

    maximum_amount: Decimal = constants.DEFAULT_MAXIMUM_AMOUNT
    monthly_limit: Decimal = constants.DEFAULT_MONTHLY_LIMIT

    min_hours: Decimal = constants.DEFAULT_MIN_HOURS
    max_hours: Decimal = constants.DEFAULT_MAX_HOURS
    min_rate: Decimal = constants.DEFAULT_MIN_RATE
    max_rate: Decimal = constants.DEFAULT_MAX_RATE

    approval_max_hours: Decimal = constants.DEFAULT_APPROVAL_MAX_HOURS
    approval_max_rate: Decimal = constants.DEFAULT_APPROVAL_MAX_RATE
    approval_max_amount: Decimal = constants.DEFAULT_APPROVAL_MAX_AMOUNT
    auto_approval_ceiling: Decimal = constants.DEFAULT_AUTO_APPROVAL_CEILING

    # Off: a contract is valid when the lecturer record exists.
    enforce_contract_dates: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "ClaimSettings":
        """Build settings from a plain mapping, ignoring unknown or empty keys."""

        values = values or {}
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            raw = values.get(f.name)
            if raw is None or raw == "":
                continue
            if f.name == "enforce_contract_dates":
                kwargs[f.name] = _to_bool(raw)
            else:
                kwargs[f.name] = _to_decimal(raw, f.name)
        return cls(**kwargs)


def _to_decimal(value: Any, name: str) -> Decimal:
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid decimal for claim setting {name}: {value!r}")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
