from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_decimal(value: Any, field_name: str, *, places: Optional[int] = None) -> Decimal:
    """Parse a form/JSON value into Decimal without going through float.

    With ``places`` set, values carrying more significant decimal places are
    rejected rather than rounded, so the stored value equals the one used in
    calculations.
    """

    if value is None or (isinstance(value, str) and not value.strip()) or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if places is not None and result.normalize().as_tuple().exponent < -places:
        raise ValidationError(f"{field_name} must have at most {places} decimal places")
    return result
