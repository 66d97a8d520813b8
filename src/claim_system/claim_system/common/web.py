from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidStateError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    """Make dataclasses/Decimals/datetimes/enums safe for ``jsonify``."""

    if is_dataclass(value) and not isinstance(value, type):
        return {k: to_json(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {str(to_json(k)): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    if isinstance(e, AuthenticationError):
        return error_response(str(e), 401)
    if isinstance(e, AuthorizationError):
        return error_response(str(e), 403)
    if isinstance(e, InvalidStateError):
        return error_response(str(e), 409)
    if isinstance(e, ValidationError):
        return error_response(str(e), 400)
    return error_response(str(e), 400)


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue", 401)
            if session.get("role") not in allowed:
                logger.warning("Access denied for user %s at %s", session.get("user_id"), view.__name__)
                return error_response("Access denied", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
