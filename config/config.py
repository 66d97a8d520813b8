"""Shared settings read from the environment.

Environment modules (development/testing/production) import from here and
override only what differs.
"""

import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "cmcs-dev-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "cmcs_db")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))


def db_config_from_env(default_database: str = Config.DB_NAME) -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": os.environ.get("DB_NAME", default_database),
    }


def claim_settings_from_env() -> dict:
    """Claim rule thresholds; unset variables fall back to ClaimSettings defaults."""

    return {
        "maximum_amount": os.environ.get("CLAIM_MAXIMUM_AMOUNT"),
        "monthly_limit": os.environ.get("CLAIM_MONTHLY_LIMIT"),
        "min_hours": os.environ.get("CLAIM_MIN_HOURS"),
        "max_hours": os.environ.get("CLAIM_MAX_HOURS"),
        "min_rate": os.environ.get("CLAIM_MIN_RATE"),
        "max_rate": os.environ.get("CLAIM_MAX_RATE"),
        "approval_max_hours": os.environ.get("CLAIM_APPROVAL_MAX_HOURS"),
        "approval_max_rate": os.environ.get("CLAIM_APPROVAL_MAX_RATE"),
        "approval_max_amount": os.environ.get("CLAIM_APPROVAL_MAX_AMOUNT"),
        "auto_approval_ceiling": os.environ.get("CLAIM_AUTO_APPROVAL_CEILING"),
        "enforce_contract_dates": os.environ.get("CLAIM_ENFORCE_CONTRACT_DATES"),
    }
