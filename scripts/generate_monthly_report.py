"""Generate the monthly HR claims report (cron entry point).

Usage: python scripts/generate_monthly_report.py [YYYY-MM]
Without an argument the previous calendar month is reported.
"""

from __future__ import annotations

import importlib
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.claim_system.claim_system.common.datetime_utils import parse_month
from src.claim_system.claim_system.container import build_container
from src.claim_system.claim_system.main import configure_logging


def _previous_month(today: date) -> date:
    return (today.replace(day=1) - timedelta(days=1)).replace(day=1)


def main(argv: list[str]) -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    month = parse_month(argv[0]) if argv else _previous_month(date.today())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        claim_settings=getattr(settings, "CLAIM_SETTINGS", None),
    )
    report = container.reporting_service.generate_monthly_report(month)
    print(f"OK: report {report.report_id} for {month:%Y-%m} -> {report.report_data}")


if __name__ == "__main__":
    main(sys.argv[1:])
