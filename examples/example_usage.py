"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the claim rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.claim_system.claim_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, claim_settings=settings.CLAIM_SETTINGS)
    print(container.reporting_service.summarize_month(date.today()).to_payload())
    print(container.claim_service.lecturer_dashboard(lecturer_id="LEC-001"))


if __name__ == "__main__":
    main()
