"""Example: use the service layer without Flask.

Prints today's per-code summary and the registration dashboard.
"""

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.parcel_intake.parcel_intake.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    summary = container.summary_service.daily_summary(date.today())
    for row in summary.rows:
        print(f"{row.code}: {row.total}")
    print(f"Total: {summary.total_day}")
    print(container.registration_service.dashboard().as_dict())


if __name__ == "__main__":
    main()
