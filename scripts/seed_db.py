from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.parcel_intake.parcel_intake.database.bootstrap import apply_seed_sql, ensure_demo_user
from src.parcel_intake.parcel_intake.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_user(
        db_config,
        email=getattr(settings, "DEMO_USER_EMAIL", "demo@example.com"),
        password=getattr(settings, "DEMO_USER_PASSWORD", "demo1234"),
    )

    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
