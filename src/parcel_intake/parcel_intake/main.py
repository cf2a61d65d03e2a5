from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import format_time
from .common.log_config import configure_logging
from .container import AppSettings, Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_user, list_tables
from .database.connection import DBConfig
from .history.controller import register as register_history
from .logs.controller import register as register_logs
from .summary.controller import register as register_summary
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_user(
            db_config,
            email=getattr(settings, "DEMO_USER_EMAIL", "demo@example.com"),
            password=getattr(settings, "DEMO_USER_PASSWORD", "demo1234"),
        )
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.add_template_filter(format_time, "hhmmss")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config, settings=AppSettings.from_module(settings))

    register_users(app, container)
    register_logs(app, container)
    register_history(app, container)
    register_summary(app, container)

    return app
