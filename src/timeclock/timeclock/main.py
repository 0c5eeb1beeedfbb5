from __future__ import annotations

import importlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .hour_bank.controller import register as register_hour_bank
from .punches.controller import register as register_punches
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logging.getLogger().addHandler(file_handler)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_data(db_config)
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        storage_dir=getattr(settings, "SELFIE_STORAGE_DIR", "storage"),
        selfie_bucket=getattr(settings, "SELFIE_BUCKET", "selfies"),
        reconcile_max_attempts=int(getattr(settings, "RECONCILE_MAX_ATTEMPTS", 3)),
        reconcile_backoff_seconds=float(getattr(settings, "RECONCILE_BACKOFF_SECONDS", 0.5)),
        reconcile_workers=int(getattr(settings, "RECONCILE_WORKERS", 0)),
    )
    app.extensions["timeclock"] = container

    register_punches(app, container)
    register_timesheets(app, container)
    register_hour_bank(app, container)

    return app
