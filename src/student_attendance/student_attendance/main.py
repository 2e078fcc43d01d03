from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .app_logger import get_logger, setup_logging
from .attendance.controller import register as register_attendance
from .batches.controller import register as register_batches
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.enums import StoreBackend
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .reports.controller import register as register_reports
from .students.controller import register as register_students

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SYSTEM_NAME"] = getattr(settings, "SYSTEM_NAME")

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    log = get_logger("main")

    backend = str(getattr(settings, "STORE_BACKEND", StoreBackend.MYSQL.value)).lower()
    db_config = dict(getattr(settings, "DB_CONFIG", {}) or {})

    if container is None and backend == StoreBackend.MYSQL.value:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            log.info("demo seed ready")

    if container is None:
        container = build_container(
            backend=backend,
            db_config=db_config,
            memory_seed=bool(getattr(settings, "MEMORY_SEED", False)),
            system_name=getattr(settings, "SYSTEM_NAME"),
            system_short_name=getattr(settings, "SYSTEM_SHORT_NAME"),
        )

    log.info(
        "settings=%s backend=%s target=%s",
        settings_module,
        container.backend.value,
        container.dashboard_service.target,
    )
    app.extensions["student_attendance"] = container

    register_error_handlers(app)
    register_dashboard(app, container)
    register_students(app, container)
    register_batches(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
