"""SQLAlchemy engine and session for the analysis history store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()
SessionLocal = scoped_session(sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False))
_ENGINE: Optional[Engine] = None


def _ensure_sqlite_directory(db_url: str) -> None:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def init_db(app) -> Engine:
    """Bind the history session to DATABASE_URL and create analysis_history if asked."""
    global _ENGINE

    db_url = app.config["DATABASE_URL"]
    kwargs = {"future": True, "pool_pre_ping": True}
    if db_url.startswith("sqlite"):
        _ensure_sqlite_directory(db_url)
        kwargs["connect_args"] = {"check_same_thread": False}

    _ENGINE = create_engine(db_url, **kwargs)
    SessionLocal.configure(bind=_ENGINE)

    from web import models  # noqa: F401 - registers AnalysisHistory

    if app.config.get("AUTO_CREATE_SCHEMA", False):
        Base.metadata.create_all(bind=_ENGINE)
    logger.info("Analysis history store: %s", make_url(db_url).render_as_string(hide_password=True))

    @app.teardown_appcontext
    def remove_session(exception=None):  # pylint: disable=unused-argument
        SessionLocal.remove()

    return _ENGINE
