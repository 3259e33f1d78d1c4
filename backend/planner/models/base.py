from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
from planner.config import get_settings

_settings = get_settings()


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine: Engine = create_engine(
    _settings.sqlalchemy_url, connect_args=_connect_args(_settings.sqlalchemy_url)
)


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    # stored naive; the column is always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def init_db(bind: Engine | None = None) -> None:
    bind = bind or engine
    if bind.dialect.name == "sqlite" and str(bind.url) != "sqlite://":
        # Enable WAL
        with bind.begin() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
            conn.exec_driver_sql("PRAGMA synchronous=NORMAL;")
    # register every table before create_all
    from planner.models import (  # noqa: F401
        action,
        decision,
        journal_entry,
        knowledge_page,
        meeting,
        setting,
        tag,
        time_tracking,
    )

    SQLModel.metadata.create_all(bind)
