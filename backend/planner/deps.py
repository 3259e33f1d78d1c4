from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterator, Optional

from fastapi import Depends, Header
from sqlmodel import Session

from planner.config import Settings, get_settings
from planner.models.base import engine


@dataclass(frozen=True)
class UserContext:
    """The authenticated user a request acts for; every query is scoped to it."""

    user_id: str


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session


def get_user(
    x_user_id: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> UserContext:
    user_id = (x_user_id or "").strip() or settings.default_user_id
    return UserContext(user_id=user_id)


def get_tz(settings: Settings = Depends(get_settings)) -> Optional[tzinfo]:
    return settings.tzinfo
