from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from planner.deps import UserContext, get_session, get_user
from planner.models.enums import Theme
from planner.repositories.settings import SettingsRepository


router = APIRouter(prefix="/settings", tags=["settings"])


class TimeSettingsUpdate(BaseModel):
    contract_hours_per_week: Optional[float] = Field(default=None, ge=0, le=168)
    vacation_days_per_year: Optional[float] = Field(default=None, ge=0, le=366)


class SettingsUpdate(BaseModel):
    theme: Optional[Theme] = None
    time: Optional[TimeSettingsUpdate] = None


@router.get("")
def read_settings(
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    return SettingsRepository(session, user.user_id).load().to_dict()


@router.post("")
def update_settings(
    body: SettingsUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    # Accept partial update; omitted fields keep their stored value
    patch = body.model_dump(exclude_none=True)
    return SettingsRepository(session, user.user_id).save(patch).to_dict()
