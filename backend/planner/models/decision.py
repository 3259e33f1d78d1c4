from __future__ import annotations

from typing import Optional
from pydantic import NaiveDatetime
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class Decision(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    meeting_id: Optional[str] = Field(default=None, index=True)
    description: str
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)
