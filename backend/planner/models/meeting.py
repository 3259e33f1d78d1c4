from __future__ import annotations

from typing import List, Optional
from pydantic import NaiveDatetime
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class Meeting(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    title: str = Field(default="Untitled Meeting")
    date_time: NaiveDatetime = Field(index=True)
    location: Optional[str] = None
    participants: Optional[str] = None
    notes: Optional[str] = None
    decisions: Optional[str] = None
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)
