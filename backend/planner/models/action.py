from __future__ import annotations

from typing import List, Optional
from pydantic import NaiveDatetime
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class Action(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    title: str
    description: Optional[str] = None
    status: str = Field(default="Open", index=True)  # Open|Doing|Waiting|Done|Archived
    priority: str = Field(default="Medium")  # Low|Medium|High
    start_date: Optional[NaiveDatetime] = None
    due_date: Optional[NaiveDatetime] = Field(default=None, index=True)
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    meeting_id: Optional[str] = Field(default=None, index=True)
    is_focus: bool = False
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)
