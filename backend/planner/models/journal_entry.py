from __future__ import annotations

import datetime as dt
from typing import List, Optional
from pydantic import NaiveDatetime
from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class JournalEntry(SQLModel, table=True):
    __tablename__ = "journal_entry"
    # one entry per user per day; upserts target this constraint
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_journal_entry_user_date"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    date: dt.date = Field(index=True)
    content: Optional[str] = None
    linked_meeting_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    linked_action_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    linked_knowledge_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)
