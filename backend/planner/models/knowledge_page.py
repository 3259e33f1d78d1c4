from __future__ import annotations

from typing import List, Optional
from pydantic import NaiveDatetime
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class KnowledgePage(SQLModel, table=True):
    __tablename__ = "knowledge_page"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    title: str
    content: Optional[str] = None
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    is_pinned: bool = False
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow, index=True)
