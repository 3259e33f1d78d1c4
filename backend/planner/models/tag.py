from __future__ import annotations

from typing import Optional
from pydantic import NaiveDatetime
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class Tag(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    name: str  # unique per user by convention only
    color: Optional[str] = None
    created_at: NaiveDatetime = Field(default_factory=utcnow)


class Grid(SQLModel, table=True):
    """A grid area: free-text project label attached to records for grouping."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    created_at: NaiveDatetime = Field(default_factory=utcnow)
