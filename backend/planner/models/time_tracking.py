from __future__ import annotations

import datetime as dt
from typing import Optional
from pydantic import NaiveDatetime
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from planner.models.base import new_id, utcnow


class WorkEntry(SQLModel, table=True):
    __tablename__ = "work_entry"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_work_entry_user_date"),)

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    date: dt.date = Field(index=True)
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None  # HH:MM
    break_minutes: int = 0
    notes: Optional[str] = None
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)


class OvertimeAdjustment(SQLModel, table=True):
    __tablename__ = "overtime_adjustment"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    date: dt.date = Field(index=True)
    minutes: int  # signed
    reason: Optional[str] = None
    created_at: NaiveDatetime = Field(default_factory=utcnow)


class VacationTransaction(SQLModel, table=True):
    __tablename__ = "vacation_transaction"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    date: dt.date = Field(index=True)
    type: str  # Grant|Purchase|Usage|Adjustment
    hours: float  # signed; usage is stored negative
    notes: Optional[str] = None
    created_at: NaiveDatetime = Field(default_factory=utcnow)
