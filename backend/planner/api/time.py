from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from datetime import date, timedelta, tzinfo
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlmodel import Session
import logging

from planner.api.common import require_confirm
from planner.deps import UserContext, get_session, get_tz, get_user
from planner.models.enums import VacationType
from planner.models.time_tracking import OvertimeAdjustment, VacationTransaction, WorkEntry
from planner.repositories.settings import SettingsRepository
from planner.repositories.time_tracking import (
    OvertimeAdjustmentsRepository,
    VacationRepository,
    WorkEntriesRepository,
    get_overtime_balance,
)
from planner.services.dateutils import today, week_dates
from planner.services.time_metrics import (
    DEFAULT_BREAK_MINUTES,
    build_timesheet,
    normalize_vacation_hours,
    vacation_balance,
)
from planner.services.time_report import build_yearly_report

logger = logging.getLogger("planner.api")

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


router = APIRouter(prefix="/time", tags=["time"])


class WorkEntryBody(BaseModel):
    start_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    break_minutes: int = Field(default=DEFAULT_BREAK_MINUTES, ge=0)
    notes: Optional[str] = None


class AdjustmentCreate(BaseModel):
    date: dt.date
    minutes: int
    reason: Optional[str] = None


class VacationCreate(BaseModel):
    date: dt.date
    type: VacationType
    hours: float
    notes: Optional[str] = None


@router.get("/work-entries")
def list_work_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> List[WorkEntry]:
    end = end or today(tz)
    start = start or end - timedelta(days=30)
    return WorkEntriesRepository(session, user.user_id).list_between(start, end)


@router.get("/work-entries/{day}")
def get_work_entry(
    day: date,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Optional[WorkEntry]:
    return WorkEntriesRepository(session, user.user_id).get_by_date(day)


@router.put("/work-entries/{day}")
def upsert_work_entry(
    day: date,
    body: WorkEntryBody,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> WorkEntry:
    entry = WorkEntriesRepository(session, user.user_id).upsert(day, body.model_dump())
    logger.info("Saved work entry for %s", day.isoformat())
    return entry


@router.delete("/work-entries/{entry_id}", dependencies=[Depends(require_confirm)])
def delete_work_entry(
    entry_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    WorkEntriesRepository(session, user.user_id).delete(entry_id)
    return {"ok": True}


@router.get("/timesheet")
def timesheet(
    day: Optional[date] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    """The Monday..Sunday week containing ``day`` with per-day worked hours."""
    week = week_dates(day or today(tz))
    entries = WorkEntriesRepository(session, user.user_id).list_between(week[0], week[-1])
    sheet = build_timesheet(week[0], entries).as_dict()
    sheet["overtime_balance"] = get_overtime_balance(session, user.user_id)
    return sheet


@router.get("/overtime/adjustments")
def list_adjustments(
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> List[OvertimeAdjustment]:
    return OvertimeAdjustmentsRepository(session, user.user_id).list()


@router.post("/overtime/adjustments")
def create_adjustment(
    body: AdjustmentCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> OvertimeAdjustment:
    adjustment = OvertimeAdjustment(**body.model_dump(), user_id=user.user_id)
    return OvertimeAdjustmentsRepository(session, user.user_id).create(adjustment)


@router.delete("/overtime/adjustments/{adjustment_id}", dependencies=[Depends(require_confirm)])
def delete_adjustment(
    adjustment_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    OvertimeAdjustmentsRepository(session, user.user_id).delete(adjustment_id)
    return {"ok": True}


@router.get("/overtime/balance")
def overtime_balance(
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, float]:
    return {"balance_hours": get_overtime_balance(session, user.user_id)}


@router.get("/vacation")
def list_vacation(
    start: Optional[date] = None,
    end: Optional[date] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """Transactions in the range; the balance always covers the whole ledger."""
    repo = VacationRepository(session, user.user_id)
    transactions = repo.list(start=start, end=end)
    balance = vacation_balance(repo.list())
    return {
        "transactions": [t.model_dump() for t in transactions],
        "balance": asdict(balance),
    }


@router.post("/vacation")
def create_vacation(
    body: VacationCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> VacationTransaction:
    values = body.model_dump()
    values["hours"] = normalize_vacation_hours(body.type, body.hours)
    return VacationRepository(session, user.user_id).create(VacationTransaction(**values, user_id=user.user_id))


@router.delete("/vacation/{transaction_id}", dependencies=[Depends(require_confirm)])
def delete_vacation(
    transaction_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    VacationRepository(session, user.user_id).delete(transaction_id)
    return {"ok": True}


@router.get("/report")
def yearly_report(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    """Year-to-date overtime and vacation planning against the contract settings."""
    current = today(tz)
    year = year or current.year
    first, last = date(year, 1, 1), date(year, 12, 31)
    contract = SettingsRepository(session, user.user_id).time_settings()
    report = build_yearly_report(
        year,
        work_entries=WorkEntriesRepository(session, user.user_id).list_between(first, last),
        adjustments=OvertimeAdjustmentsRepository(session, user.user_id).list(start=first, end=last),
        vacation=VacationRepository(session, user.user_id).list(start=first, end=last),
        contract_hours_per_week=contract.contract_hours_per_week,
        vacation_days_per_year=contract.vacation_days_per_year,
        today=current,
    )
    return report.as_dict()
