from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional
from sqlalchemy import Integer, case, cast, func
from sqlmodel import Session, select

from planner.models.time_tracking import OvertimeAdjustment, VacationTransaction, WorkEntry
from planner.repositories.base import OwnedRepository, maybe_single
from planner.services.time_metrics import STANDARD_WORKDAY_HOURS


class WorkEntriesRepository(OwnedRepository[WorkEntry]):
    model = WorkEntry

    def list_between(self, start: date, end: date) -> list[WorkEntry]:
        statement = (
            self._select()
            .where(WorkEntry.date >= start, WorkEntry.date <= end)
            .order_by(WorkEntry.date.asc())
        )
        return list(self.session.exec(statement))

    def get_by_date(self, day: date) -> Optional[WorkEntry]:
        return maybe_single(self.session, self._select().where(WorkEntry.date == day))

    def upsert(self, day: date, values: Dict[str, Any]) -> WorkEntry:
        return self._upsert_on_date({**values, "date": day})


class OvertimeAdjustmentsRepository(OwnedRepository[OvertimeAdjustment]):
    model = OvertimeAdjustment

    def list(self, start: Optional[date] = None, end: Optional[date] = None) -> list[OvertimeAdjustment]:
        statement = self._select()
        if start is not None:
            statement = statement.where(OvertimeAdjustment.date >= start)
        if end is not None:
            statement = statement.where(OvertimeAdjustment.date <= end)
        statement = statement.order_by(OvertimeAdjustment.date.desc())
        return list(self.session.exec(statement))


class VacationRepository(OwnedRepository[VacationTransaction]):
    model = VacationTransaction

    def list(self, start: Optional[date] = None, end: Optional[date] = None) -> list[VacationTransaction]:
        statement = self._select()
        if start is not None:
            statement = statement.where(VacationTransaction.date >= start)
        if end is not None:
            statement = statement.where(VacationTransaction.date <= end)
        statement = statement.order_by(VacationTransaction.date.desc())
        return list(self.session.exec(statement))


def _minutes_of_day(column):
    # "HH:MM" -> minutes since midnight, evaluated by the database
    return cast(func.substr(column, 1, 2), Integer) * 60 + cast(func.substr(column, 4, 2), Integer)


def get_overtime_balance(session: Session, user_id: str) -> float:
    """Running overtime balance in hours, aggregated by the store.

    Every work entry with both a start and an end time contributes its worked
    minutes (never below zero) minus the standard day; manual adjustments are
    added on top. This is the authoritative figure; views display it as is.
    """
    worked = (
        _minutes_of_day(WorkEntry.end_time)
        - _minutes_of_day(WorkEntry.start_time)
        - func.coalesce(WorkEntry.break_minutes, 0)
    )
    overtime_minutes = case((worked > 0, worked), else_=0) - STANDARD_WORKDAY_HOURS * 60
    entry_minutes = session.exec(
        select(func.coalesce(func.sum(overtime_minutes), 0)).where(
            WorkEntry.user_id == user_id,
            WorkEntry.start_time.is_not(None),
            WorkEntry.end_time.is_not(None),
        )
    ).one()
    adjustment_minutes = session.exec(
        select(func.coalesce(func.sum(OvertimeAdjustment.minutes), 0)).where(
            OvertimeAdjustment.user_id == user_id
        )
    ).one()
    return (int(entry_minutes) + int(adjustment_minutes)) / 60
