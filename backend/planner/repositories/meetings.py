from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from sqlalchemy import or_

from planner.models.meeting import Meeting
from planner.repositories.base import OwnedRepository, filter_by_tag
from planner.services.dateutils import day_bounds, now_local


class MeetingsRepository(OwnedRepository[Meeting]):
    model = Meeting

    def list(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        scope: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Meeting]:
        """Meetings newest first.

        ``scope`` is ``upcoming`` (now and later) or ``history`` (strictly past).
        """
        statement = self._select()
        if start is not None:
            statement = statement.where(Meeting.date_time >= start)
        if end is not None:
            statement = statement.where(Meeting.date_time <= end)
        if search:
            pattern = f"%{search}%"
            statement = statement.where(
                or_(Meeting.title.ilike(pattern), Meeting.participants.ilike(pattern))
            )
        if scope in ("upcoming", "history"):
            now = now or now_local()
            if scope == "upcoming":
                statement = statement.where(Meeting.date_time >= now)
            else:
                statement = statement.where(Meeting.date_time < now)
        statement = statement.order_by(Meeting.date_time.desc())
        return filter_by_tag(self.session.exec(statement), tag)

    def list_between(self, start: datetime, end: datetime) -> list[Meeting]:
        statement = (
            self._select()
            .where(Meeting.date_time >= start, Meeting.date_time <= end)
            .order_by(Meeting.date_time.asc())
        )
        return list(self.session.exec(statement))

    def list_for_day(self, day: date) -> list[Meeting]:
        return self.list_between(*day_bounds(day))
