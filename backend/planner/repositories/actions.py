from __future__ import annotations

from datetime import datetime
from typing import Optional
from sqlalchemy import and_, func, or_
from sqlmodel import select

from planner.models.action import Action
from planner.models.enums import CLOSED_STATUSES, STATUS_DONE
from planner.repositories.base import OwnedRepository


class ActionsRepository(OwnedRepository[Action]):
    model = Action

    def list(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Action]:
        """Actions ordered by deadline; undated actions sort last.

        The optional range keeps an action when its due or start date lies on
        the matching side of each bound.
        """
        statement = self._select()
        if start is not None:
            statement = statement.where(or_(Action.due_date >= start, Action.start_date >= start))
        if end is not None:
            statement = statement.where(or_(Action.due_date <= end, Action.start_date <= end))
        if status:
            statement = statement.where(Action.status == status)
        if search:
            statement = statement.where(Action.title.ilike(f"%{search}%"))
        statement = statement.order_by(Action.due_date.is_(None), Action.due_date.asc())
        return list(self.session.exec(statement))

    def list_for_calendar(self, range_start: datetime, range_end: datetime) -> list[Action]:
        """Actions that can appear on a day view between the two instants.

        That is every dated action whose effective interval overlaps the range,
        plus unfinished actions whose effective end lies before it.
        """
        effective_start = func.coalesce(Action.start_date, Action.due_date)
        effective_end = func.coalesce(Action.due_date, Action.start_date)
        statement = self._select().where(
            or_(Action.start_date.is_not(None), Action.due_date.is_not(None)),
            effective_start <= range_end,
            or_(
                effective_end >= range_start,
                and_(effective_end < range_start, Action.status != STATUS_DONE),
            ),
        )
        statement = statement.order_by(effective_start.asc())
        return list(self.session.exec(statement))

    def list_due_between(self, start: datetime, end: datetime) -> list[Action]:
        statement = (
            self._select()
            .where(Action.due_date >= start, Action.due_date <= end)
            .order_by(Action.due_date.asc())
        )
        return list(self.session.exec(statement))

    def list_focus(self) -> list[Action]:
        statement = (
            self._select()
            .where(Action.is_focus.is_(True), Action.status.not_in(CLOSED_STATUSES))
            .order_by(Action.due_date.is_(None), Action.due_date.asc())
        )
        return list(self.session.exec(statement))

    def count_open(self) -> int:
        statement = select(func.count()).select_from(Action).where(
            Action.user_id == self.user_id,
            Action.status.not_in(CLOSED_STATUSES),
        )
        return int(self.session.exec(statement).one())
