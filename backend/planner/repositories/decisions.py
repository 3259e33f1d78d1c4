from __future__ import annotations

from planner.models.decision import Decision
from planner.repositories.base import OwnedRepository


class DecisionsRepository(OwnedRepository[Decision]):
    model = Decision

    def list_by_meeting(self, meeting_id: str) -> list[Decision]:
        statement = (
            self._select()
            .where(Decision.meeting_id == meeting_id)
            .order_by(Decision.created_at.asc())
        )
        return list(self.session.exec(statement))
