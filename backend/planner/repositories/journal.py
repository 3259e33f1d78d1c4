from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from planner.models.journal_entry import JournalEntry
from planner.repositories.base import OwnedRepository, filter_by_tag, maybe_single


class JournalRepository(OwnedRepository[JournalEntry]):
    model = JournalEntry

    def list(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[JournalEntry]:
        statement = self._select()
        if start is not None:
            statement = statement.where(JournalEntry.date >= start)
        if end is not None:
            statement = statement.where(JournalEntry.date <= end)
        if search:
            statement = statement.where(JournalEntry.content.ilike(f"%{search}%"))
        statement = statement.order_by(JournalEntry.date.desc())
        return filter_by_tag(self.session.exec(statement), tag)

    def get_by_date(self, day: date) -> Optional[JournalEntry]:
        # absent row is a normal outcome here, not an error
        return maybe_single(self.session, self._select().where(JournalEntry.date == day))

    def upsert(self, day: date, values: Dict[str, Any]) -> JournalEntry:
        return self._upsert_on_date({**values, "date": day})

    def list_linking(self, meeting_id: Optional[str] = None, action_id: Optional[str] = None) -> list[JournalEntry]:
        """Entries that reference the given meeting or action (checked in Python; links live in JSON)."""
        entries = self.list()
        result: list[JournalEntry] = []
        for entry in entries:
            if meeting_id and meeting_id in (entry.linked_meeting_ids or []):
                result.append(entry)
            elif action_id and action_id in (entry.linked_action_ids or []):
                result.append(entry)
        return result
