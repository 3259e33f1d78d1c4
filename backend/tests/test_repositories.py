"""Repository queries against an in-memory store."""

from datetime import date, datetime

import pytest

from planner.models.action import Action
from planner.models.meeting import Meeting
from planner.models.setting import Setting
from planner.models.time_tracking import OvertimeAdjustment, WorkEntry
from planner.repositories.actions import ActionsRepository
from planner.repositories.base import RecordNotFound
from planner.repositories.journal import JournalRepository
from planner.repositories.meetings import MeetingsRepository
from planner.repositories.settings import APP_SETTINGS_KEY, SettingsRepository
from planner.repositories.time_tracking import WorkEntriesRepository, get_overtime_balance
from planner.services.dateutils import day_bounds
from planner.services.journal_export import render_journal_markdown


class TestActionsForCalendar:
    def test_overlap_and_carry_forward(self, session):
        repo = ActionsRepository(session, "u")
        for title, start, due, status in [
            ("overlaps", datetime(2024, 5, 5, 9), datetime(2024, 5, 6, 9), "Open"),
            ("start only", datetime(2024, 5, 6, 14), None, "Open"),
            ("overdue", None, datetime(2024, 4, 20, 9), "Waiting"),
            ("done long ago", None, datetime(2024, 4, 20, 9), "Done"),
            ("future", None, datetime(2024, 5, 9, 9), "Open"),
            ("undated", None, None, "Open"),
        ]:
            repo.create(Action(user_id="u", title=title, start_date=start, due_date=due, status=status))
        foreign = ActionsRepository(session, "other")
        foreign.create(Action(user_id="other", title="foreign", due_date=datetime(2024, 5, 6, 9)))

        start, end = day_bounds(date(2024, 5, 6))
        titles = {a.title for a in repo.list_for_calendar(start, end)}
        assert titles == {"overlaps", "start only", "overdue"}

    def test_focus_and_open_count(self, session):
        repo = ActionsRepository(session, "u")
        repo.create(Action(user_id="u", title="focus", is_focus=True))
        repo.create(Action(user_id="u", title="focus but done", is_focus=True, status="Done"))
        repo.create(Action(user_id="u", title="archived", status="Archived"))
        assert [a.title for a in repo.list_focus()] == ["focus"]
        assert repo.count_open() == 1

    def test_missing_record_raises(self, session):
        with pytest.raises(RecordNotFound):
            ActionsRepository(session, "u").get_single("nope")
        assert ActionsRepository(session, "u").get("nope") is None


class TestUpsertOnDate:
    def test_work_entry_upsert_is_keyed_by_user_and_date(self, session):
        alice = WorkEntriesRepository(session, "alice")
        first = alice.upsert(date(2024, 5, 6), {"start_time": "08:00", "end_time": "16:00", "break_minutes": 30})
        second = alice.upsert(date(2024, 5, 6), {"start_time": "09:00", "end_time": "16:00", "break_minutes": 30})
        assert first.id == second.id
        assert second.start_time == "09:00"

        bob = WorkEntriesRepository(session, "bob").upsert(date(2024, 5, 6), {"start_time": "07:00"})
        assert bob.id != first.id
        assert alice.get_by_date(date(2024, 5, 6)).start_time == "09:00"

    def test_journal_upsert_preserves_created_at(self, session):
        repo = JournalRepository(session, "u")
        first = repo.upsert(date(2024, 5, 6), {"content": "a"})
        created_at = first.created_at
        second = repo.upsert(date(2024, 5, 6), {"content": "b"})
        assert second.created_at == created_at
        assert second.created_at.tzinfo is None
        assert second.content == "b"

    def test_work_entry_upsert_touches_updated_at(self, session):
        repo = WorkEntriesRepository(session, "u")
        first = repo.upsert(date(2024, 5, 6), {"start_time": "08:00"})
        created_at, updated_at = first.created_at, first.updated_at
        second = repo.upsert(date(2024, 5, 6), {"start_time": "08:00", "end_time": "16:00"})
        assert second.created_at == created_at
        assert second.updated_at >= updated_at
        assert second.updated_at.tzinfo is None


class TestNaiveTimestamps:
    def test_local_wall_clock_round_trips_unchanged(self, session):
        when = datetime(2024, 5, 6, 10, 30)
        created = MeetingsRepository(session, "u").create(Meeting(user_id="u", title="Standup", date_time=when))
        session.expire_all()

        stored = MeetingsRepository(session, "u").get_single(created.id)
        assert stored.date_time == when
        assert stored.date_time.tzinfo is None
        assert stored.created_at.tzinfo is None

    def test_range_filter_on_naive_bounds(self, session):
        repo = ActionsRepository(session, "u")
        repo.create(Action(user_id="u", title="due", due_date=datetime(2024, 5, 6, 23, 30)))
        start, end = day_bounds(date(2024, 5, 6))
        assert [a.title for a in repo.list_due_between(start, end)] == ["due"]


class TestOvertimeBalance:
    def test_sums_complete_entries_and_adjustments(self, session):
        session.add(WorkEntry(user_id="u", date=date(2024, 5, 6), start_time="08:00", end_time="18:00", break_minutes=30))
        session.add(WorkEntry(user_id="u", date=date(2024, 5, 7), start_time="08:00", end_time="14:00", break_minutes=0))
        session.add(WorkEntry(user_id="u", date=date(2024, 5, 8), start_time="08:00"))
        session.add(OvertimeAdjustment(user_id="u", date=date(2024, 5, 8), minutes=-90))
        session.add(WorkEntry(user_id="other", date=date(2024, 5, 6), start_time="08:00", end_time="20:00"))
        session.commit()
        # 1.5 - 2 - 1.5
        assert get_overtime_balance(session, "u") == -2.0

    def test_empty_ledger(self, session):
        assert get_overtime_balance(session, "u") == 0

    def test_inverted_entry_counts_as_zero_worked(self, session):
        session.add(WorkEntry(user_id="u", date=date(2024, 5, 6), start_time="17:00", end_time="09:00"))
        session.add(WorkEntry(user_id="u", date=date(2024, 5, 7), start_time="07:45", end_time="16:15", break_minutes=0))
        session.commit()
        # -8 + 0.5
        assert get_overtime_balance(session, "u") == -7.5


class TestSettingsRepository:
    def test_defaults_without_a_stored_row(self, session):
        loaded = SettingsRepository(session, "u").load()
        assert loaded.theme == "system"
        assert loaded.time.contract_hours_per_week == 40
        assert loaded.time.vacation_days_per_year == 25

    def test_save_merges_with_stored_values(self, session):
        repo = SettingsRepository(session, "u")
        repo.save({"time": {"contract_hours_per_week": 32}})
        saved = repo.save({"theme": "light", "time": {"vacation_days_per_year": 28}})
        assert saved.time.contract_hours_per_week == 32
        assert saved.time.vacation_days_per_year == 28
        assert repo.load().theme == "light"
        assert repo.time_settings().hours_per_day == 6.4

    def test_settings_are_per_user(self, session):
        SettingsRepository(session, "alice").save({"theme": "dark"})
        assert SettingsRepository(session, "bob").load().theme == "system"

    def test_invalid_stored_document_falls_back_to_defaults(self, session):
        session.add(Setting(user_id="u", key=APP_SETTINGS_KEY, value_json='{"theme": "neon"}'))
        session.commit()
        repo = SettingsRepository(session, "u")
        assert repo.load().theme == "system"

        repo.save({"theme": "dark"})
        assert repo.load().theme == "dark"


class TestJournalExport:
    def test_empty_period(self):
        text = render_journal_markdown([], date(2024, 5, 1), date(2024, 5, 31))
        assert "_No entries in this period._" in text

    def test_entries_newest_first(self, session):
        repo = JournalRepository(session, "u")
        repo.upsert(date(2024, 5, 1), {"content": "first", "tags": ["calm"]})
        repo.upsert(date(2024, 5, 3), {"content": "", "linked_action_ids": ["a1"]})
        text = render_journal_markdown(repo.list(), date(2024, 5, 1), date(2024, 5, 31), titles={"a1": "Call Ben"})
        assert text.index("## 2024-05-03") < text.index("## 2024-05-01")
        assert "_(empty)_" in text
        assert "- **Actions:** Call Ben" in text
        assert "- **Tags:** calm" in text
