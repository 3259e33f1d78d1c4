"""Day view membership, overdue handling and grid placement."""

from datetime import date, datetime

from planner.models.action import Action
from planner.models.meeting import Meeting
from planner.models.time_tracking import VacationTransaction, WorkEntry
from planner.services.day_view import (
    build_day_view,
    is_action_on_day,
    is_overdue,
    place_action,
    work_overlay,
)

DAY = date(2024, 5, 6)


def make_action(start=None, due=None, status="Open", **kwargs):
    return Action(user_id="u", title=kwargs.pop("title", "task"), start_date=start, due_date=due, status=status, **kwargs)


class TestOverdue:
    def test_open_action_due_yesterday_is_overdue(self):
        action = make_action(due=datetime(2024, 5, 5, 10, 0))
        assert is_overdue(action, DAY)
        assert is_action_on_day(action, DAY)
        placement = place_action(action, DAY)
        assert placement.to_css() == {"top": "0px", "height": "32px", "is_overdue": True}

    def test_done_action_is_not_carried_forward(self):
        action = make_action(due=datetime(2024, 5, 5, 10, 0), status="Done")
        assert not is_overdue(action, DAY)
        assert not is_action_on_day(action, DAY)

    def test_early_morning_due_on_the_day_is_not_overdue(self):
        action = make_action(due=datetime(2024, 5, 6, 0, 30))
        assert not is_overdue(action, DAY)
        assert is_action_on_day(action, DAY)

    def test_undated_action_is_never_shown(self):
        action = make_action()
        assert not is_action_on_day(action, DAY)
        assert place_action(action, DAY) is None


class TestPlacement:
    def test_middle_day_of_span_fills_the_grid(self):
        action = make_action(start=datetime(2024, 5, 5, 10, 0), due=datetime(2024, 5, 7, 12, 0))
        placement = place_action(action, DAY)
        assert placement.top == 0
        assert placement.height == 960
        assert not placement.is_overdue

    def test_end_is_clamped_to_grid_end(self):
        action = make_action(start=datetime(2024, 5, 6, 20, 0), due=datetime(2024, 5, 6, 23, 0))
        placement = place_action(action, DAY)
        assert placement.top == 896
        assert placement.height == 64

    def test_short_actions_get_minimum_height(self):
        action = make_action(start=datetime(2024, 5, 6, 8, 0), due=datetime(2024, 5, 6, 8, 10))
        placement = place_action(action, DAY)
        assert placement.top == 128
        assert placement.height == 24

    def test_point_in_time_action_has_no_placement(self):
        action = make_action(due=datetime(2024, 5, 6, 9, 0))
        assert is_action_on_day(action, DAY)
        assert place_action(action, DAY) is None

    def test_action_ending_before_grid_start_has_no_placement(self):
        action = make_action(start=datetime(2024, 5, 5, 22, 0), due=datetime(2024, 5, 6, 3, 0))
        assert is_action_on_day(action, DAY)
        assert place_action(action, DAY) is None


class TestWorkOverlay:
    def test_band_from_start_to_end(self):
        band = work_overlay(WorkEntry(user_id="u", date=DAY, start_time="08:00", end_time="16:30"))
        assert band.top == 128
        assert band.height == 544

    def test_band_before_grid_is_not_clamped(self):
        band = work_overlay(WorkEntry(user_id="u", date=DAY, start_time="05:00", end_time="07:00"))
        assert band.top == -64
        assert band.height == 128

    def test_incomplete_or_inverted_entries_have_no_band(self):
        assert work_overlay(WorkEntry(user_id="u", date=DAY, start_time="08:00")) is None
        assert work_overlay(WorkEntry(user_id="u", date=DAY, start_time="17:00", end_time="09:00")) is None
        assert work_overlay(None) is None


class TestBuildDayView:
    def test_partitions_records_for_the_day(self):
        meetings = [
            Meeting(user_id="u", title="standup", date_time=datetime(2024, 5, 6, 10, 0), tags=["work"]),
            Meeting(user_id="u", title="early call", date_time=datetime(2024, 5, 6, 5, 0)),
            Meeting(user_id="u", title="tomorrow", date_time=datetime(2024, 5, 7, 10, 0)),
        ]
        actions = [
            make_action(title="span", start=datetime(2024, 5, 5, 10, 0), due=datetime(2024, 5, 7, 12, 0)),
            make_action(title="late", due=datetime(2024, 5, 1, 9, 0)),
            make_action(title="deadline", due=datetime(2024, 5, 6, 9, 0)),
            make_action(title="finished", due=datetime(2024, 5, 1, 9, 0), status="Done"),
        ]
        work = [WorkEntry(user_id="u", date=DAY, start_time="08:00", end_time="16:00")]
        vacation = [
            VacationTransaction(user_id="u", date=DAY, type="Usage", hours=-8),
            VacationTransaction(user_id="u", date=date(2024, 5, 7), type="Usage", hours=-8),
        ]

        view = build_day_view(DAY, meetings, actions, work, vacation, tag_colors={"work": "#336699"})

        assert [m.meeting.title for m in view.meetings] == ["standup"]
        assert view.meetings[0].position.to_css() == {"top": "256px", "height": "64px"}
        assert view.meetings[0].color == "#336699"
        assert view.meetings[0].time_label == "10:00"
        assert [m.title for m in view.meetings_outside_grid] == ["early call"]

        placed = {a.action.title: a for a in view.actions}
        assert set(placed) == {"span", "late"}
        assert placed["late"].placement.is_overdue
        assert [a.title for a in view.actions_outside_grid] == ["deadline"]

        assert view.work_band.to_css() == {"top": "128px", "height": "512px"}
        assert len(view.vacation) == 1

    def test_as_dict_shape(self):
        view = build_day_view(DAY, [], [], [], [])
        data = view.as_dict()
        assert data["date"] == "2024-05-06"
        assert data["hours"][0] == 6 and data["hours"][-1] == 20
        assert data["work_entry"] is None
        assert data["work_band"] is None
