from __future__ import annotations

from datetime import date, tzinfo
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from planner.deps import UserContext, get_session, get_tz, get_user
from planner.repositories.actions import ActionsRepository
from planner.repositories.meetings import MeetingsRepository
from planner.repositories.tags import TagsRepository
from planner.repositories.time_tracking import VacationRepository, WorkEntriesRepository
from planner.services.dateutils import day_bounds, today, week_dates
from planner.services.day_view import build_day_view
from planner.services.month_view import build_month_view, month_grid_dates


router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/day")
def day_view(
    day: Optional[date] = Query(default=None, alias="date"),
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    """Hour grid for one local day: placed meetings and actions plus the work band."""
    day = day or today(tz)
    start, end = day_bounds(day)
    view = build_day_view(
        day,
        meetings=MeetingsRepository(session, user.user_id).list_between(start, end),
        actions=ActionsRepository(session, user.user_id).list_for_calendar(start, end),
        work_entries=WorkEntriesRepository(session, user.user_id).list_between(day, day),
        vacation=VacationRepository(session, user.user_id).list(start=day, end=day),
        tag_colors=TagsRepository(session, user.user_id).color_map(),
        tz=tz,
    )
    return view.as_dict()


@router.get("/week")
def week_view(
    day: Optional[date] = Query(default=None, alias="date"),
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    """Seven day grids, Monday through Sunday, for the week containing ``date``."""
    week = week_dates(day or today(tz))
    start, _ = day_bounds(week[0])
    _, end = day_bounds(week[-1])
    meetings = MeetingsRepository(session, user.user_id).list_between(start, end)
    actions = ActionsRepository(session, user.user_id).list_for_calendar(start, end)
    work_entries = WorkEntriesRepository(session, user.user_id).list_between(week[0], week[-1])
    vacation = VacationRepository(session, user.user_id).list(start=week[0], end=week[-1])
    colors = TagsRepository(session, user.user_id).color_map()
    return {
        "start": week[0].isoformat(),
        "end": week[-1].isoformat(),
        "days": [
            build_day_view(d, meetings, actions, work_entries, vacation, tag_colors=colors, tz=tz).as_dict()
            for d in week
        ],
    }


@router.get("/month")
def month_view(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    current = today(tz)
    year = year or current.year
    month = month or current.month

    dates = month_grid_dates(year, month)
    first, last = dates[0], dates[-1]
    range_start, _ = day_bounds(first)
    _, range_end = day_bounds(last)
    view = build_month_view(
        year,
        month,
        meetings=MeetingsRepository(session, user.user_id).list_between(range_start, range_end),
        actions=ActionsRepository(session, user.user_id).list_due_between(range_start, range_end),
        work_entries=WorkEntriesRepository(session, user.user_id).list_between(first, last),
        vacation=VacationRepository(session, user.user_id).list(start=first, end=last),
        today=current,
        tz=tz,
    )
    return view.as_dict()
