from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from planner.deps import UserContext, get_session, get_tz, get_user
from planner.repositories.actions import ActionsRepository
from planner.repositories.journal import JournalRepository
from planner.repositories.meetings import MeetingsRepository
from planner.services.dateutils import today


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> Dict[str, Any]:
    day = today(tz)
    actions = ActionsRepository(session, user.user_id)
    return {
        "date": day.isoformat(),
        "open_actions": actions.count_open(),
        "focus_actions": [a.model_dump() for a in actions.list_focus()],
        "meetings_today": [m.model_dump() for m in MeetingsRepository(session, user.user_id).list_for_day(day)],
        "has_journal_entry": JournalRepository(session, user.user_id).get_by_date(day) is not None,
    }
