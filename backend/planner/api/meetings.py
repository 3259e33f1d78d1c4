from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session
import logging

from planner.api.common import LocalDateTime, model_patch, require_confirm
from planner.deps import UserContext, get_session, get_tz, get_user
from planner.models.meeting import Meeting
from planner.repositories.actions import ActionsRepository
from planner.repositories.decisions import DecisionsRepository
from planner.repositories.journal import JournalRepository
from planner.repositories.meetings import MeetingsRepository
from planner.services.dateutils import now_local

logger = logging.getLogger("planner.api")


router = APIRouter(prefix="/meetings", tags=["meetings"])


class MeetingCreate(BaseModel):
    title: str = "Untitled Meeting"
    date_time: LocalDateTime
    location: Optional[str] = None
    participants: Optional[str] = None
    notes: Optional[str] = None
    decisions: Optional[str] = None
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class MeetingUpdate(BaseModel):
    title: Optional[str] = None
    date_time: Optional[LocalDateTime] = None
    location: Optional[str] = None
    participants: Optional[str] = None
    notes: Optional[str] = None
    decisions: Optional[str] = None
    grid_area: Optional[str] = None
    tags: Optional[List[str]] = None


@router.get("")
def list_meetings(
    start: Optional[LocalDateTime] = None,
    end: Optional[LocalDateTime] = None,
    search: Optional[str] = None,
    tag: Optional[str] = None,
    scope: Optional[Literal["upcoming", "history"]] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> List[Meeting]:
    return MeetingsRepository(session, user.user_id).list(
        start=start, end=end, search=search, tag=tag, scope=scope, now=now_local(tz)
    )


@router.post("")
def create_meeting(
    body: MeetingCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Meeting:
    meeting = MeetingsRepository(session, user.user_id).create(Meeting(**body.model_dump(), user_id=user.user_id))
    logger.info("Created meeting %s", meeting.id)
    return meeting


@router.get("/{meeting_id}")
def get_meeting_detail(
    meeting_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    meeting = MeetingsRepository(session, user.user_id).get_single(meeting_id)
    decisions = DecisionsRepository(session, user.user_id).list_by_meeting(meeting_id)
    actions = [a for a in ActionsRepository(session, user.user_id).list() if a.meeting_id == meeting_id]
    journal = JournalRepository(session, user.user_id).list_linking(meeting_id=meeting_id)
    return {
        "meeting": meeting,
        "decisions": decisions,
        "actions": actions,
        "journal_entries": journal,
    }


@router.put("/{meeting_id}")
def update_meeting(
    meeting_id: str,
    body: MeetingUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Meeting:
    return MeetingsRepository(session, user.user_id).update(meeting_id, model_patch(body, required=("title", "date_time")))


@router.delete("/{meeting_id}", dependencies=[Depends(require_confirm)])
def delete_meeting(
    meeting_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    MeetingsRepository(session, user.user_id).delete(meeting_id)
    logger.info("Deleted meeting %s", meeting_id)
    return {"ok": True}
