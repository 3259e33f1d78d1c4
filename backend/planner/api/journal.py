from __future__ import annotations

import datetime as dt
from datetime import date, timedelta, tzinfo
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from sqlmodel import Session
import logging

from planner.api.common import model_patch, require_confirm
from planner.deps import UserContext, get_session, get_tz, get_user
from planner.models.journal_entry import JournalEntry
from planner.repositories.actions import ActionsRepository
from planner.repositories.journal import JournalRepository
from planner.repositories.knowledge import KnowledgeRepository
from planner.repositories.meetings import MeetingsRepository
from planner.services.dateutils import today
from planner.services.journal_export import render_journal_markdown

logger = logging.getLogger("planner.api")


router = APIRouter(prefix="/journal", tags=["journal"])


class JournalFields(BaseModel):
    content: Optional[str] = None
    linked_meeting_ids: List[str] = Field(default_factory=list)
    linked_action_ids: List[str] = Field(default_factory=list)
    linked_knowledge_ids: List[str] = Field(default_factory=list)
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class JournalCreate(JournalFields):
    date: dt.date


class JournalUpdate(BaseModel):
    date: Optional[dt.date] = None
    content: Optional[str] = None
    linked_meeting_ids: Optional[List[str]] = None
    linked_action_ids: Optional[List[str]] = None
    linked_knowledge_ids: Optional[List[str]] = None
    grid_area: Optional[str] = None
    tags: Optional[List[str]] = None


@router.get("")
def list_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    search: Optional[str] = None,
    tag: Optional[str] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> List[JournalEntry]:
    return JournalRepository(session, user.user_id).list(start=start, end=end, search=search, tag=tag)


@router.post("")
def create_entry(
    body: JournalCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> JournalEntry:
    # a second entry for the same date violates the (user, date) constraint -> 409
    return JournalRepository(session, user.user_id).create(JournalEntry(**body.model_dump(), user_id=user.user_id))


@router.get("/export", response_class=PlainTextResponse)
def export_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
    tz: Optional[tzinfo] = Depends(get_tz),
) -> PlainTextResponse:
    """Markdown export of a date range (default: the last 30 days)."""
    end = end or today(tz)
    start = start or end - timedelta(days=30)
    entries = JournalRepository(session, user.user_id).list(start=start, end=end)

    titles: Dict[str, str] = {}
    for m in MeetingsRepository(session, user.user_id).list():
        titles[m.id] = m.title
    for a in ActionsRepository(session, user.user_id).list():
        titles[a.id] = a.title
    for k in KnowledgeRepository(session, user.user_id).list():
        titles[k.id] = k.title
    return PlainTextResponse(render_journal_markdown(entries, start, end, titles=titles))


@router.get("/by-date/{day}")
def get_entry_by_date(
    day: date,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Optional[JournalEntry]:
    return JournalRepository(session, user.user_id).get_by_date(day)


@router.put("/by-date/{day}")
def upsert_entry(
    day: date,
    body: JournalFields,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> JournalEntry:
    entry = JournalRepository(session, user.user_id).upsert(day, body.model_dump())
    logger.info("Saved journal entry for %s", day.isoformat())
    return entry


@router.get("/{entry_id}")
def get_entry(
    entry_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> JournalEntry:
    return JournalRepository(session, user.user_id).get_single(entry_id)


@router.put("/{entry_id}")
def update_entry(
    entry_id: str,
    body: JournalUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> JournalEntry:
    return JournalRepository(session, user.user_id).update(entry_id, model_patch(body, required=("date",)))


@router.delete("/{entry_id}", dependencies=[Depends(require_confirm)])
def delete_entry(
    entry_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    JournalRepository(session, user.user_id).delete(entry_id)
    return {"ok": True}
