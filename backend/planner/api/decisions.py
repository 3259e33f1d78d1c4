from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from planner.api.common import model_patch, require_confirm
from planner.deps import UserContext, get_session, get_user
from planner.models.decision import Decision
from planner.repositories.decisions import DecisionsRepository


router = APIRouter(prefix="/decisions", tags=["decisions"])


class DecisionCreate(BaseModel):
    meeting_id: Optional[str] = None
    description: str


class DecisionUpdate(BaseModel):
    meeting_id: Optional[str] = None
    description: Optional[str] = None


@router.get("")
def list_decisions(
    meeting_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> List[Decision]:
    return DecisionsRepository(session, user.user_id).list_by_meeting(meeting_id)


@router.post("")
def create_decision(
    body: DecisionCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Decision:
    decision = Decision(meeting_id=body.meeting_id, description=body.description, user_id=user.user_id)
    return DecisionsRepository(session, user.user_id).create(decision)


@router.put("/{decision_id}")
def update_decision(
    decision_id: str,
    body: DecisionUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Decision:
    return DecisionsRepository(session, user.user_id).update(decision_id, model_patch(body, required=("description",)))


@router.delete("/{decision_id}", dependencies=[Depends(require_confirm)])
def delete_decision(
    decision_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    DecisionsRepository(session, user.user_id).delete(decision_id)
    return {"ok": True}
