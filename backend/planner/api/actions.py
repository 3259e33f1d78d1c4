from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session
import logging

from planner.api.common import LocalDateTime, model_patch, require_confirm
from planner.deps import UserContext, get_session, get_user
from planner.models.action import Action
from planner.models.enums import ActionPriority, ActionStatus
from planner.repositories.actions import ActionsRepository

logger = logging.getLogger("planner.api")


router = APIRouter(prefix="/actions", tags=["actions"])


class ActionCreate(BaseModel):
    title: str
    description: Optional[str] = None
    status: ActionStatus = "Open"
    priority: ActionPriority = "Medium"
    start_date: Optional[LocalDateTime] = None
    due_date: Optional[LocalDateTime] = None
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    meeting_id: Optional[str] = None
    is_focus: bool = False


class ActionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ActionStatus] = None
    priority: Optional[ActionPriority] = None
    start_date: Optional[LocalDateTime] = None
    due_date: Optional[LocalDateTime] = None
    grid_area: Optional[str] = None
    tags: Optional[List[str]] = None
    meeting_id: Optional[str] = None
    is_focus: Optional[bool] = None


@router.get("")
def list_actions(
    start: Optional[LocalDateTime] = None,
    end: Optional[LocalDateTime] = None,
    status: Optional[ActionStatus] = None,
    search: Optional[str] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> List[Action]:
    return ActionsRepository(session, user.user_id).list(start=start, end=end, status=status, search=search)


@router.post("")
def create_action(
    body: ActionCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Action:
    action = ActionsRepository(session, user.user_id).create(Action(**body.model_dump(), user_id=user.user_id))
    logger.info("Created action %s", action.id)
    return action


@router.get("/{action_id}")
def get_action(
    action_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Action:
    return ActionsRepository(session, user.user_id).get_single(action_id)


@router.put("/{action_id}")
def update_action(
    action_id: str,
    body: ActionUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Action:
    patch = model_patch(body, required=("title", "status", "priority", "is_focus"))
    return ActionsRepository(session, user.user_id).update(action_id, patch)


@router.delete("/{action_id}", dependencies=[Depends(require_confirm)])
def delete_action(
    action_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    ActionsRepository(session, user.user_id).delete(action_id)
    logger.info("Deleted action %s", action_id)
    return {"ok": True}
