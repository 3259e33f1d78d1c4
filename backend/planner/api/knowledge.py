from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from planner.api.common import model_patch, require_confirm
from planner.deps import UserContext, get_session, get_user
from planner.models.knowledge_page import KnowledgePage
from planner.repositories.knowledge import KnowledgeRepository


router = APIRouter(prefix="/knowledge", tags=["knowledge"])


class PageCreate(BaseModel):
    title: str
    content: Optional[str] = None
    grid_area: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_pinned: bool = False


class PageUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    grid_area: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[bool] = None


@router.get("")
def list_pages(
    search: Optional[str] = None,
    tag: Optional[str] = None,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> List[KnowledgePage]:
    return KnowledgeRepository(session, user.user_id).list(search=search, tag=tag)


@router.post("")
def create_page(
    body: PageCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> KnowledgePage:
    return KnowledgeRepository(session, user.user_id).create(KnowledgePage(**body.model_dump(), user_id=user.user_id))


@router.get("/{page_id}")
def get_page(
    page_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> KnowledgePage:
    return KnowledgeRepository(session, user.user_id).get_single(page_id)


@router.put("/{page_id}")
def update_page(
    page_id: str,
    body: PageUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> KnowledgePage:
    patch = model_patch(body, required=("title", "is_pinned"))
    return KnowledgeRepository(session, user.user_id).update(page_id, patch)


@router.delete("/{page_id}", dependencies=[Depends(require_confirm)])
def delete_page(
    page_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    KnowledgeRepository(session, user.user_id).delete(page_id)
    return {"ok": True}
