from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from planner.api.common import model_patch, require_confirm
from planner.deps import UserContext, get_session, get_user
from planner.models.tag import Grid, Tag
from planner.repositories.tags import GridsRepository, TagsRepository


router = APIRouter(prefix="/tags", tags=["tags"])
grids_router = APIRouter(prefix="/grids", tags=["grids"])


class TagCreate(BaseModel):
    name: str
    color: Optional[str] = None


class TagUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class GridCreate(BaseModel):
    name: str


@router.get("")
def list_tags(user: UserContext = Depends(get_user), session: Session = Depends(get_session)) -> List[Tag]:
    return TagsRepository(session, user.user_id).list()


@router.post("")
def create_tag(
    body: TagCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Tag:
    return TagsRepository(session, user.user_id).create(Tag(name=body.name, color=body.color, user_id=user.user_id))


@router.put("/{tag_id}")
def update_tag(
    tag_id: str,
    body: TagUpdate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Tag:
    return TagsRepository(session, user.user_id).update(tag_id, model_patch(body, required=("name",)))


@router.delete("/{tag_id}", dependencies=[Depends(require_confirm)])
def delete_tag(
    tag_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    TagsRepository(session, user.user_id).delete(tag_id)
    return {"ok": True}


@grids_router.get("")
def list_grids(user: UserContext = Depends(get_user), session: Session = Depends(get_session)) -> List[Grid]:
    return GridsRepository(session, user.user_id).list()


@grids_router.post("")
def create_grid(
    body: GridCreate,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Grid:
    return GridsRepository(session, user.user_id).create(Grid(name=body.name, user_id=user.user_id))


@grids_router.delete("/{grid_id}", dependencies=[Depends(require_confirm)])
def delete_grid(
    grid_id: str,
    user: UserContext = Depends(get_user),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    GridsRepository(session, user.user_id).delete(grid_id)
    return {"ok": True}
