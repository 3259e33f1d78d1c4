from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, Iterable, Optional

from fastapi import HTTPException, Query
from pydantic import AfterValidator, BaseModel

from planner.config import get_settings
from planner.services.dateutils import local_datetime


def _to_local(value: Optional[datetime]) -> Optional[datetime]:
    # stored columns hold naive local wall-clock time
    return local_datetime(value, get_settings().tzinfo)


LocalDateTime = Annotated[datetime, AfterValidator(_to_local)]

# JSON array columns; they are NOT NULL in the store
LIST_FIELDS = {"tags", "linked_meeting_ids", "linked_action_ids", "linked_knowledge_ids"}


def require_confirm(confirm: bool = Query(default=False)) -> None:
    """Deletes only run after the client has confirmed them explicitly."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Deletion requires confirm=true")


def model_patch(body: BaseModel, required: Iterable[str] = ()) -> Dict[str, Any]:
    """Fields the client actually sent.

    An explicit null list becomes empty; a null for a ``required`` column
    means "leave as is" and is dropped.
    """
    patch = body.model_dump(exclude_unset=True)
    for key in list(patch):
        if patch[key] is not None:
            continue
        if key in LIST_FIELDS:
            patch[key] = []
        elif key in required:
            del patch[key]
    return patch
