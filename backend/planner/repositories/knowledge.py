from __future__ import annotations

from typing import Optional
from sqlalchemy import or_

from planner.models.knowledge_page import KnowledgePage
from planner.repositories.base import OwnedRepository, filter_by_tag


class KnowledgeRepository(OwnedRepository[KnowledgePage]):
    model = KnowledgePage

    def list(self, search: Optional[str] = None, tag: Optional[str] = None) -> list[KnowledgePage]:
        """Pinned pages first, then most recently updated."""
        statement = self._select()
        if search:
            pattern = f"%{search}%"
            statement = statement.where(
                or_(KnowledgePage.title.ilike(pattern), KnowledgePage.content.ilike(pattern))
            )
        statement = statement.order_by(KnowledgePage.is_pinned.desc(), KnowledgePage.updated_at.desc())
        return filter_by_tag(self.session.exec(statement), tag)
