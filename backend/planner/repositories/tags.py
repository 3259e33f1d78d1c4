from __future__ import annotations

from planner.models.tag import Grid, Tag
from planner.repositories.base import OwnedRepository


class TagsRepository(OwnedRepository[Tag]):
    model = Tag

    def list(self) -> list[Tag]:
        statement = self._select().order_by(Tag.name.asc())
        return list(self.session.exec(statement))

    def color_map(self) -> dict[str, str]:
        return {t.name: t.color for t in self.list() if t.color}


class GridsRepository(OwnedRepository[Grid]):
    model = Grid

    def list(self) -> list[Grid]:
        statement = self._select().order_by(Grid.name.asc())
        return list(self.session.exec(statement))
