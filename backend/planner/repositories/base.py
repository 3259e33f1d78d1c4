"""Shared plumbing for user-scoped repositories.

Every repository is bound to one SQLModel ``Session`` and one owning
``user_id``; all statements are filtered on that user. Writes are last write
wins: there is no version column and no conflict detection beyond the unique
constraints enforced by the database.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, SQLModel, select

from planner.models.base import new_id, utcnow

ModelT = TypeVar("ModelT", bound=SQLModel)


class RecordNotFound(LookupError):
    """A single-row fetch matched no row for the current user."""

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"{table} {record_id} not found")
        self.table = table
        self.record_id = record_id


def maybe_single(session: Session, statement: Any) -> Optional[Any]:
    return session.exec(statement).first()


def single(session: Session, statement: Any, table: str, record_id: str) -> Any:
    row = maybe_single(session, statement)
    if row is None:
        raise RecordNotFound(table, record_id)
    return row


class OwnedRepository(Generic[ModelT]):
    model: Type[ModelT]

    def __init__(self, session: Session, user_id: str) -> None:
        self.session = session
        self.user_id = user_id

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def _select(self):
        return select(self.model).where(self.model.user_id == self.user_id)

    def get(self, record_id: str) -> Optional[ModelT]:
        return maybe_single(self.session, self._select().where(self.model.id == record_id))

    def get_single(self, record_id: str) -> ModelT:
        return single(self.session, self._select().where(self.model.id == record_id), self.table, record_id)

    def create(self, record: ModelT) -> ModelT:
        record.user_id = self.user_id
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def update(self, record_id: str, changes: Dict[str, Any]) -> ModelT:
        record = self.get_single(record_id)
        for key, value in changes.items():
            if key in ("id", "user_id", "created_at"):
                continue
            setattr(record, key, value)
        if hasattr(record, "updated_at"):
            record.updated_at = utcnow()
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete(self, record_id: str) -> None:
        record = self.get_single(record_id)
        self.session.delete(record)
        self.session.commit()

    def _upsert_on_date(self, values: Dict[str, Any]) -> ModelT:
        """Insert or replace the row keyed by (user_id, date) in one statement."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"upsert is not supported on {dialect}")

        row = dict(values)
        row["user_id"] = self.user_id
        row.setdefault("id", new_id())
        row.setdefault("created_at", utcnow())
        if "updated_at" in self.model.__table__.c:
            row["updated_at"] = utcnow()
        replace = {k: v for k, v in row.items() if k not in ("id", "user_id", "date", "created_at")}

        statement = insert(self.model.__table__).values(**row)
        statement = statement.on_conflict_do_update(index_elements=["user_id", "date"], set_=replace)
        self.session.connection().execute(statement)
        self.session.commit()

        # the ORM identity map may hold a stale copy of the row
        self.session.expire_all()
        return single(
            self.session,
            self._select().where(self.model.date == row["date"]),
            self.table,
            str(row["date"]),
        )


def has_tag(record: Any, tag: Optional[str]) -> bool:
    if not tag:
        return True
    return tag in (getattr(record, "tags", None) or [])


def filter_by_tag(records: Iterable[ModelT], tag: Optional[str]) -> List[ModelT]:
    return [r for r in records if has_tag(r, tag)]
