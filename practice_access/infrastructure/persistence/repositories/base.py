"""Base repository: the generic record-store operations (find_one, insert, update_where, list_where).

Driver errors are translated into PersistenceException so the application
layer never sees SQLAlchemy types.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.domain.exceptions import PersistenceException
from practice_access.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy errors raised inside the block into PersistenceException.

    IntegrityError is left as-is for repositories that map unique violations.
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        raise PersistenceException(operation, type(e).__name__) from e


class BaseRepository(Generic[ModelType]):
    """Generic table-scoped operations. Subclasses map rows to application DTOs."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model
        self.table_name: str = getattr(model, "__tablename__", model.__name__)

    async def find_one(self, *filters: ColumnElement[bool]) -> ModelType | None:
        """Return the single row matching all filters, or None."""
        with store_errors(f"{self.table_name}.find_one"):
            result = await self.db.execute(select(self.model).where(*filters).limit(1))
            return result.scalar_one_or_none()

    async def list_where(
        self,
        *filters: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ModelType]:
        """Return rows matching all filters (optionally ordered and paginated)."""
        stmt = select(self.model).where(*filters).order_by(*order_by).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        with store_errors(f"{self.table_name}.list_where"):
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

    async def insert(self, obj: ModelType) -> ModelType:
        """Persist a new row inside a savepoint so a failed insert leaves the session usable.

        IntegrityError propagates so callers can map unique violations.
        """
        with store_errors(f"{self.table_name}.insert"):
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
            await self.db.refresh(obj)
        return obj

    async def update_where(
        self,
        filters: Sequence[ColumnElement[bool]],
        values: dict[str, Any],
    ) -> list[ModelType]:
        """Apply values to every row matching filters in one UPDATE; return updated rows."""
        stmt = (
            update(self.model)
            .where(*filters)
            .values(**values)
            .returning(self.model)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        with store_errors(f"{self.table_name}.update"):
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

    async def delete_where(self, *filters: ColumnElement[bool]) -> int:
        """Delete rows matching filters; return the number deleted."""
        with store_errors(f"{self.table_name}.delete"):
            result = await self.db.execute(delete(self.model).where(*filters))
            return result.rowcount or 0
