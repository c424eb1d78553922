# filmorate/db/crud/reference.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate.db.models import GenreRow, MpaRow
from filmorate.schemas import Genre, Mpa

log = logging.getLogger(__name__)


class _ReferenceStore:
    """Read-only lookup over a seeded (id, name) table."""

    row_model: Type = None  # type: ignore[assignment]
    schema: Type = None  # type: ignore[assignment]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List:
        rows = (await self.db.execute(
            select(self.row_model).order_by(self.row_model.id)
        )).scalars().all()
        log.debug("Retrieved %d rows from %s", len(rows), self.row_model.__tablename__)
        return [self.schema.model_validate(r) for r in rows]

    async def get_by_id(self, item_id: int) -> Optional:
        row = await self.db.get(self.row_model, item_id)
        if row is None:
            log.debug("%s id=%s not found", self.row_model.__tablename__, item_id)
            return None
        return self.schema.model_validate(row)

    async def get_by_ids(self, ids: Iterable[int]) -> List:
        wanted = set(ids)
        if not wanted:
            return []
        rows = (await self.db.execute(
            select(self.row_model)
            .where(self.row_model.id.in_(wanted))
            .order_by(self.row_model.id)
        )).scalars().all()
        return [self.schema.model_validate(r) for r in rows]


class SqlGenreStore(_ReferenceStore):
    row_model = GenreRow
    schema = Genre


class SqlMpaStore(_ReferenceStore):
    row_model = MpaRow
    schema = Mpa


__all__ = ["SqlGenreStore", "SqlMpaStore"]
