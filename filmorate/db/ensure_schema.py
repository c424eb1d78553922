# filmorate/db/ensure_schema.py
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from filmorate.db.models import Base, GenreRow, MpaRow

log = logging.getLogger(__name__)

MPA_SEED: Sequence[Tuple[int, str]] = (
    (1, "G"),
    (2, "PG"),
    (3, "PG-13"),
    (4, "R"),
    (5, "NC-17"),
)

GENRE_SEED: Sequence[Tuple[int, str]] = (
    (1, "Комедия"),
    (2, "Драма"),
    (3, "Мультфильм"),
    (4, "Триллер"),
    (5, "Документальный"),
    (6, "Боевик"),
)


async def seed_reference_data(session: AsyncSession) -> int:
    """Insert the MPA and genre rows that are missing. Returns how many were added."""
    added = 0
    for model, seed in ((MpaRow, MPA_SEED), (GenreRow, GENRE_SEED)):
        existing = set((await session.execute(select(model.id))).scalars().all())
        for row_id, name in seed:
            if row_id in existing:
                continue
            session.add(model(id=row_id, name=name))
            added += 1
    await session.commit()
    return added


async def ensure_schema(engine: AsyncEngine, *, seed: bool = True) -> None:
    """Idempotent: create missing tables, then top up the reference rows."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("ensure_schema: tables verified/created.")

    if not seed:
        return
    async with AsyncSession(engine, expire_on_commit=False) as session:
        added = await seed_reference_data(session)
    if added:
        log.info("ensure_schema: seeded %d reference rows.", added)
