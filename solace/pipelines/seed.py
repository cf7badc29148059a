"""Seed pipeline: bulk-insert the sample advocates, skipping existing rows.

Conflicts are detected on the (first_name, last_name, phone_number) natural
key, so running the seed twice inserts nothing the second time.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from config.advocate_seed import ADVOCATE_SEED
from solace import models
from solace.db import CONNECTION_ERRORS, DatabaseUnavailableError

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """Raised when seeding fails."""
    pass


_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(session: AsyncSession):
    dialect = session.bind.dialect.name if session.bind is not None else "postgresql"
    try:
        return _INSERT_BY_DIALECT[dialect]
    except KeyError:
        raise SeedError(f"Seeding is not supported on dialect {dialect!r}") from None


async def seed_advocates(
    session: AsyncSession,
    records: Sequence[Mapping[str, Any]] | None = None,
) -> list[models.Advocate]:
    """Insert sample advocates, ignoring rows that already exist.

    Args:
        session: Database session
        records: Rows to insert (defaults to ADVOCATE_SEED)

    Returns:
        The rows actually inserted (empty when everything already existed)

    Raises:
        DatabaseUnavailableError: If a connection cannot be established
        SeedError: If the insert fails for any other reason
    """
    rows = [dict(r) for r in (ADVOCATE_SEED if records is None else records)]
    if not rows:
        return []

    insert = _insert_for(session)
    stmt = (
        insert(models.Advocate)
        .values(rows)
        .on_conflict_do_nothing(index_elements=["first_name", "last_name", "phone_number"])
        .returning(models.Advocate)
    )

    try:
        result = await session.execute(stmt)
        inserted = list(result.scalars().all())
        await session.commit()
    except CONNECTION_ERRORS as e:
        logger.error(f"Database unavailable during seed: {e}")
        raise DatabaseUnavailableError() from e
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        await session.rollback()
        raise SeedError(f"Seeding failed: {e}") from e

    logger.info(f"Seeded {len(inserted)} of {len(rows)} advocates")
    return inserted
