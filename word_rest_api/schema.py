"""
Word REST API: Startup Schema Manager
======================================

What:  Makes sure the tables, indexes and extensions exist before the app
       accepts traffic, and optionally seeds sample vocabulary.
How:   `metadata.create_all(checkfirst=True)` inside one transaction, plus
       `IF NOT EXISTS` DDL for PostgreSQL extras. Every statement is a no-op
       on an already-initialized database, so ensure_schema() can run on
       every start.
When:  Called from the lifespan in main.py. Any exception propagates and
       aborts startup.

PostgreSQL extras:
    pgcrypto provides gen_random_uuid(), installed as the server-side default
    for users.id and posts.id so rows inserted outside the API (psql, seed
    scripts) still get an id.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from word_rest_api.database import Base
from word_rest_api.models import Post, User, Vocabulary  # noqa: F401  (registers tables)
from word_rest_api.models.user import utcnow

logger = logging.getLogger(__name__)

_POSTGRES_STATEMENTS = (
    "CREATE EXTENSION IF NOT EXISTS pgcrypto",
)

_POSTGRES_DEFAULTS = (
    "ALTER TABLE users ALTER COLUMN id SET DEFAULT gen_random_uuid()",
    "ALTER TABLE posts ALTER COLUMN id SET DEFAULT gen_random_uuid()",
)

SAMPLE_VOCABULARY: List[Dict[str, str]] = [
    {
        "en_word": "apple",
        "ja_word": "りんご",
        "en_example": "I eat an apple every day.",
        "ja_example": "私は毎日りんごを食べます。",
    },
    {
        "en_word": "book",
        "ja_word": "本",
        "en_example": "This is an interesting book.",
        "ja_example": "これは面白い本です。",
    },
    {
        "en_word": "computer",
        "ja_word": "コンピューター",
        "en_example": "I use my computer for work.",
        "ja_example": "私は仕事でコンピューターを使います。",
    },
    {
        "en_word": "study",
        "ja_word": "勉強する",
        "en_example": "I study English every morning.",
        "ja_example": "私は毎朝英語を勉強します。",
    },
    {
        "en_word": "friend",
        "ja_word": "友達",
        "en_example": "She is my best friend.",
        "ja_example": "彼女は私の親友です。",
    },
]


async def ensure_schema(engine: AsyncEngine) -> None:
    """
    Create missing tables, indexes and extensions. Safe to call repeatedly.

    Raises whatever the driver raises; the caller treats that as fatal.
    """
    dialect = engine.dialect.name
    logger.info("Ensuring database schema (dialect: %s)", dialect)

    async with engine.begin() as conn:
        if dialect == "postgresql":
            for statement in _POSTGRES_STATEMENTS:
                await conn.execute(text(statement))

        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

        if dialect == "postgresql":
            for statement in _POSTGRES_DEFAULTS:
                await conn.execute(text(statement))

    logger.info("Database schema ready: %s", ", ".join(sorted(Base.metadata.tables)))


async def seed_vocabulary(
    session: AsyncSession,
    entries: Optional[List[Dict[str, str]]] = None,
) -> int:
    """
    Insert sample vocabulary when the table is empty.

    Returns:
        Number of rows inserted (0 when the table already had data).
    """
    existing = await session.scalar(select(func.count()).select_from(Vocabulary))
    if existing:
        logger.info("Vocabulary table already contains %d entries, skipping seed", existing)
        return 0

    rows = entries if entries is not None else SAMPLE_VOCABULARY
    now = utcnow()
    for row in rows:
        session.add(Vocabulary(created_at=now, updated_at=now, **row))
        logger.debug("Seeding vocabulary: %s -> %s", row["en_word"], row["ja_word"])
    await session.commit()

    logger.info("Seeded %d vocabulary entries", len(rows))
    return len(rows)
