"""
Word REST API: Vocabulary Repository
=====================================

What:  Parameterized CRUD over the `vocabulary` table, plus random() for
       practice drills.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.exceptions import NotFoundError
from word_rest_api.models.user import utcnow
from word_rest_api.models.vocabulary import Vocabulary
from word_rest_api.repositories.constraints import storage_errors
from word_rest_api.schemas.vocabulary import VocabularyCreate, VocabularyResponse

logger = logging.getLogger(__name__)


class VocabularyRepository:

    async def create(self, db: AsyncSession, payload: VocabularyCreate) -> VocabularyResponse:
        now = utcnow()
        entry = Vocabulary(
            en_word=payload.en_word,
            ja_word=payload.ja_word,
            en_example=payload.en_example,
            ja_example=payload.ja_example,
            created_at=now,
            updated_at=now,
        )
        async with storage_errors(db, "create vocabulary"):
            db.add(entry)
            await db.commit()

        logger.info("Created vocabulary entry with id: %s", entry.id)
        return VocabularyResponse.model_validate(entry)

    async def get_by_id(self, db: AsyncSession, vocabulary_id: int) -> VocabularyResponse:
        async with storage_errors(db, "get vocabulary"):
            result = await db.execute(select(Vocabulary).where(Vocabulary.id == vocabulary_id))
            entry = result.scalar_one_or_none()

        if entry is None:
            raise NotFoundError(resource="Vocabulary entry", resource_id=vocabulary_id)
        return VocabularyResponse.model_validate(entry)

    async def list(self, db: AsyncSession) -> List[VocabularyResponse]:
        async with storage_errors(db, "list vocabulary"):
            result = await db.execute(
                select(Vocabulary).order_by(Vocabulary.created_at.desc(), Vocabulary.id.desc())
            )
            entries = list(result.scalars().all())

        return [VocabularyResponse.model_validate(e) for e in entries]

    async def random(self, db: AsyncSession) -> VocabularyResponse:
        """One randomly chosen entry; NotFoundError when the table is empty."""
        async with storage_errors(db, "random vocabulary"):
            result = await db.execute(
                select(Vocabulary).order_by(func.random()).limit(1)
            )
            entry = result.scalar_one_or_none()

        if entry is None:
            raise NotFoundError(message="No vocabulary entries found", resource="Vocabulary entry")
        return VocabularyResponse.model_validate(entry)

    async def update(
        self,
        db: AsyncSession,
        vocabulary_id: int,
        changes: Dict[str, Any],
    ) -> VocabularyResponse:
        async with storage_errors(db, "update vocabulary"):
            result = await db.execute(select(Vocabulary).where(Vocabulary.id == vocabulary_id))
            entry = result.scalar_one_or_none()
            if entry is None:
                raise NotFoundError(resource="Vocabulary entry", resource_id=vocabulary_id)

            for field, value in changes.items():
                setattr(entry, field, value)
            entry.updated_at = utcnow()
            await db.commit()

        logger.info("Updated vocabulary entry with id: %s", vocabulary_id)
        return VocabularyResponse.model_validate(entry)

    async def delete(self, db: AsyncSession, vocabulary_id: int) -> None:
        async with storage_errors(db, "delete vocabulary"):
            result = await db.execute(delete(Vocabulary).where(Vocabulary.id == vocabulary_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="Vocabulary entry", resource_id=vocabulary_id)
            await db.commit()

        logger.info("Deleted vocabulary entry with id: %s", vocabulary_id)


vocabulary_repository = VocabularyRepository()
