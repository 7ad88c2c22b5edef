"""
Word REST API: User Repository
===============================

What:  Parameterized CRUD over the `users` table.
How:   SQLAlchemy expressions only (bound parameters throughout); each write
       commits inside `storage_errors`, which turns a duplicate email into
       ConflictError before the handler sees anything.
Who:   routes/users.py.

Cascade:
    delete() issues a single DELETE on users. The posts of that user go with
    it through ON DELETE CASCADE on posts.user_id; no child rows are touched
    here.
"""

import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.exceptions import NotFoundError
from word_rest_api.models.user import User, utcnow
from word_rest_api.repositories.constraints import storage_errors
from word_rest_api.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

_DUPLICATE_EMAIL = "A user with this email already exists"


class UserRepository:
    """
    Stateless repository; the session is passed to every call.

    Responsibilities:
        - create():    insert, duplicate email → ConflictError
        - get_by_id(): single row or NotFoundError
        - list():      newest first, empty list when there are none
        - update():    full or partial replace, refreshes updated_at
        - delete():    single DELETE, posts cascade in the database
    """

    async def create(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        now = utcnow()
        user = User(
            id=uuid.uuid4(),
            name=payload.name,
            email=payload.email,
            created_at=now,
            updated_at=now,
        )
        async with storage_errors(db, "create user", conflict_message=_DUPLICATE_EMAIL):
            db.add(user)
            await db.commit()

        logger.info("Created user with id: %s", user.id)
        return UserResponse.model_validate(user)

    async def get_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> UserResponse:
        async with storage_errors(db, "get user"):
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()

        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return UserResponse.model_validate(user)

    async def list(self, db: AsyncSession) -> List[UserResponse]:
        async with storage_errors(db, "list users"):
            result = await db.execute(
                select(User).order_by(User.created_at.desc(), User.id.desc())
            )
            users = list(result.scalars().all())

        return [UserResponse.model_validate(u) for u in users]

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> UserResponse:
        """
        Apply `changes` (already validated and normalized) to one user.

        PUT passes every field, PATCH only the fields the client sent.

        Raises:
            NotFoundError:  no user with that id (nothing is written)
            ConflictError:  the new email belongs to another user
        """
        async with storage_errors(db, "update user", conflict_message=_DUPLICATE_EMAIL):
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
            if user is None:
                raise NotFoundError(resource="User", resource_id=user_id)

            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = utcnow()
            await db.commit()

        logger.info("Updated user with id: %s", user_id)
        return UserResponse.model_validate(user)

    async def delete(self, db: AsyncSession, user_id: uuid.UUID) -> None:
        async with storage_errors(db, "delete user"):
            result = await db.execute(delete(User).where(User.id == user_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="User", resource_id=user_id)
            await db.commit()

        logger.info("Deleted user with id: %s (posts removed by cascade)", user_id)


# ── Singleton Instance ────────────────────────────────────────────────────
user_repository = UserRepository()
