"""
Word REST API: Post Repository
===============================

What:  Parameterized CRUD over the `posts` table.

Foreign key handling:
    create() does not look the author up first. The insert is attempted and a
    posts.user_id foreign key violation comes back from the database, which
    storage_errors turns into NotFoundError("User", user_id).
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.exceptions import NotFoundError
from word_rest_api.models.post import Post
from word_rest_api.models.user import utcnow
from word_rest_api.repositories.constraints import storage_errors
from word_rest_api.schemas.post import PostCreate, PostResponse

logger = logging.getLogger(__name__)


class PostRepository:

    async def create(self, db: AsyncSession, payload: PostCreate) -> PostResponse:
        now = utcnow()
        post = Post(
            id=uuid.uuid4(),
            user_id=payload.user_id,
            title=payload.title,
            content=payload.content,
            created_at=now,
            updated_at=now,
        )
        async with storage_errors(
            db,
            "create post",
            on_foreign_key=lambda: NotFoundError(resource="User", resource_id=payload.user_id),
        ):
            db.add(post)
            await db.commit()

        logger.info("Created post with id: %s for user_id: %s", post.id, post.user_id)
        return PostResponse.model_validate(post)

    async def get_by_id(self, db: AsyncSession, post_id: uuid.UUID) -> PostResponse:
        async with storage_errors(db, "get post"):
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()

        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        return PostResponse.model_validate(post)

    async def list(
        self,
        db: AsyncSession,
        user_id: Optional[uuid.UUID] = None,
    ) -> List[PostResponse]:
        """
        All posts newest first, optionally only those written by `user_id`.

        An unknown user_id is not an error; it simply matches no rows.
        """
        query = select(Post)
        if user_id is not None:
            query = query.where(Post.user_id == user_id)
        query = query.order_by(Post.created_at.desc(), Post.id.desc())

        async with storage_errors(db, "list posts"):
            result = await db.execute(query)
            posts = list(result.scalars().all())

        return [PostResponse.model_validate(p) for p in posts]

    async def update(
        self,
        db: AsyncSession,
        post_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> PostResponse:
        async with storage_errors(db, "update post"):
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()
            if post is None:
                raise NotFoundError(resource="Post", resource_id=post_id)

            for field, value in changes.items():
                setattr(post, field, value)
            post.updated_at = utcnow()
            await db.commit()

        logger.info("Updated post with id: %s", post_id)
        return PostResponse.model_validate(post)

    async def delete(self, db: AsyncSession, post_id: uuid.UUID) -> None:
        async with storage_errors(db, "delete post"):
            result = await db.execute(delete(Post).where(Post.id == post_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="Post", resource_id=post_id)
            await db.commit()

        logger.info("Deleted post with id: %s", post_id)


post_repository = PostRepository()
