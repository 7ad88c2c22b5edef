"""
Word REST API: Post SQLAlchemy Model
=====================================

What:  ORM model representing the `posts` table.

Referential action:
    posts.user_id REFERENCES users(id) ON DELETE CASCADE

    Deleting a user removes its posts inside the same DELETE statement, in the
    storage engine. No ORM relationship is mapped, so the ORM never loads or
    deletes children itself.

Query Patterns:
    - List posts:          ORDER BY created_at DESC  → idx_posts_created_at
    - List posts for user: WHERE user_id = :uid       → idx_posts_user_id
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from word_rest_api.database import Base
from word_rest_api.models.user import utcnow


class Post(Base):
    """A post written by a user."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_posts_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, title='{self.title}')>"


Index("idx_posts_created_at", Post.created_at.desc())
