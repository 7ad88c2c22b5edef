"""
Word REST API: Vocabulary SQLAlchemy Model
===========================================

What:  ORM model for the `vocabulary` table: an English word, its Japanese
       translation, and optional example sentences in both languages.

Ids are sequential integers (SERIAL on PostgreSQL, INTEGER PRIMARY KEY on
SQLite). The table has no relationships to users or posts.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from word_rest_api.database import Base
from word_rest_api.models.user import utcnow


class Vocabulary(Base):
    __tablename__ = "vocabulary"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    en_word: Mapped[str] = mapped_column(String(200), nullable=False)
    ja_word: Mapped[str] = mapped_column(String(200), nullable=False)

    en_example: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    ja_example: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

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
        Index("idx_vocabulary_en_word", "en_word"),
        Index("idx_vocabulary_ja_word", "ja_word"),
    )

    def __repr__(self) -> str:
        return f"<Vocabulary(id={self.id}, en_word='{self.en_word}', ja_word='{self.ja_word}')>"


Index("idx_vocabulary_created_at", Vocabulary.created_at.desc())
