"""
Word REST API: Vocabulary Request/Response Schemas
===================================================

What:  Pydantic models for the /api/vocabulary contract.

    VocabularyCreate / VocabularyReplace  {en_word, ja_word, en_example?, ja_example?}
    VocabularyPatch                        any non-empty subset of the above
    VocabularyResponse
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from word_rest_api.schemas.common import TimestampedResponse
from word_rest_api.validation import (
    EXAMPLE_MAX_LENGTH,
    WORD_MAX_LENGTH,
    ensure_text,
    normalize_optional_text,
    normalize_required_text,
)

_LABELS = {
    "en_word": "English word",
    "ja_word": "Japanese word",
    "en_example": "English example",
    "ja_example": "Japanese example",
}


class _VocabularyFields(BaseModel):
    @field_validator("en_word", "ja_word", mode="before", check_fields=False)
    @classmethod
    def validate_word(cls, v: Any, info: ValidationInfo) -> str:
        label = _LABELS[info.field_name]
        return normalize_required_text(ensure_text(v, label), label, WORD_MAX_LENGTH)

    @field_validator("en_example", "ja_example", mode="before", check_fields=False)
    @classmethod
    def validate_example(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        label = _LABELS[info.field_name]
        return normalize_optional_text(ensure_text(v, label), label, EXAMPLE_MAX_LENGTH)


class VocabularyCreate(_VocabularyFields):
    en_word: str = Field(description="English word", examples=["apple"])
    ja_word: str = Field(description="Japanese translation", examples=["りんご"])
    en_example: Optional[str] = Field(default=None, examples=["I eat an apple every day."])
    ja_example: Optional[str] = Field(default=None, examples=["私は毎日りんごを食べます。"])


class VocabularyReplace(VocabularyCreate):
    """PUT body: same shape and rules as creation."""


class VocabularyPatch(_VocabularyFields):
    en_word: Optional[str] = None
    ja_word: Optional[str] = None
    en_example: Optional[str] = None
    ja_example: Optional[str] = None

    @model_validator(mode="after")
    def require_one_field(self) -> "VocabularyPatch":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class VocabularyResponse(TimestampedResponse):
    id: int
    en_word: str
    ja_word: str
    en_example: Optional[str] = None
    ja_example: Optional[str] = None
