"""
Word REST API: Post Request/Response Schemas
=============================================

What:  Pydantic models for the /api/posts contract.

    PostCreate   POST   {user_id, title, content?}
    PostReplace  PUT    {title, content?}       omitted content clears it
    PostPatch    PATCH  {title?, content?}      at least one field
    PostResponse

user_id is only checked for UUID syntax here; whether the user exists is
decided by the posts.user_id foreign key at insert time.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from word_rest_api.schemas.common import TimestampedResponse
from word_rest_api.validation import (
    CONTENT_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ensure_text,
    normalize_optional_text,
    normalize_required_text,
    parse_uuid,
)


class _PostFields(BaseModel):
    @field_validator("title", mode="before", check_fields=False)
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return normalize_required_text(ensure_text(v, "Title"), "Title", TITLE_MAX_LENGTH)

    @field_validator("content", mode="before", check_fields=False)
    @classmethod
    def validate_content(cls, v: Any) -> Optional[str]:
        return normalize_optional_text(ensure_text(v, "Content"), "Content", CONTENT_MAX_LENGTH)


class PostCreate(_PostFields):
    user_id: uuid.UUID = Field(description="Author's user id (UUID)")
    title: str = Field(description="Post title (1-200 characters)")
    content: Optional[str] = Field(default=None, description="Optional body text")

    @field_validator("user_id", mode="before")
    @classmethod
    def validate_user_id(cls, v: Any) -> uuid.UUID:
        return parse_uuid(v, "User ID")


class PostReplace(_PostFields):
    title: str = Field(description="Post title (1-200 characters)")
    content: Optional[str] = Field(default=None, description="Optional body text")


class PostPatch(_PostFields):
    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def require_one_field(self) -> "PostPatch":
        if not self.model_fields_set:
            raise ValueError("At least one field (title or content) must be provided for update")
        return self


class PostResponse(TimestampedResponse):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: Optional[str] = None
