"""
Word REST API: User Request/Response Schemas
=============================================

What:  Pydantic models for the /api/users contract.

    UserCreate   POST   {name, email}      both required
    UserReplace  PUT    {name, email}      both required (full replace)
    UserPatch    PATCH  {name?, email?}    at least one field
    UserResponse        what every user endpoint returns

Normalization: name is trimmed, email trimmed and lower-cased.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from word_rest_api.schemas.common import TimestampedResponse
from word_rest_api.validation import (
    NAME_MAX_LENGTH,
    ensure_text,
    normalize_email,
    normalize_required_text,
)


class _UserFields(BaseModel):
    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, v: Any) -> str:
        return normalize_required_text(ensure_text(v, "Name"), "Name", NAME_MAX_LENGTH)

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def validate_email(cls, v: Any) -> str:
        return normalize_email(ensure_text(v, "Email"))


class UserCreate(_UserFields):
    name: str = Field(description="Display name (1-100 characters)", examples=["John Doe"])
    email: str = Field(description="Unique email address", examples=["john@example.com"])


class UserReplace(UserCreate):
    """PUT body: same shape and rules as creation."""


class UserPatch(_UserFields):
    name: Optional[str] = Field(default=None, description="New display name")
    email: Optional[str] = Field(default=None, description="New email address")

    @model_validator(mode="after")
    def require_one_field(self) -> "UserPatch":
        if not self.model_fields_set:
            raise ValueError("At least one field (name or email) must be provided for update")
        return self


class UserResponse(TimestampedResponse):
    id: uuid.UUID = Field(description="Unique user identifier (UUID)")
    name: str
    email: str
