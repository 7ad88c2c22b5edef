"""
Word REST API: Shared Response Schemas
=======================================

What:  Error envelope, readiness response, and the timestamp base shared by
       every entity response.
Who:   Route decorators (`responses=`) for OpenAPI docs; entity schemas.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TimestampedResponse(BaseModel):
    """
    Base for entity responses carrying created_at / updated_at.

    SQLite hands timestamps back without tzinfo even though they were written
    as UTC; they are re-labelled as UTC so every response carries an explicit
    offset (2024-01-15T12:00:00Z form).
    """

    created_at: datetime = Field(description="Creation time (UTC, ISO 8601)")
    updated_at: datetime = Field(description="Last modification time (UTC, ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class FieldErrorDetail(BaseModel):
    field: str = Field(description="Name of the failing field, or 'body'")
    message: str = Field(description="What is wrong with it")


class ErrorBody(BaseModel):
    code: str = Field(description="Machine-readable error code, e.g. CONFLICT")
    message: str = Field(description="Human-readable description")
    details: Optional[List[FieldErrorDetail]] = Field(
        default=None,
        description="Per-field violations (validation errors only)",
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response for all API errors.

    Example:
        {"error": {"code": "NOT_FOUND", "message": "User with id ... not found"}}
    """

    error: ErrorBody


class ReadinessResponse(BaseModel):
    status: str = Field(description="ready")
    database: str = Field(description="connected")
