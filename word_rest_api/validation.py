"""
Word REST API: Validation Layer
================================

What:  Pure functions that check and normalize individual payload fields,
       plus the glue that turns pydantic's error list into our
       ValidationError (one entry per failing field).
How:   The field helpers raise ValueError with a user-facing message; the
       pydantic request schemas call them from field validators, so pydantic
       collects every failure in a single pass instead of stopping at the first.
Who:   schemas/*.py (field validators), main.py (RequestValidationError
       handler), and validate_payload() for callers holding a raw dict.

No function in this module performs I/O. Existence checks (does user_id point
at a real user?) are left to the database's foreign key.

Length limits:
    name          100     title        200     content     10000
    email         255     en_word      200     en_example   1000
                          ja_word      200     ja_example   1000
"""

import re
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from word_rest_api.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10_000
WORD_MAX_LENGTH = 200
EXAMPLE_MAX_LENGTH = 1_000

_EMAIL_LOCAL_MAX = 64
_EMAIL_DOMAIN_MAX = 253
_EMAIL_LOCAL_RE = re.compile(r"^[\w.+-]+$", re.ASCII)
_EMAIL_DOMAIN_RE = re.compile(r"^[\w.-]+$", re.ASCII)

# Location prefixes FastAPI adds in front of the field name
_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


# ══════════════════════════════════════════════════════════════════════════
# Field Validators
# ══════════════════════════════════════════════════════════════════════════

def normalize_required_text(value: Optional[str], label: str, max_length: int) -> str:
    """
    Trim a required string and enforce its maximum length.

    >>> normalize_required_text("  John  ", "Name", 100)
    'John'

    Raises:
        ValueError: value is None, empty, whitespace-only, or too long
    """
    if value is None or not value.strip():
        raise ValueError(f"{label} cannot be empty")
    trimmed = value.strip()
    if len(trimmed) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return trimmed


def normalize_optional_text(value: Optional[str], label: str, max_length: int) -> Optional[str]:
    """Trim an optional string; whitespace-only collapses to None."""
    if value is None:
        return None
    trimmed = value.strip()
    if len(trimmed) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return trimmed or None


def is_valid_email(email: str) -> bool:
    """
    Shape check for email addresses: local-part@domain, domain with a dot.

    Syntactic only; deliverability is not checked.

    >>> is_valid_email("user+tag@example.org")
    True
    >>> is_valid_email("user@domain")
    False
    """
    parts = email.split("@")
    if len(parts) != 2:
        return False
    local, domain = parts
    if not local or len(local) > _EMAIL_LOCAL_MAX:
        return False
    if not domain or len(domain) > _EMAIL_DOMAIN_MAX:
        return False
    if "." not in domain:
        return False
    if domain.startswith(".") or domain.endswith(".") or ".." in domain:
        return False
    return bool(_EMAIL_LOCAL_RE.match(local)) and bool(_EMAIL_DOMAIN_RE.match(domain)) \
        and "_" not in domain


def normalize_email(value: Optional[str]) -> str:
    """Trim, validate and lower-case an email address."""
    if value is None or not value.strip():
        raise ValueError("Email cannot be empty")
    trimmed = value.strip()
    if len(trimmed) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email cannot exceed {EMAIL_MAX_LENGTH} characters")
    if not is_valid_email(trimmed):
        raise ValueError("Invalid email format")
    return trimmed.lower()


def ensure_text(value: Any, label: str) -> Optional[str]:
    """Reject non-string JSON values (numbers, lists, objects) for text fields."""
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return value


def parse_uuid(value: Any, label: str) -> uuid.UUID:
    """Accept a UUID or its string form; anything else is a ValueError."""
    if isinstance(value, uuid.UUID):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{label} cannot be empty")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a valid UUID")
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        raise ValueError(f"{label} must be a valid UUID") from None


# ══════════════════════════════════════════════════════════════════════════
# Pydantic Error Conversion
# ══════════════════════════════════════════════════════════════════════════

def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) if parts else "body"


def _clean_message(error: Mapping[str, Any], field: str) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return f"{field} is required"
    if error_type == "json_invalid":
        return "Request body is not valid JSON"
    if error_type in {"model_attributes_type", "dict_type", "model_type"}:
        return "Request body must be a JSON object"
    message = str(error.get("msg", "Invalid value"))
    # pydantic prefixes messages raised from our validators with "Value error, "
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


def details_from_errors(errors: Sequence[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert pydantic / FastAPI error dicts into [{"field", "message"}, ...].

    Duplicate (field, message) pairs are dropped; order is preserved.
    """
    details: List[Dict[str, str]] = []
    seen = set()
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = _clean_message(error, field)
        key = (field, message)
        if key in seen:
            continue
        seen.add(key)
        details.append({"field": field, "message": message})
    return details


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a raw decoded payload against a request schema.

    Returns:
        The normalized model instance

    Raises:
        ValidationError: naming every failing field
    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(details=details_from_errors(e.errors())) from None
