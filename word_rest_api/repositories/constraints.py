"""
Word REST API: Storage Error Translation
=========================================

What:  Maps raw SQLAlchemy / driver exceptions onto the domain error taxonomy.
Who:   Every repository method wraps its statements in `storage_errors(...)`.
When:  Only at the repository boundary; routes never see SQLAlchemy errors.

Translation table:
    IntegrityError, unique violation       → ConflictError        (409)
    IntegrityError, foreign key violation  → caller-supplied error (404 for posts)
    sqlalchemy.exc.TimeoutError            → ServiceUnavailableError (503)
    OperationalError / InterfaceError      → ServiceUnavailableError (503)
    OSError (connection refused/reset)     → ServiceUnavailableError (503)
    any other SQLAlchemyError              → InternalError        (500)

Detecting the violation kind:
    PostgreSQL reports SQLSTATE codes (23505 unique, 23503 foreign key),
    exposed as `.sqlstate` (asyncpg) or `.pgcode` (psycopg). SQLite only
    reports text ("UNIQUE constraint failed: users.email",
    "FOREIGN KEY constraint failed"), so the message is the fallback.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, Optional

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.exceptions import (
    ConflictError,
    InternalError,
    ServiceUnavailableError,
    WordApiError,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "unique"
FOREIGN_KEY_VIOLATION = "foreign_key"
NOT_NULL_VIOLATION = "not_null"
OTHER_VIOLATION = "other"

_SQLSTATE_KINDS = {
    "23505": UNIQUE_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
    "23502": NOT_NULL_VIOLATION,
}


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def classify_integrity_error(exc: IntegrityError) -> str:
    """
    Return which constraint an IntegrityError violated.

    Returns one of UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION,
    NOT_NULL_VIOLATION or OTHER_VIOLATION.
    """
    code = _sqlstate(exc)
    if code in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[code]

    text = str(exc.orig).lower()
    if "unique" in text or "duplicate key" in text:
        return UNIQUE_VIOLATION
    if "foreign key" in text:
        return FOREIGN_KEY_VIOLATION
    if "not null" in text:
        return NOT_NULL_VIOLATION
    return OTHER_VIOLATION


def translate_db_error(exc: Exception, operation: str) -> WordApiError:
    """Non-integrity storage failures: unavailable (503) or internal (500)."""
    context = {"operation": operation, "error_type": type(exc).__name__}
    if isinstance(exc, PoolTimeoutError):
        logger.error("Connection pool exhausted during %s", operation)
        return ServiceUnavailableError(
            message="The database is busy. Please try again shortly.",
            context=context,
        )
    if isinstance(exc, (OperationalError, InterfaceError, OSError)):
        logger.error("Database unavailable during %s: %s", operation, exc)
        return ServiceUnavailableError(context=context)
    logger.error("Database error during %s: %s", operation, exc, exc_info=True)
    return InternalError(context=context)


async def _rollback(db: AsyncSession, operation: str) -> None:
    try:
        await db.rollback()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Rollback after failed %s also failed: %s", operation, e)


@asynccontextmanager
async def storage_errors(
    db: AsyncSession,
    operation: str,
    *,
    conflict_message: Optional[str] = None,
    on_foreign_key: Optional[Callable[[], WordApiError]] = None,
) -> AsyncGenerator[None, None]:
    """
    Run repository statements, translating storage failures on the way out.

    Args:
        db:                session to roll back on failure
        operation:         short label for logs, e.g. "create user"
        conflict_message:  message for a unique violation (ConflictError)
        on_foreign_key:    factory for the error raised on a foreign key
                           violation, e.g. NotFoundError for the parent row

    Usage:
        async with storage_errors(db, "create user", conflict_message="..."):
            db.add(user)
            await db.commit()
    """
    try:
        yield
    except WordApiError:
        await _rollback(db, operation)
        raise
    except IntegrityError as e:
        await _rollback(db, operation)
        kind = classify_integrity_error(e)
        context = {"operation": operation, "violation": kind}
        logger.warning("Constraint violation (%s) during %s", kind, operation)
        if kind == UNIQUE_VIOLATION:
            raise ConflictError(
                message=conflict_message or "Resource already exists",
                context=context,
            ) from None
        if kind == FOREIGN_KEY_VIOLATION and on_foreign_key is not None:
            raise on_foreign_key() from None
        raise InternalError(context=context) from None
    except (SQLAlchemyError, OSError) as e:
        await _rollback(db, operation)
        raise translate_db_error(e, operation) from None
