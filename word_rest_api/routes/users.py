"""
Word REST API: User Route Handlers
===================================

What:  /api/users CRUD.
How:   FastAPI parses the path id and body; the pydantic schemas normalize
       and validate; the handler calls user_repository and returns its
       result. Errors are raised as WordApiError subclasses and rendered by
       the handlers registered in main.py.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.database import get_db_session
from word_rest_api.repositories.users import user_repository
from word_rest_api.schemas.common import ErrorResponse
from word_rest_api.schemas.user import UserCreate, UserPatch, UserReplace, UserResponse


router = APIRouter(prefix="/api", tags=["Users"])

_VALIDATION = {400: {"description": "Invalid input", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
_CONFLICT = {409: {"description": "Email already in use", "model": ErrorResponse}}


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_VALIDATION, **_CONFLICT},
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_repository.create(db, payload)


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users (newest first)",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_repository.list(db)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Get a user by id",
)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_repository.get_by_id(db, user_id)


@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={**_VALIDATION, **_NOT_FOUND, **_CONFLICT},
    summary="Replace a user's name and email",
)
async def replace_user(
    user_id: UUID,
    payload: UserReplace,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_repository.update(db, user_id, payload.model_dump())


@router.patch(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={**_VALIDATION, **_NOT_FOUND, **_CONFLICT},
    summary="Update some of a user's fields",
)
async def patch_user(
    user_id: UUID,
    payload: UserPatch,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_repository.update(db, user_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Delete a user and all of their posts",
)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_repository.delete(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
