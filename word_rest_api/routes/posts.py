"""
Word REST API: Post Route Handlers
===================================

What:  /api/posts CRUD, with an optional ?user_id= filter on the listing.

Unknown author:
    POST /api/posts with a well-formed user_id that matches no user returns
    404 NOT_FOUND (the foreign key violation is translated in the repository).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.database import get_db_session
from word_rest_api.repositories.posts import post_repository
from word_rest_api.schemas.common import ErrorResponse
from word_rest_api.schemas.post import PostCreate, PostPatch, PostReplace, PostResponse

router = APIRouter(prefix="/api", tags=["Posts"])

_VALIDATION = {400: {"description": "Invalid input", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Post (or author) not found", "model": ErrorResponse}}


@router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Create a post for an existing user",
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_repository.create(db, payload)


@router.get(
    "/posts",
    response_model=List[PostResponse],
    responses=_VALIDATION,
    summary="List posts (newest first)",
)
async def list_posts(
    user_id: Optional[UUID] = Query(
        default=None,
        description="Only return posts written by this user",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await post_repository.list(db, user_id=user_id)


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Get a post by id",
)
async def get_post(
    post_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_repository.get_by_id(db, post_id)


@router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Replace a post's title and content",
)
async def replace_post(
    post_id: UUID,
    payload: PostReplace,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_repository.update(db, post_id, payload.model_dump())


@router.patch(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Update some of a post's fields",
)
async def patch_post(
    post_id: UUID,
    payload: PostPatch,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_repository.update(db, post_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Delete a post",
)
async def delete_post(
    post_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_repository.delete(db, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
