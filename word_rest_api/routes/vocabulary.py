"""
Word REST API: Vocabulary Route Handlers
=========================================

What:  /api/vocabulary CRUD plus GET /api/vocabulary/random.

/random is registered before /{vocabulary_id} so the literal path wins.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from word_rest_api.database import get_db_session
from word_rest_api.repositories.vocabulary import vocabulary_repository
from word_rest_api.schemas.common import ErrorResponse
from word_rest_api.schemas.vocabulary import (
    VocabularyCreate,
    VocabularyPatch,
    VocabularyReplace,
    VocabularyResponse,
)

router = APIRouter(prefix="/api", tags=["Vocabulary"])

_VALIDATION = {400: {"description": "Invalid input", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Vocabulary entry not found", "model": ErrorResponse}}

# Upper bound is the storage INTEGER range.
VocabularyId = Annotated[
    int, Path(ge=1, le=2_147_483_647, description="Sequential vocabulary id")
]


@router.post(
    "/vocabulary",
    response_model=VocabularyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_VALIDATION,
    summary="Add a vocabulary entry",
)
async def create_vocabulary(
    payload: VocabularyCreate,
    db: AsyncSession = Depends(get_db_session),
) -> VocabularyResponse:
    return await vocabulary_repository.create(db, payload)


@router.get(
    "/vocabulary",
    response_model=List[VocabularyResponse],
    summary="List vocabulary (newest first)",
)
async def list_vocabulary(
    db: AsyncSession = Depends(get_db_session),
) -> List[VocabularyResponse]:
    return await vocabulary_repository.list(db)


@router.get(
    "/vocabulary/random",
    response_model=VocabularyResponse,
    responses={404: {"description": "No vocabulary entries yet", "model": ErrorResponse}},
    summary="Get one random vocabulary entry",
)
async def random_vocabulary(
    db: AsyncSession = Depends(get_db_session),
) -> VocabularyResponse:
    return await vocabulary_repository.random(db)


@router.get(
    "/vocabulary/{vocabulary_id}",
    response_model=VocabularyResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Get a vocabulary entry by id",
)
async def get_vocabulary(
    vocabulary_id: VocabularyId,
    db: AsyncSession = Depends(get_db_session),
) -> VocabularyResponse:
    return await vocabulary_repository.get_by_id(db, vocabulary_id)


@router.put(
    "/vocabulary/{vocabulary_id}",
    response_model=VocabularyResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Replace a vocabulary entry",
)
async def replace_vocabulary(
    payload: VocabularyReplace,
    vocabulary_id: VocabularyId,
    db: AsyncSession = Depends(get_db_session),
) -> VocabularyResponse:
    return await vocabulary_repository.update(db, vocabulary_id, payload.model_dump())


@router.patch(
    "/vocabulary/{vocabulary_id}",
    response_model=VocabularyResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Update some fields of a vocabulary entry",
)
async def patch_vocabulary(
    payload: VocabularyPatch,
    vocabulary_id: VocabularyId,
    db: AsyncSession = Depends(get_db_session),
) -> VocabularyResponse:
    return await vocabulary_repository.update(
        db, vocabulary_id, payload.model_dump(exclude_unset=True)
    )


@router.delete(
    "/vocabulary/{vocabulary_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Delete a vocabulary entry",
)
async def delete_vocabulary(
    vocabulary_id: VocabularyId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await vocabulary_repository.delete(db, vocabulary_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
