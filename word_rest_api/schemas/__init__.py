from word_rest_api.schemas.common import ErrorResponse, ReadinessResponse
from word_rest_api.schemas.post import PostCreate, PostPatch, PostReplace, PostResponse
from word_rest_api.schemas.user import UserCreate, UserPatch, UserReplace, UserResponse
from word_rest_api.schemas.vocabulary import (
    VocabularyCreate,
    VocabularyPatch,
    VocabularyReplace,
    VocabularyResponse,
)

__all__ = [
    "ErrorResponse",
    "ReadinessResponse",
    "PostCreate",
    "PostPatch",
    "PostReplace",
    "PostResponse",
    "UserCreate",
    "UserPatch",
    "UserReplace",
    "UserResponse",
    "VocabularyCreate",
    "VocabularyPatch",
    "VocabularyReplace",
    "VocabularyResponse",
]
