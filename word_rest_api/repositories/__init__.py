"""
Word REST API: Repository Layer
================================

What:  One repository per resource, sitting between routes (HTTP) and the
       database. Each exposes create / get_by_id / list / update / delete and
       raises only domain errors from word_rest_api.exceptions.

Repository Inventory:
    - UserRepository:        users, unique email
    - PostRepository:        posts, foreign key to users (cascade on delete)
    - VocabularyRepository:  vocabulary, plus random()
"""

from word_rest_api.repositories.posts import PostRepository, post_repository
from word_rest_api.repositories.users import UserRepository, user_repository
from word_rest_api.repositories.vocabulary import VocabularyRepository, vocabulary_repository

__all__ = [
    "PostRepository",
    "UserRepository",
    "VocabularyRepository",
    "post_repository",
    "user_repository",
    "vocabulary_repository",
]
