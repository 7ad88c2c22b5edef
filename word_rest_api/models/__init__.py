# Importing the models registers their tables on Base.metadata
from word_rest_api.models.user import User
from word_rest_api.models.post import Post
from word_rest_api.models.vocabulary import Vocabulary

__all__ = ["User", "Post", "Vocabulary"]
