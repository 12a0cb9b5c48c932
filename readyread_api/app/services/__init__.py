"""
Service layer abstraction.

Each service encapsulates the rules of one resource and talks to its
storage only.  Services never format SQL and never look at HTTP
requests; they take DTOs and return records or raise ``AppError``
subclasses.
"""

from .author_service import AuthorService
from .base import ResourceService
from .genre_service import GenreService
from .language_service import LanguageService
from .user_service import UserService

__all__ = [
    "AuthorService",
    "GenreService",
    "LanguageService",
    "ResourceService",
    "UserService",
]
