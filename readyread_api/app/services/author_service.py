"""Service layer for authors."""

from ..schemas.author import Author
from .base import ResourceService


class AuthorService(ResourceService[Author]):
    name = "author"
