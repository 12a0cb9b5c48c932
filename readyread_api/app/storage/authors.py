"""Storage for the ``authors`` table."""

from ..schemas.author import Author
from .base import ResourceStorage


class AuthorStorage(ResourceStorage[Author]):
    table = "authors"
    record = Author
    columns = ("name", "surname")
