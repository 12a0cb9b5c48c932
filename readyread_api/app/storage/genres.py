"""Storage for the ``genres`` table."""

from ..schemas.genre import Genre
from .base import ResourceStorage


class GenreStorage(ResourceStorage[Genre]):
    table = "genres"
    record = Genre
    columns = ("genre",)
