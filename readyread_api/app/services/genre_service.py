"""Service layer for genres."""

from ..schemas.genre import Genre
from .base import ResourceService


class GenreService(ResourceService[Genre]):
    name = "genre"
