"""Pydantic models for genres."""

from pydantic import Field

from ..core.validators import Label
from .base import CamelModel


class Genre(CamelModel):
    id: int = Field(..., examples=[12])
    genre: str = Field(..., examples=["fantasy"])


class CreateGenreDTO(CamelModel):
    genre: Label = Field(..., examples=["fantasy"])


class UpdateGenreDTO(CreateGenreDTO):
    pass
