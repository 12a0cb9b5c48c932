"""Pydantic models for authors."""

from typing import Optional

from pydantic import Field

from ..core.validators import Label
from .base import CamelModel


class Author(CamelModel):
    id: int = Field(..., examples=[123])
    name: str = Field(..., examples=["Ilya"])
    surname: str = Field(..., examples=["Sokolov"])


class CreateAuthorDTO(CamelModel):
    name: Label = Field(..., examples=["Ilya"])
    surname: Label = Field(..., examples=["Sokolov"])


class UpdateAuthorDTO(CreateAuthorDTO):
    pass


class UpdateAuthorPartiallyDTO(CamelModel):
    """All fields optional; only provided values are written."""

    name: Optional[Label] = None
    surname: Optional[Label] = None
