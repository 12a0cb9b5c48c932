"""Pydantic models for languages."""

from pydantic import Field

from ..core.validators import Label
from .base import CamelModel


class Language(CamelModel):
    id: int = Field(..., examples=[3])
    language: str = Field(..., examples=["ru"])


class CreateLanguageDTO(CamelModel):
    language: Label = Field(..., examples=["ru"])


class UpdateLanguageDTO(CreateLanguageDTO):
    pass
