"""Service layer for languages."""

from ..schemas.language import Language
from .base import ResourceService


class LanguageService(ResourceService[Language]):
    name = "language"
