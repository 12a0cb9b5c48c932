"""Storage for the ``languages`` table."""

from ..schemas.language import Language
from .base import ResourceStorage


class LanguageStorage(ResourceStorage[Language]):
    table = "languages"
    record = Language
    columns = ("language",)
