"""
Storage layer.

One storage per resource translates between records and rows.  Every
method builds a parameterized SQL statement, runs it on a connection
borrowed from the shared engine and maps the driver outcome to a
record, ``NoRowsError`` or ``StorageError``.  Nothing above this layer
formats SQL.
"""

from .authors import AuthorStorage
from .base import ResourceStorage, build_partial_update
from .genres import GenreStorage
from .languages import LanguageStorage
from .users import UserStorage

__all__ = [
    "AuthorStorage",
    "GenreStorage",
    "LanguageStorage",
    "ResourceStorage",
    "UserStorage",
    "build_partial_update",
]
