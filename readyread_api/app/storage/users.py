"""
Storage for the ``users`` table.

Column order for inserts and partial updates is ``username, email,
address, phone_number, password``.  A full update never touches the
password column; password changes go through the partial update with
an already hashed value.

``verified`` and ``registered_at`` are filled in by the database and
read back with ``RETURNING``.  The only unique index is on ``email``,
so any integrity violation is reported as ``EmailTakenError``; this is
what a concurrent registration that slipped past the service's
pre‑check runs into.
"""

import logging

from sqlalchemy.exc import IntegrityError

from ..core.errors import EmailTakenError
from ..schemas.user import User
from .base import ResourceStorage


class UserStorage(ResourceStorage[User]):
    table = "users"
    record = User
    columns = ("username", "email", "address", "phone_number", "password")
    update_columns = ("username", "email", "address", "phone_number")
    select_columns = (
        "id",
        "username",
        "email",
        "password",
        "verified",
        "address",
        "phone_number",
        "registered_at",
    )
    returning_columns = ("id", "verified", "registered_at")

    def _integrity_error(self, action: str, error: IntegrityError) -> None:
        logger = logging.getLogger(__name__)
        logger.warning("unique violation on %s: %s", action, error.orig)
        raise EmailTakenError() from error

    def find_by_email(self, email: str) -> User:
        return self.find_one_by("email", email)

    def find_by_username(self, username: str) -> User:
        return self.find_one_by("username", username)
