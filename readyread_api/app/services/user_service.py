"""
Business logic for users.

On top of the generic CRUD flow, ``UserService``:

* refuses to register a second user with an email already on file;
* hashes passwords before they reach storage;
* requires the current password (``oldPassword``) for every update
  and compares it with the stored hash in constant time;
* looks users up by email and password for the credential check.
"""

import logging
from typing import Any, Callable, Dict

from pydantic import BaseModel

from ..core.errors import AppError, EmailTakenError, NoRowsError, WrongPasswordError
from ..core.security import hash_password, verify_password
from ..schemas.user import CreateUserDTO, UpdateUserDTO, UpdateUserPartiallyDTO, User
from ..storage.users import UserStorage
from .base import ResourceService

PROFILE_FIELDS = {"username", "email", "address", "phone_number"}


class UserService(ResourceService[User]):
    """Service for registering, looking up and updating users."""

    name = "user"
    storage: UserStorage

    def to_values(self, dto: BaseModel) -> Dict[str, Any]:
        return dto.model_dump(include=PROFILE_FIELDS)

    def create(self, dto: CreateUserDTO) -> User:
        """Register a new user.

        Raises ``EmailTakenError`` if the email is already registered.
        Any lookup failure other than "no rows" aborts the registration.
        """
        logger = logging.getLogger(__name__)
        logger.info("Registering user %s", dto.email)
        try:
            self.storage.find_by_email(dto.email)
        except NoRowsError:
            pass
        else:
            raise EmailTakenError()

        values = self.to_values(dto)
        values["password"] = hash_password(dto.password)
        user = self.storage.create(values)
        logger.info("Created user %s", user.id)
        return user

    def _find(self, lookup: str, finder: Callable[[str], User], value: str) -> User:
        logger = logging.getLogger(__name__)
        try:
            return finder(value)
        except NoRowsError:
            raise
        except AppError as e:
            logger.warning("cannot find user by %s: %s", lookup, e.developer_message or e)
            raise

    def get_by_email_and_password(self, email: str, password: str) -> User:
        """Return the user if ``password`` matches; else ``WrongPasswordError``.

        An unknown email raises ``NoRowsError``.
        """
        user = self._find("email", self.storage.find_by_email, email)
        if not verify_password(password, user.password):
            raise WrongPasswordError()
        return user

    def get_by_username(self, username: str) -> User:
        return self._find("username", self.storage.find_by_username, username)

    def _authorize(self, record_id: int, old_password: str) -> User:
        current = self._load_for_update(record_id)
        if not verify_password(old_password, current.password):
            raise WrongPasswordError()
        return current

    def update(self, record_id: int, dto: UpdateUserDTO) -> None:
        """Replace the profile fields; the password stays as it is."""
        self._authorize(record_id, dto.old_password)
        self._write(self.storage.update, "update", record_id, self.to_values(dto))

    def update_partially(self, record_id: int, dto: UpdateUserPartiallyDTO) -> None:
        """Change the given profile fields and, optionally, the password."""
        self._authorize(record_id, dto.old_password)
        values = self.to_values(dto)
        if dto.new_password is not None:
            values["password"] = hash_password(dto.new_password)
        self._write(self.storage.update_partially, "partially update", record_id, values)
