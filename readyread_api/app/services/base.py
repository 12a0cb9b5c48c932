"""
Generic resource service.

``ResourceService`` sits between the routers and a ``ResourceStorage``.
It turns DTOs into column values and checks that a record exists
before updating it, so that "not found" (404) is told apart from
"nothing changed".  ``NoRowsError`` always passes through unchanged;
other failures are logged here and re‑raised for the exception
handlers.
"""

import logging
from typing import Any, Callable, Dict, Generic, TypeVar

from pydantic import BaseModel

from ..core.errors import AppError, NoRowsError
from ..storage.base import ResourceStorage

R = TypeVar("R", bound=BaseModel)


class ResourceService(Generic[R]):
    """CRUD service over one storage."""

    name: str = "resource"

    def __init__(self, storage: ResourceStorage[R]) -> None:
        self.storage = storage

    def to_values(self, dto: BaseModel) -> Dict[str, Any]:
        """Map a DTO onto column values; field names match columns."""
        return dto.model_dump()

    def create(self, dto: BaseModel) -> R:
        """Insert a new record built from ``dto`` and return it."""
        logger = logging.getLogger(__name__)
        record = self.storage.create(self.to_values(dto))
        logger.info("Created %s %s", self.name, getattr(record, "id", None))
        return record

    def get_by_id(self, record_id: int) -> R:
        """Return the record or raise ``NoRowsError``."""
        logger = logging.getLogger(__name__)
        try:
            return self.storage.find_by_id(record_id)
        except NoRowsError:
            raise
        except AppError as e:
            logger.warning("cannot find %s by id: %s", self.name, e.developer_message or e)
            raise

    def _load_for_update(self, record_id: int) -> R:
        logger = logging.getLogger(__name__)
        try:
            return self.get_by_id(record_id)
        except NoRowsError:
            raise
        except AppError as e:
            logger.error("failed to get %s: %s", self.name, e.developer_message or e)
            raise

    def update(self, record_id: int, dto: BaseModel) -> None:
        """Replace every mutable field of an existing record."""
        self._load_for_update(record_id)
        self._write(self.storage.update, "update", record_id, self.to_values(dto))

    def update_partially(self, record_id: int, dto: BaseModel) -> None:
        """Replace only the fields ``dto`` carries a value for."""
        self._load_for_update(record_id)
        self._write(self.storage.update_partially, "partially update", record_id, self.to_values(dto))

    def _write(
        self,
        operation: Callable[[int, Dict[str, Any]], None],
        action: str,
        record_id: int,
        values: Dict[str, Any],
    ) -> None:
        logger = logging.getLogger(__name__)
        try:
            operation(record_id, values)
        except NoRowsError:
            raise
        except AppError as e:
            if e.status_code >= 500:
                logger.error("failed to %s %s: %s", action, self.name, e.developer_message or e)
            raise
        logger.info("%s %s %s", action.capitalize(), self.name, record_id)

    def delete(self, record_id: int) -> None:
        logger = logging.getLogger(__name__)
        try:
            self.storage.delete(record_id)
        except NoRowsError:
            raise
        except AppError as e:
            logger.warning("failed to delete %s: %s", self.name, e.developer_message or e)
            raise
        logger.info("Deleted %s %s", self.name, record_id)
