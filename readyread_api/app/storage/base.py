"""
Generic table storage.

``ResourceStorage`` implements create / find / update / partial update
/ delete for a table with an integer ``id`` primary key.  Subclasses
only declare the table name, the record schema and the column lists:

``columns``
    Mutable columns in their fixed order.  ``INSERT``, full ``UPDATE``
    and the partial ``UPDATE`` builder all walk this order, so emitted
    SQL is deterministic.
``update_columns``
    Columns overwritten by a full ``update``; ``columns`` by default.
``select_columns``
    Columns read back by ``find_*``; ``id`` plus ``columns`` by default.
``returning_columns``
    Server‑assigned columns read back after ``INSERT``.

Placeholders are SQLAlchemy named binds ``:p1``, ``:p2``, ... numbered
in the order their values are appended.
"""

import logging
from typing import Any, Dict, Generic, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.errors import NoRowsError, StorageError, ValidationFailedError

R = TypeVar("R", bound=BaseModel)


def _assignments(
    columns: Sequence[str], values: Mapping[str, Any], record_id: int
) -> Tuple[str, Dict[str, Any]]:
    """Render ``col = :pN`` pairs for every non‑null value, then the id."""
    assignments = []
    params: Dict[str, Any] = {}
    arg_id = 1
    for column in columns:
        value = values.get(column)
        if value is None:
            continue
        assignments.append(f"{column} = :p{arg_id}")
        params[f"p{arg_id}"] = value
        arg_id += 1
    if not assignments:
        raise ValidationFailedError(
            "no fields to update",
            "provide at least one field to change",
        )
    params[f"p{arg_id}"] = record_id
    return f"SET {', '.join(assignments)} WHERE id = :p{arg_id}", params


def build_partial_update(
    table: str, columns: Sequence[str], values: Mapping[str, Any], record_id: int
) -> Tuple[str, Dict[str, Any]]:
    """Build an ``UPDATE`` that sets only the columns present in ``values``.

    A column counts as present when its value is not ``None``.  Columns
    are visited in ``columns`` order, the id is bound last.

    >>> build_partial_update("authors", ("name", "surname"), {"surname": "Ivanov"}, 1)
    ('UPDATE authors SET surname = :p1 WHERE id = :p2', {'p1': 'Ivanov', 'p2': 1})

    Raises
    ------
    ValidationFailedError
        If no column is present.
    """
    clause, params = _assignments(columns, values, record_id)
    return f"UPDATE {table} {clause}", params


class ResourceStorage(Generic[R]):
    """Storage for one table; see the module docstring."""

    table: str = ""
    record: Type[R]
    columns: Tuple[str, ...] = ()
    update_columns: Tuple[str, ...] = ()
    select_columns: Tuple[str, ...] = ()
    returning_columns: Tuple[str, ...] = ("id",)

    def __init__(self, engine: Engine, request_timeout: int = 5) -> None:
        self.engine = engine
        self.request_timeout = request_timeout
        if not self.update_columns:
            self.update_columns = self.columns
        if not self.select_columns:
            self.select_columns = ("id",) + self.columns

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _fail(self, action: str, error: SQLAlchemyError) -> None:
        logger = logging.getLogger(__name__)
        message = f"failed to execute {action} query: {error}"
        logger.error(message)
        raise StorageError(developer_message=message) from error

    def _integrity_error(self, action: str, error: IntegrityError) -> None:
        self._fail(action, error)

    def _query_one(self, action: str, sql: str, params: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(text(sql), params).mappings().first()
                return dict(row) if row is not None else None
        except IntegrityError as e:
            self._integrity_error(action, e)
        except SQLAlchemyError as e:
            self._fail(action, e)

    def _execute(self, action: str, sql: str, params: Mapping[str, Any]) -> int:
        try:
            with self.engine.begin() as conn:
                return conn.execute(text(sql), params).rowcount
        except IntegrityError as e:
            self._integrity_error(action, e)
        except SQLAlchemyError as e:
            self._fail(action, e)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, values: Mapping[str, Any]) -> R:
        """Insert a row and return the record with its id filled in.

        Columns missing from ``values`` are inserted as NULL.
        """
        placeholders = ", ".join(f":p{i}" for i in range(1, len(self.columns) + 1))
        sql = (
            f"INSERT INTO {self.table} ({', '.join(self.columns)}) "
            f"VALUES ({placeholders}) "
            f"RETURNING {', '.join(self.returning_columns)}"
        )
        params = {f"p{i}": values.get(column) for i, column in enumerate(self.columns, start=1)}
        row = self._query_one(f"create {self.table}", sql, params)
        return self.record.model_validate({**values, **row})

    def find_one_by(self, column: str, value: Any) -> R:
        """Return the single row whose ``column`` equals ``value``."""
        sql = f"SELECT {', '.join(self.select_columns)} FROM {self.table} WHERE {column} = :p1"
        row = self._query_one(f"find {self.table} by {column}", sql, {"p1": value})
        if row is None:
            raise NoRowsError()
        return self.record.model_validate(row)

    def find_by_id(self, record_id: int) -> R:
        return self.find_one_by("id", record_id)

    def update(self, record_id: int, values: Mapping[str, Any]) -> None:
        """Overwrite every column in ``update_columns``."""
        missing = [column for column in self.update_columns if values.get(column) is None]
        if missing:
            raise ValidationFailedError(developer_message=f"missing values for {', '.join(missing)}")
        clause, params = _assignments(self.update_columns, values, record_id)
        affected = self._execute(f"update {self.table}", f"UPDATE {self.table} {clause}", params)
        if affected == 0:
            raise NoRowsError()

    def update_partially(self, record_id: int, values: Mapping[str, Any]) -> None:
        """Overwrite only the columns whose value is not ``None``."""
        sql, params = build_partial_update(self.table, self.columns, values, record_id)
        affected = self._execute(f"partially update {self.table}", sql, params)
        if affected == 0:
            raise NoRowsError()

    def delete(self, record_id: int) -> None:
        affected = self._execute(f"delete {self.table}", f"DELETE FROM {self.table} WHERE id = :p1", {"p1": record_id})
        if affected == 0:
            raise NoRowsError()
