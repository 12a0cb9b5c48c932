import pytest

from readyread_api.app.core.errors import ValidationFailedError
from readyread_api.app.storage import build_partial_update

USER_COLUMNS = ("username", "email", "address", "phone_number", "password")


def test_single_column():
    sql, params = build_partial_update("authors", ("name", "surname"), {"surname": "Ivanov"}, 1)
    assert sql == "UPDATE authors SET surname = :p1 WHERE id = :p2"
    assert params == {"p1": "Ivanov", "p2": 1}


def test_columns_follow_declared_order_not_input_order():
    values = {"password": "hash", "username": "reader", "phone_number": "88005553535"}
    sql, params = build_partial_update("users", USER_COLUMNS, values, 42)
    assert sql == "UPDATE users SET username = :p1, phone_number = :p2, password = :p3 WHERE id = :p4"
    assert params == {"p1": "reader", "p2": "88005553535", "p3": "hash", "p4": 42}


def test_none_values_are_skipped():
    sql, params = build_partial_update("authors", ("name", "surname"), {"name": None, "surname": "Ivanov"}, 7)
    assert sql == "UPDATE authors SET surname = :p1 WHERE id = :p2"
    assert params["p2"] == 7


def test_unknown_keys_are_ignored():
    sql, _ = build_partial_update("genres", ("genre",), {"genre": "fantasy", "id": 99}, 3)
    assert sql == "UPDATE genres SET genre = :p1 WHERE id = :p2"


def test_all_columns():
    values = dict.fromkeys(USER_COLUMNS, "x")
    sql, params = build_partial_update("users", USER_COLUMNS, values, 1)
    assert sql.endswith("password = :p5 WHERE id = :p6")
    assert len(params) == 6


@pytest.mark.parametrize("values", [{}, {"name": None, "surname": None}])
def test_no_present_fields_is_rejected(values):
    with pytest.raises(ValidationFailedError) as exc:
        build_partial_update("authors", ("name", "surname"), values, 1)
    assert exc.value.message == "no fields to update"
    assert exc.value.status_code == 400
