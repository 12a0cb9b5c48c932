"""Service rules checked against an in-memory fake storage."""

from datetime import datetime

import pytest

from readyread_api.app.core.errors import (
    EmailTakenError,
    NoRowsError,
    StorageError,
    ValidationFailedError,
    WrongPasswordError,
)
from readyread_api.app.core.security import hash_password, verify_password
from readyread_api.app.schemas.author import UpdateAuthorPartiallyDTO
from readyread_api.app.schemas.user import CreateUserDTO, UpdateUserDTO, UpdateUserPartiallyDTO, User
from readyread_api.app.services import AuthorService, UserService
from readyread_api.app.storage.base import build_partial_update


class FakeUserStorage:
    def __init__(self):
        self.rows = {}
        self.updates = []
        self.fail_lookups = False

    def create(self, values):
        record_id = len(self.rows) + 1
        user = User.model_validate({**values, "id": record_id, "registered_at": datetime(2023, 9, 1)})
        self.rows[record_id] = user
        return user

    def find_by_email(self, email):
        if self.fail_lookups:
            raise StorageError(developer_message="connection refused")
        for user in self.rows.values():
            if user.email == email:
                return user
        raise NoRowsError()

    def find_by_id(self, record_id):
        if record_id not in self.rows:
            raise NoRowsError()
        return self.rows[record_id]

    def update(self, record_id, values):
        self.updates.append(("update", record_id, values))

    def update_partially(self, record_id, values):
        # Same empty-update rule as the real storage.
        build_partial_update("users", ("username", "email", "address", "phone_number", "password"), values, record_id)
        self.updates.append(("update_partially", record_id, values))


@pytest.fixture
def storage():
    return FakeUserStorage()


@pytest.fixture
def service(storage):
    return UserService(storage)


def registration(email="reader@readyread.io", password="qwERty12"):
    return CreateUserDTO(email=email, username="reader", password=password, repeat_password=password)


def test_create_hashes_password(service, storage):
    user = service.create(registration())
    assert user.id == 1
    assert user.password != "qwERty12"
    assert verify_password("qwERty12", storage.rows[1].password)


def test_create_refuses_taken_email(service):
    service.create(registration())
    with pytest.raises(EmailTakenError):
        service.create(registration())


def test_create_aborts_when_lookup_fails(service, storage):
    storage.fail_lookups = True
    with pytest.raises(StorageError):
        service.create(registration())
    assert storage.rows == {}


def test_credentials(service):
    created = service.create(registration())
    assert service.get_by_email_and_password("reader@readyread.io", "qwERty12").id == created.id
    with pytest.raises(WrongPasswordError):
        service.get_by_email_and_password("reader@readyread.io", "wrong")
    with pytest.raises(NoRowsError):
        service.get_by_email_and_password("nobody@readyread.io", "qwERty12")


def test_update_requires_old_password(service, storage):
    service.create(registration())
    dto = UpdateUserDTO(
        email="reader@readyread.io",
        username="reader2",
        address="Moscow",
        phone_number="88005553535",
        old_password="wrong1",
    )
    with pytest.raises(WrongPasswordError):
        service.update(1, dto)
    assert storage.updates == []


def test_update_never_writes_password(service, storage):
    service.create(registration())
    dto = UpdateUserDTO(
        email="reader@readyread.io",
        username="reader2",
        address="Moscow",
        phone_number="88005553535",
        old_password="qwERty12",
    )
    service.update(1, dto)
    (_, record_id, values), = storage.updates
    assert record_id == 1
    assert values == {
        "email": "reader@readyread.io",
        "username": "reader2",
        "address": "Moscow",
        "phone_number": "88005553535",
    }


def test_update_of_missing_user(service):
    dto = UpdateUserPartiallyDTO(username="reader2", old_password="qwERty12")
    with pytest.raises(NoRowsError):
        service.update_partially(5, dto)


def test_partial_update_hashes_new_password(service, storage):
    service.create(registration())
    service.update_partially(1, UpdateUserPartiallyDTO(old_password="qwERty12", new_password="n3wPassword"))
    (_, _, values), = storage.updates
    assert values["username"] is None
    assert verify_password("n3wPassword", values["password"])


def test_partial_update_without_fields(service, storage):
    service.create(registration())
    with pytest.raises(ValidationFailedError):
        service.update_partially(1, UpdateUserPartiallyDTO(old_password="qwERty12"))
    assert storage.updates == []


class FakeAuthorStorage:
    def __init__(self):
        self.calls = []

    def find_by_id(self, record_id):
        raise NoRowsError()

    def update_partially(self, record_id, values):
        self.calls.append(values)


def test_author_update_checks_existence_first():
    storage = FakeAuthorStorage()
    with pytest.raises(NoRowsError):
        AuthorService(storage).update_partially(1, UpdateAuthorPartiallyDTO(surname="Ivanov"))
    assert storage.calls == []


def test_stored_hash_is_not_serialised():
    user = User(
        id=1,
        email="reader@readyread.io",
        username="reader",
        password=hash_password("qwERty12"),
        registered_at=datetime(2023, 9, 1, 10, 30),
    )
    dumped = user.model_dump(by_alias=True)
    assert "password" not in dumped
    assert dumped["registeredAt"] == "01-09-2023"
    assert dumped["phoneNumber"] is None
