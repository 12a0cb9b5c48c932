"""User lookups against the SQLite engine."""

import pytest

from readyread_api.app.core.errors import NoRowsError
from readyread_api.app.schemas.user import CreateUserDTO
from readyread_api.app.services import UserService
from readyread_api.app.storage import UserStorage


@pytest.fixture
def storage(engine):
    return UserStorage(engine)


@pytest.fixture
def service(storage):
    return UserService(storage)


@pytest.fixture
def reader(service):
    return service.create(
        CreateUserDTO(
            email="reader@readyread.io",
            username="reader",
            password="qwERty12",
            repeat_password="qwERty12",
            phone_number="88005553535",
        )
    )


def test_find_by_username(storage, reader):
    found = storage.find_by_username("reader")
    assert found.id == reader.id
    assert found.email == "reader@readyread.io"
    assert found.phone_number == "88005553535"
    assert found.verified is False
    assert found.password == reader.password


def test_find_by_username_absent(storage, reader):
    with pytest.raises(NoRowsError):
        storage.find_by_username("nobody")


def test_get_by_username(service, reader):
    assert service.get_by_username("reader").id == reader.id
    with pytest.raises(NoRowsError):
        service.get_by_username("Reader")


def test_find_by_email(storage, reader):
    assert storage.find_by_email("reader@readyread.io").id == reader.id
    with pytest.raises(NoRowsError):
        storage.find_by_email("nobody@readyread.io")
