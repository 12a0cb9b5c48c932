"""
User endpoints: ``/api/users``.

Registration, lookup by id or by email and password, full and partial
profile updates, and deletion.  The stored password hash never leaves
the service layer; responses omit unset ``address``/``phoneNumber``.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from pydantic import ValidationError

from ...core.errors import ValidationFailedError, format_validation_errors
from ...schemas.user import EMAIL_ADAPTER, CreateUserDTO, UpdateUserDTO, UpdateUserPartiallyDTO, UserResponse
from ...services import UserService
from ..deps import get_user_service
from .resource import BIGINT_ID_MAX

router = APIRouter()
logger = logging.getLogger(__name__)

UserId = Annotated[int, Path(ge=0, le=BIGINT_ID_MAX, description="User id")]
Service = Annotated[UserService, Depends(get_user_service)]

CREDENTIAL_PARAMS = {"email", "password"}


@router.get("/{record_id}", response_model=UserResponse, response_model_exclude_none=True)
def get_user(record_id: UserId, service: Service):
    """Return the user with the given id."""
    logger.info("get user")
    return service.get_by_id(record_id)


@router.get("", response_model=UserResponse, response_model_exclude_none=True)
def get_user_by_email_and_password(request: Request, service: Service):
    """Return the user matching the ``email`` and ``password`` query parameters.

    Both parameters are required and no others are accepted.  A wrong
    password yields 400, an unknown email 404.  The email is normalized
    the way registration normalizes it (lowercase domain).
    """
    logger.info("get user by email and password")
    params = request.query_params
    email = params.get("email", "")
    password = params.get("password", "")
    if not email or not password or set(params.keys()) - CREDENTIAL_PARAMS:
        raise ValidationFailedError(
            "empty email or password",
            "email and password must be provided as the only query parameters",
        )
    # Stored emails went through EmailStr, so look up the same normalized form.
    try:
        email = EMAIL_ADAPTER.validate_python(email)
    except ValidationError as e:
        raise ValidationFailedError(format_validation_errors(e.errors()) or "invalid email") from None
    return service.get_by_email_and_password(email, password)


@router.post("", response_model=UserResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUserDTO, service: Service):
    """Register a new user.

    Fails with 400 when the passwords differ or the email is taken.
    """
    logger.info("create user")
    if payload.password != payload.repeat_password:
        raise ValidationFailedError("passwords don't match")
    return service.create(payload)


@router.put("/{record_id}", response_class=Response)
def update_user(record_id: UserId, payload: UpdateUserDTO, service: Service) -> Response:
    """Replace the user's profile; ``oldPassword`` must match."""
    logger.info("update user")
    service.update(record_id, payload)
    return Response(status_code=status.HTTP_200_OK)


@router.patch("/{record_id}", response_class=Response)
def update_user_partially(record_id: UserId, payload: UpdateUserPartiallyDTO, service: Service) -> Response:
    """Change the given profile fields or the password; ``oldPassword`` must match."""
    logger.info("update user partially")
    service.update_partially(record_id, payload)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{record_id}", response_class=Response)
def delete_user(record_id: UserId, service: Service) -> Response:
    logger.info("delete user")
    service.delete(record_id)
    return Response(status_code=status.HTTP_200_OK)
