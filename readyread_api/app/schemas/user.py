"""
Pydantic models for user data.

``User`` is the stored record.  It carries the password hash so that
services can verify credentials, but the field is excluded from
serialisation.  Routes declare ``UserResponse``, which FastAPI fills
from the serialised ``User``, so the hash never reaches a client.

Optional ``address`` and ``phoneNumber`` are left out of responses
when unset (routes use ``response_model_exclude_none``), and
``registeredAt`` is rendered as ``DD-MM-YYYY``.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, TypeAdapter, field_serializer, field_validator

from ..core.validators import Address, OldPassword, Password, PhoneNumber, Username
from .base import CamelModel

# Normalizes an email exactly as the DTOs below do.
EMAIL_ADAPTER = TypeAdapter(EmailStr)


class User(CamelModel):
    """A user as stored in the ``users`` table."""

    id: int = Field(..., examples=[123])
    email: str = Field(..., examples=["admin@example.com"])
    username: str = Field(..., examples=["admin"])
    password: str = Field(..., exclude=True, repr=False)
    verified: bool = Field(False, examples=[True])
    address: Optional[str] = Field(None, examples=["Russia, Moscow, Malaya Semenovskaya, 12"])
    phone_number: Optional[str] = Field(None, examples=["88005553535"])
    registered_at: datetime

    @field_serializer("registered_at")
    def format_registered_at(self, value: datetime) -> str:
        return value.strftime("%d-%m-%Y")


class CreateUserDTO(CamelModel):
    """Schema for registering a user.

    ``password`` and ``repeatPassword`` are validated independently;
    the endpoint checks that they match afterwards.
    """

    email: EmailStr = Field(..., examples=["admin@example.com"])
    username: Username = Field(..., examples=["admin"])
    password: Password = Field(..., examples=["qwERty123"])
    repeat_password: Password = Field(..., examples=["qwERty123"])
    address: Optional[Address] = Field(None, examples=["Russia, Moscow, Malaya Semenovskaya, 12"])
    phone_number: Optional[PhoneNumber] = Field(None, examples=["88005553535"])


class UpdateUserDTO(CamelModel):
    """Schema for replacing a user's profile.

    Every profile field is required.  ``oldPassword`` authorises the
    change and is never written.
    """

    email: EmailStr
    username: Username
    address: Address
    phone_number: PhoneNumber
    old_password: OldPassword


class UpdateUserPartiallyDTO(CamelModel):
    """Schema for partially updating a user.

    Only ``oldPassword`` is required; every other field left out (or
    sent as ``null``) keeps its stored value.
    """

    email: Optional[EmailStr] = None
    username: Optional[Username] = None
    address: Optional[Address] = None
    phone_number: Optional[PhoneNumber] = None
    old_password: OldPassword
    new_password: Optional[Password] = None


class UserResponse(CamelModel):
    """A user as returned to clients: no password, date as ``DD-MM-YYYY``."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    verified: bool
    address: Optional[str] = None
    phone_number: Optional[str] = None
    registered_at: str = Field(..., examples=["01-09-2023"])

    @field_validator("registered_at", mode="before")
    @classmethod
    def format_registered_at(cls, value):
        if isinstance(value, datetime):
            return value.strftime("%d-%m-%Y")
        return value
