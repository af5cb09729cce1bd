from __future__ import annotations
from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

MIN_PASSWORD_LENGTH = 6


def _check_username(value: str | None) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError("username_required", "Username is required")
    return value


def _check_email(value: str | None) -> str:
    try:
        validate_email(value or "", check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email_invalid", "Please include a valid email")
    return value  # type: ignore[return-value]


def _check_password(value: str | None) -> str:
    if value is None or len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError(
            "password_too_short",
            "Please enter a password with {min_length} or more characters",
            {"min_length": MIN_PASSWORD_LENGTH},
        )
    return value


class SignupIn(BaseModel):
    """Missing keys default to "" so every check reports its own message.

    A request with no body at all is validated as `{}` by the signup route.
    """

    username: str = ""
    email: str = ""
    password: str = ""
    first_name: str | None = None

    # validate_default: an omitted key must fail its check like an empty one
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_default=True)

    check_username = field_validator("username")(_check_username)
    check_email = field_validator("email")(_check_email)
    check_password = field_validator("password")(_check_password)


class AccountUpdate(BaseModel):
    """Partial update: only keys present in the request are applied."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    exercise_choice: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    check_username = field_validator("username")(_check_username)
    check_email = field_validator("email")(_check_email)
    check_password = field_validator("password")(_check_password)

    def present_fields(self) -> dict:
        """Attribute-keyed dict of the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class AccountOut(BaseModel):
    """Stored account as returned to clients; the password hash never leaves."""

    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    exercise_choice: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None
    profile_completed: bool = False
    verified: bool = False
    verification_token: str
    date: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class TokenOut(BaseModel):
    token: str


class MessageOut(BaseModel):
    msg: str
