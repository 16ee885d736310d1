from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from app.domain.common.utils import StringUtils
from app.domain.users import (
    SignInCommand,
    SignUpCommand,
    UpdateUserPasswordCommand,
    UpdateUserProfileCommand,
    User,
)

_MIN_PASSWORD_LENGTH = 5

# passwords are taken verbatim, everything else is trimmed
Stripped = Annotated[str, StringConstraints(strip_whitespace=True)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=StringUtils.to_camel,
        populate_by_name=True,
    )


def _check_email(value: str) -> str:
    if not StringUtils.is_email(value):
        msg = 'email must be a valid address'
        raise ValueError(msg)
    return value


def _check_phone(value: str) -> str:
    if not StringUtils.is_phone(value):
        msg = 'phone number must include the country prefix, e.g. +51987654321'
        raise ValueError(msg)
    return value


# noinspection PyNestedDecorators
class SignUpUserResource(CamelModel):
    user_name: Stripped = Field(..., min_length=1, max_length=100)
    email: Stripped
    password: str = Field(..., min_length=_MIN_PASSWORD_LENGTH)
    phone_number: Stripped
    identificator: Stripped = Field(..., description='National id, exactly 8 digits')

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator('phone_number')
    @classmethod
    def validate_phone_number(cls, value: str) -> str:
        return _check_phone(value)

    @field_validator('identificator')
    @classmethod
    def validate_identificator(cls, value: str) -> str:
        if not StringUtils.is_identificator(value):
            msg = 'identificator must be exactly 8 digits'
            raise ValueError(msg)
        return value

    def to_command(self, location: str) -> SignUpCommand:
        return SignUpCommand(
            user_name=self.user_name,
            email=self.email,
            password=self.password,
            phone_number=self.phone_number,
            identificator=self.identificator,
            location=location,
        )


class SignInUserResource(CamelModel):
    email: Stripped
    password: str

    def to_command(self) -> SignInCommand:
        return SignInCommand(email=self.email, password=self.password)


# noinspection PyNestedDecorators
class UpdateUserProfileResource(CamelModel):
    user_name: Stripped | None = Field(None, min_length=1, max_length=100)
    email: Stripped | None = None
    phone_number: Stripped | None = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return None if value is None else _check_email(value)

    @field_validator('phone_number')
    @classmethod
    def validate_phone_number(cls, value: str | None) -> str | None:
        return None if value is None else _check_phone(value)

    def to_command(self, user_id: int) -> UpdateUserProfileCommand:
        return UpdateUserProfileCommand(
            user_id=user_id,
            user_name=self.user_name,
            email=self.email,
            phone_number=self.phone_number,
        )


class UpdateUserPasswordResource(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=_MIN_PASSWORD_LENGTH)

    def to_command(self, user_id: int) -> UpdateUserPasswordCommand:
        return UpdateUserPasswordCommand(
            user_id=user_id,
            current_password=self.current_password,
            new_password=self.new_password,
        )


class UserResource(CamelModel):
    id: int
    user_name: str
    email: str
    phone_number: str
    identificator: str
    location: str

    @classmethod
    def from_entity(cls, user: User) -> 'UserResource':
        return cls(
            id=user.id,
            user_name=user.user_name,
            email=user.email,
            phone_number=user.phone_number,
            identificator=user.identificator,
            location=user.location,
        )


class AuthenticatedUserResource(CamelModel):
    id: int
    user_name: str
    email: str
    token: str

    @classmethod
    def from_entity(cls, user: User, token: str) -> 'AuthenticatedUserResource':
        return cls(id=user.id, user_name=user.user_name, email=user.email, token=token)
