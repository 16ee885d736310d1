import datetime as _dt
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    id: int
    user_name: str
    email: str
    password_hash: str
    phone_number: str
    identificator: str
    location: str
    created_at: _dt.datetime
    updated_at: _dt.datetime


# ---------- Commands ----------
@dataclass(frozen=True, slots=True)
class SignUpCommand:
    user_name: str
    email: str
    password: str
    phone_number: str
    identificator: str
    location: str


@dataclass(frozen=True, slots=True)
class SignInCommand:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UpdateUserProfileCommand:
    user_id: int
    user_name: str | None = None
    email: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateUserPasswordCommand:
    user_id: int
    current_password: str
    new_password: str


@dataclass(frozen=True, slots=True)
class DeleteUserCommand:
    user_id: int


# ---------- Queries ----------
@dataclass(frozen=True, slots=True)
class GetUserByIdQuery:
    user_id: int


@dataclass(frozen=True, slots=True)
class GetUserByEmailQuery:
    email: str
