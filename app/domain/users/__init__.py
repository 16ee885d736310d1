from .models import (
    DeleteUserCommand,
    GetUserByEmailQuery,
    GetUserByIdQuery,
    SignInCommand,
    SignUpCommand,
    UpdateUserPasswordCommand,
    UpdateUserProfileCommand,
    User,
)
from .repository import InMemoryUserRepository, UserRepository
from .security import PasswordHasher, TokenService
from .services import UserCommandService, UserQueryService

__all__ = [
    'DeleteUserCommand',
    'GetUserByEmailQuery',
    'GetUserByIdQuery',
    'InMemoryUserRepository',
    'PasswordHasher',
    'SignInCommand',
    'SignUpCommand',
    'TokenService',
    'UpdateUserPasswordCommand',
    'UpdateUserProfileCommand',
    'User',
    'UserCommandService',
    'UserQueryService',
    'UserRepository',
]
