from dataclasses import replace
from functools import singledispatchmethod
from typing import Any

from app.core.logging import get_logger
from app.domain.common.utils import DateTimeUtils
from app.domain.users.models import (
    DeleteUserCommand,
    GetUserByEmailQuery,
    GetUserByIdQuery,
    SignInCommand,
    SignUpCommand,
    UpdateUserPasswordCommand,
    UpdateUserProfileCommand,
    User,
)
from app.domain.users.repository import UserRepository
from app.domain.users.security import PasswordHasher, TokenService

logger = get_logger(__name__)


class UserCommandService:
    """Handles user commands.

    Outcomes that are not possible (duplicate email, unknown user, wrong
    credentials) are returned as ``None``; the API layer picks the status code.
    """

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._tokens = tokens

    @singledispatchmethod
    async def handle(self, command: Any) -> Any:
        msg = f'unsupported command: {type(command).__name__}'
        raise TypeError(msg)

    @handle.register
    async def _sign_up(self, command: SignUpCommand) -> User | None:
        if await self._repository.get_by_email(command.email) is not None:
            logger.bind(event='sign_up').info('Sign-up rejected, email already in use')
            return None

        if await self._repository.exists_by_identificator(command.identificator):
            logger.bind(event='sign_up').info(
                'Sign-up rejected, identificator already in use'
            )
            return None

        now = DateTimeUtils.now()
        user = await self._repository.add(
            User(
                id=0,
                user_name=command.user_name,
                email=command.email,
                password_hash=self._hasher.hash(command.password),
                phone_number=command.phone_number,
                identificator=command.identificator,
                location=command.location,
                created_at=now,
                updated_at=now,
            )
        )
        logger.bind(event='sign_up', user_id=user.id).info(
            f'User registered from {user.location}'
        )
        return user

    @handle.register
    async def _sign_in(self, command: SignInCommand) -> str | None:
        user = await self._repository.get_by_email(command.email)
        if user is None or not self._hasher.verify(command.password, user.password_hash):
            logger.bind(event='sign_in').info('Sign-in rejected, invalid credentials')
            return None

        return self._tokens.issue(user.id)

    @handle.register
    async def _update_profile(self, command: UpdateUserProfileCommand) -> User | None:
        user = await self._repository.get_by_id(command.user_id)
        if user is None:
            return None

        if command.email is not None and command.email.lower() != user.email.lower():
            if await self._repository.get_by_email(command.email) is not None:
                return None

        changes = {
            field: value
            for field, value in (
                ('user_name', command.user_name),
                ('email', command.email),
                ('phone_number', command.phone_number),
            )
            if value is not None
        }
        return await self._repository.update(
            replace(user, **changes, updated_at=DateTimeUtils.now())
        )

    @handle.register
    async def _update_password(self, command: UpdateUserPasswordCommand) -> User | None:
        user = await self._repository.get_by_id(command.user_id)
        if user is None or not self._hasher.verify(
            command.current_password, user.password_hash
        ):
            return None

        return await self._repository.update(
            replace(
                user,
                password_hash=self._hasher.hash(command.new_password),
                updated_at=DateTimeUtils.now(),
            )
        )

    @handle.register
    async def _delete(self, command: DeleteUserCommand) -> bool:
        deleted = await self._repository.delete(command.user_id)
        if deleted:
            logger.bind(event='delete_user', user_id=command.user_id).info(
                'User deleted'
            )
        return deleted


class UserQueryService:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @singledispatchmethod
    async def handle(self, query: Any) -> Any:
        msg = f'unsupported query: {type(query).__name__}'
        raise TypeError(msg)

    @handle.register
    async def _by_id(self, query: GetUserByIdQuery) -> User | None:
        return await self._repository.get_by_id(query.user_id)

    @handle.register
    async def _by_email(self, query: GetUserByEmailQuery) -> User | None:
        return await self._repository.get_by_email(query.email)
