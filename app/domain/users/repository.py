import itertools
from abc import ABC, abstractmethod
from dataclasses import replace

from app.domain.users.models import User


class UserRepository(ABC):
    """Persistence port for users. Emails are compared case-insensitively."""

    @abstractmethod
    async def add(self, user: User) -> User:
        """Store *user* and return it with its assigned id."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def exists_by_identificator(self, identificator: str) -> bool: ...

    @abstractmethod
    async def update(self, user: User) -> User: ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool: ...


class InMemoryUserRepository(UserRepository):
    """Process-local user store."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)

    async def add(self, user: User) -> User:
        stored = replace(user, id=next(self._ids))
        self._users[stored.id] = stored
        return stored

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        return next(
            (user for user in self._users.values() if user.email.lower() == wanted),
            None,
        )

    async def exists_by_identificator(self, identificator: str) -> bool:
        return any(
            user.identificator == identificator for user in self._users.values()
        )

    async def update(self, user: User) -> User:
        if user.id not in self._users:
            msg = f'user {user.id} does not exist'
            raise KeyError(msg)

        self._users[user.id] = user
        return user

    async def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None
