"""
Pytest configuration and fixtures.
Environment is set before the application modules read their settings.
"""

import os

os.environ.setdefault('APP_SECRET_KEY', 'test-secret-key-0123456789')
os.environ['ENVIRONMENT'] = 'test'
os.environ['OBSERVABILITY_ENABLED'] = 'false'
os.environ['LOG_TO_CONSOLE'] = 'false'
os.environ['LOG_TO_FILE'] = 'false'
os.environ['GEOLOCATION_PROVIDER'] = 'disabled'
os.environ['SECURITY_PASSWORD_HASH_ITERATIONS'] = '1000'

from collections.abc import AsyncGenerator, Callable, Iterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from kink import di  # noqa: E402

from app.core.configs import GeolocationConfiguration  # noqa: E402
from app.core.container import wire_dependencies  # noqa: E402
from app.domain.geolocation import LocationProvider, LocationService  # noqa: E402
from app.domain.users import (  # noqa: E402
    InMemoryUserRepository,
    PasswordHasher,
    TokenService,
    UserCommandService,
    UserQueryService,
)

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingLocationProvider(LocationProvider):
    """Answers a fixed location and remembers the IPs it was asked about."""

    name = 'recording'

    def __init__(self, location: str = 'Lima, Peru') -> None:
        super().__init__('Unknown location')
        self.location = location
        self.calls: list[str | None] = []

    async def resolve(self, ip: str | None) -> str:
        self.calls.append(ip)
        return self.location


@pytest.fixture
def geolocation_config() -> GeolocationConfiguration:
    return GeolocationConfiguration(
        provider='ipapi_co',
        base_url='https://geo.test',
        timeout=0.5,
        default_location='Unknown location',
        user_agent='tests',
    )


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_http_client(
    requests_seen: list[httpx.Request],
) -> AsyncGenerator[Callable[[Handler], httpx.AsyncClient], None]:
    """Build AsyncClients whose requests are answered by *handler*."""
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Handler) -> httpx.AsyncClient:
        def _record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(iterations=1000)


@pytest.fixture
def token_service() -> TokenService:
    from pydantic import SecretStr  # noqa: PLC0415

    return TokenService(SecretStr('test-secret-key-0123456789'), ttl_seconds=3600)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def command_service(
    user_repository: InMemoryUserRepository,
    password_hasher: PasswordHasher,
    token_service: TokenService,
) -> UserCommandService:
    return UserCommandService(user_repository, password_hasher, token_service)


@pytest.fixture
def query_service(user_repository: InMemoryUserRepository) -> UserQueryService:
    return UserQueryService(user_repository)


@pytest.fixture(scope='session')
def application() -> FastAPI:
    wire_dependencies()
    return di[FastAPI]


@pytest.fixture
def location_provider() -> RecordingLocationProvider:
    return RecordingLocationProvider()


@pytest.fixture
def api_client(
    application: FastAPI,
    location_provider: RecordingLocationProvider,
    command_service: UserCommandService,
    query_service: UserQueryService,
    token_service: TokenService,
) -> Iterator[TestClient]:
    di[LocationService] = LocationService(location_provider)
    di[TokenService] = token_service
    di[UserCommandService] = command_service
    di[UserQueryService] = query_service

    yield TestClient(application)
