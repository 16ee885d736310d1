from zoneinfo import ZoneInfo

import httpx
from fastapi import FastAPI
from kink import di

from app.core.application import get_application
from app.core.config import Configuration, get_config
from app.domain.geolocation import LocationProvider, LocationService
from app.domain.users import (
    InMemoryUserRepository,
    PasswordHasher,
    TokenService,
    UserCommandService,
    UserQueryService,
    UserRepository,
)
from app.infrastructure.geolocation import build_http_client, build_location_provider


def wire_dependencies() -> None:
    _wire_core_dependencies()
    _wire_infrastructure_dependencies()
    _wire_services()


# noinspection PyArgumentList
def _wire_core_dependencies() -> None:
    """Wire core application dependencies."""
    di[Configuration] = get_config()
    di[ZoneInfo] = ZoneInfo(di[Configuration].app_timezone)

    di[FastAPI] = get_application()  # type: ignore[call-arg]


def wire_geolocation() -> None:
    """(Re)build the shared HTTP client and everything that holds on to it."""
    config = di[Configuration]

    di[httpx.AsyncClient] = build_http_client(config.geolocation)
    di[LocationProvider] = build_location_provider(
        config.geolocation, di[httpx.AsyncClient]
    )
    di[LocationService] = LocationService(di[LocationProvider])


def _wire_infrastructure_dependencies() -> None:
    wire_geolocation()
    di[UserRepository] = InMemoryUserRepository()


def _wire_services() -> None:
    config = di[Configuration]

    di[PasswordHasher] = PasswordHasher(config.security.password_hash_iterations)
    di[TokenService] = TokenService(
        config.app_secret_key, config.security.token_ttl_seconds
    )
    di[UserCommandService] = UserCommandService(
        di[UserRepository], di[PasswordHasher], di[TokenService]
    )
    di[UserQueryService] = UserQueryService(di[UserRepository])
