from functools import lru_cache
from typing import Literal
from zoneinfo import available_timezones

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app import __version__
from app.core.paths import ROOT_PATH

from .configs import (
    APIConfiguration,
    GeolocationConfiguration,
    LogConfiguration,
    ObservabilityConfiguration,
    SecurityConfiguration,
)


# noinspection PyNestedDecorators,PyArgumentList
class Configuration(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    app_name: str = Field('Agro Users API', description='Application name')
    app_description: str = Field(
        'User management with sign-up geolocation',
        description='Application description',
    )
    app_version: str = __version__
    app_secret_key: SecretStr = Field(
        ...,
        description='Secret used to sign sign-in tokens',
        min_length=16,
        repr=False,
    )
    app_environment: Literal['test', 'local', 'dev', 'qa', 'prod'] = Field(
        'local', description='Application environment', validation_alias='ENVIRONMENT'
    )
    app_timezone: str = Field(
        'UTC', description='Application timezone', validation_alias='TZ'
    )

    api: APIConfiguration = Field(default_factory=APIConfiguration)
    geolocation: GeolocationConfiguration = Field(
        default_factory=GeolocationConfiguration
    )
    log: LogConfiguration = Field(default_factory=LogConfiguration)
    observability: ObservabilityConfiguration = Field(
        default_factory=ObservabilityConfiguration
    )
    security: SecurityConfiguration = Field(default_factory=SecurityConfiguration)

    @property
    def app_debug(self) -> bool:
        return self.app_environment in ['test', 'local', 'dev']

    @field_validator('app_timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in available_timezones():
            msg = f'not a valid timezone: {v}'
            raise ValueError(msg)
        return v


# noinspection PyArgumentList
@lru_cache
def get_config() -> Configuration:
    """
    Get cached application settings.
    """
    return Configuration()
