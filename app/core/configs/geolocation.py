from typing import Literal

from pydantic import AnyHttpUrl, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH

GeolocationProviderName = Literal['ipapi_co', 'ip_api_com', 'disabled']

_DEFAULT_BASE_URLS: dict[str, str] = {
    'ipapi_co': 'https://ipapi.co',
    'ip_api_com': 'http://ip-api.com',
}


class GeolocationConfiguration(BaseSettings):
    """IP geolocation provider configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='GEOLOCATION_',
        extra='ignore',
    )

    provider: GeolocationProviderName = Field(
        'ipapi_co', description='Geolocation provider used at sign-up'
    )
    base_url: AnyHttpUrl | None = Field(
        None,
        description='Provider base URL, defaults to the public endpoint of the provider',
    )
    timeout: float = Field(
        3.0,
        gt=0,
        le=30,
        description='Upper bound in seconds for a single lookup, connect included',
    )
    default_location: str = Field(
        'Unknown location',
        min_length=1,
        description='Value stored when the location cannot be resolved',
    )
    user_agent: str | None = Field(
        'agro-users/geolocation',
        description='Client identifier sent as User-Agent to the provider',
    )
    api_key: SecretStr | None = Field(
        None, description='Optional provider API key', repr=False
    )

    @model_validator(mode='after')
    def apply_provider_defaults(self) -> 'GeolocationConfiguration':
        if self.base_url is None and self.provider in _DEFAULT_BASE_URLS:
            self.base_url = AnyHttpUrl(_DEFAULT_BASE_URLS[self.provider])

        return self

    @property
    def endpoint(self) -> str:
        """Base URL without a trailing slash."""
        return str(self.base_url).rstrip('/') if self.base_url else ''
