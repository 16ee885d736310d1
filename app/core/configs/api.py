import re
from typing import ClassVar
from ipaddress import ip_address

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


# noinspection PyNestedDecorators
class APIConfiguration(BaseSettings):
    """HTTP API configuration."""

    _LABEL_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r'^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$')

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='API_',
        extra='ignore',
    )

    host: str = Field(
        default='127.0.0.1', description='Bind address of the API server'
    )
    port: int = Field(default=8080, ge=1, le=65535, description='API server port')
    prefix: str = Field(default='/api/v1', description='Mount path of the v1 API')
    cors_origins: list[str] = Field(
        default=['*'], description='Origins allowed to call the API from a browser'
    )
    allowed_hosts: list[str] = Field(
        default=['*'], description='Accepted values of the Host header'
    )

    @field_validator('host')
    @classmethod
    def validate_host(cls, value: str) -> str:
        return cls._check_host(value)

    @field_validator('prefix')
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if not value.startswith('/') or value.endswith('/'):
            msg = f'api prefix must start with "/" and not end with one: {value}'
            raise ValueError(msg)
        return value

    @field_validator('allowed_hosts', mode='before')
    @classmethod
    def validate_allowed_hosts(cls, value: str | list[str]) -> list[str]:
        hosts = [value] if isinstance(value, str) else value
        return [host if host == '*' else cls._check_host(host) for host in hosts]

    @field_validator('cors_origins', mode='before')
    @classmethod
    def validate_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(',') if origin.strip()]
        return value

    @classmethod
    def _check_host(cls, host: str) -> str:
        try:
            ip_address(host)
        except ValueError:
            pass
        else:
            return host

        if not host or len(host) > 253:
            msg = f'invalid hostname length: {host}'
            raise ValueError(msg)

        bad_labels = [
            label
            for label in host.split('.')
            if label != '*' and not cls._LABEL_PATTERN.match(label)
        ]
        if bad_labels:
            msg = f'invalid hostname "{host}": invalid labels {bad_labels}'
            raise ValueError(msg)

        return host
