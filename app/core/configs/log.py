from typing import Literal

from pydantic import AnyUrl, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


class LogConfiguration(BaseSettings):
    """Logging configuration for Loguru sinks (console, files, Loki)."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='LOG_',
        extra='ignore',
    )

    level: Literal[
        'TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL'
    ] = Field('INFO', description='Minimum log level')

    to_console: bool = Field(True, description='Write logs to stderr')
    to_file: bool = Field(False, description='Write logs to rotating files')
    file_path: str = Field('logs/app.log', description='Main log file path')
    error_file_path: str = Field(
        'logs/error.log', description='Log file receiving ERROR and above'
    )

    to_loki: bool = Field(False, description='Ship logs to Loki')
    loki_url: AnyUrl = Field(
        AnyUrl('http://loki:3100/loki/api/v1/push'),
        description='Loki push endpoint URL',
        repr=False,
    )
    loki_username: str | None = Field(None, description='Loki basic auth username')
    loki_password: SecretStr | None = Field(
        None, description='Loki basic auth password', repr=False
    )

    @model_validator(mode='after')
    def validate_sinks(self) -> 'LogConfiguration':
        if self.to_file and not (self.file_path and self.error_file_path):
            msg = 'file_path and error_file_path must be set if to_file is true'
            raise ValueError(msg)

        if self.loki_password and not self.loki_username:
            msg = 'loki_username must be provided together with loki_password'
            raise ValueError(msg)

        return self
