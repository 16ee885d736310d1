from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


class SecurityConfiguration(BaseSettings):
    """Password hashing and sign-in token settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='SECURITY_',
        extra='ignore',
    )

    password_hash_iterations: int = Field(
        390_000, ge=1, description='PBKDF2-SHA256 iterations for new hashes'
    )
    token_ttl_seconds: int = Field(
        3600, ge=60, description='Lifetime of sign-in tokens in seconds'
    )
