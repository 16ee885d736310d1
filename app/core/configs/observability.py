from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


class ObservabilityConfiguration(BaseSettings):
    """Tracing and metrics configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='OBSERVABILITY_',
        extra='ignore',
    )

    enabled: bool = Field(True, description='Enable tracing and request metrics')
    traces_endpoint: AnyUrl = Field(
        AnyUrl('http://tempo:4317'),
        description='OTLP gRPC endpoint used by the trace exporter',
    )
    tracing_sample_ratio: float = Field(
        1.0, ge=0.0, le=1.0, description='Tracing sample ratio (0.0 to 1.0)'
    )
    traces_to_console: bool = Field(False, description='Also print spans to stdout')
    excluded_urls: str = Field(
        '/health,/metrics,/docs,/openapi.json',
        description='Comma-separated list of URLs excluded from tracing',
    )
