from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.b3 import B3MultiFormat
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.jaeger import JaegerPropagator
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider, sampling
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from prometheus_client import REGISTRY
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.logging import get_logger
from app.domain.common.utils import StringUtils

if TYPE_CHECKING:
    from fastapi import FastAPI
    from opentelemetry.sdk.trace.sampling import Sampler

    from app.core.config import Configuration

logger = get_logger(__name__)


def _build_sampler(ratio: float) -> Sampler:
    if ratio >= 1.0:
        return sampling.ALWAYS_ON

    if ratio <= 0.0:
        return sampling.ALWAYS_OFF

    return sampling.TraceIdRatioBased(ratio)


# noinspection HttpUrlsUsage
def _setup_tracing(config: Configuration) -> None:
    """Setup distributed tracing with OpenTelemetry."""
    service_name = StringUtils.service_name()

    resource = Resource.create(
        {
            'service.name': service_name,
            'service.version': config.app_version,
            'service.namespace': config.app_environment,
            'service.instance.id': f'{service_name}-{config.app_environment}',
            'deployment.environment': config.app_environment,
        }
    )

    provider = TracerProvider(
        sampler=_build_sampler(config.observability.tracing_sample_ratio),
        resource=resource,
    )

    endpoint = str(config.observability.traces_endpoint)
    if not endpoint.startswith('http'):
        endpoint = f'http://{endpoint}'

    # OTLP exporter for Tempo
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=endpoint, insecure=True, timeout=30),
            max_queue_size=2048,
            max_export_batch_size=512,
            export_timeout_millis=30000,
            schedule_delay_millis=5000,
        )
    )

    if config.observability.traces_to_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    set_global_textmap(CompositePropagator([JaegerPropagator(), B3MultiFormat()]))

    # outbound geolocation calls
    HTTPXClientInstrumentor().instrument()

    logger.bind(event='observability').info(f'Tracing enabled, exporting to {endpoint}')


def _setup_metrics(app: FastAPI) -> None:
    Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_round_latency_decimals=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            '/health.*',
            '/metrics',
            '/docs.*',
        ],
        env_var_name='OBSERVABILITY_ENABLED',
        registry=REGISTRY,
    ).instrument(app)


def _setup_fastapi_instrumentation(app: FastAPI, config: Configuration) -> None:
    """Setup FastAPI-specific instrumentation."""
    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=config.observability.excluded_urls,
        tracer_provider=trace.get_tracer_provider(),
        http_capture_headers_server_request=[
            'content-type',
            'user-agent',
            'x-forwarded-for',
            'x-real-ip',
        ],
        http_capture_headers_server_response=[
            'content-type',
            'content-length',
        ],
    )


def configure_observability(app: FastAPI, config: Configuration) -> None:
    """Configure tracing and request metrics for the application."""
    if not config.observability.enabled:
        return

    _setup_tracing(config)
    _setup_metrics(app)
    _setup_fastapi_instrumentation(app, config)
