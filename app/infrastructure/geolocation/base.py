import asyncio
import time
from abc import abstractmethod
from typing import Any
from urllib.parse import quote

import httpx
from opentelemetry import trace
from pydantic import SecretStr

from app.core.logging import get_logger
from app.domain.common.utils import ClientIPExtractor
from app.domain.geolocation import LocationProvider, LookupOutcome, ProviderLocation
from app.infrastructure.observability.metrics import (
    GEOLOCATION_LOOKUP_DURATION,
    GEOLOCATION_LOOKUPS_TOTAL,
)

tracer = trace.get_tracer(__name__)

logger = get_logger(__name__)


class HttpLocationProvider(LocationProvider):
    """Single GET against a JSON geolocation API, degrading to the default.

    Subclasses describe the provider: how the URL is built from the IP and how
    the JSON body maps onto a :class:`ProviderLocation`. No retries are made.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float,
        default_location: str,
        api_key: SecretStr | None = None,
    ) -> None:
        super().__init__(default_location)
        self._client = client
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._api_key = api_key

    @staticmethod
    def path_segment(ip: str) -> str:
        """*ip* encoded as a single URL path segment."""
        return quote(ip, safe=':')

    @abstractmethod
    def build_url(self, ip: str) -> str: ...

    @abstractmethod
    def parse(self, payload: Any) -> ProviderLocation: ...

    def query_params(self) -> dict[str, str]:
        if self._api_key is None:
            return {}
        return {'key': self._api_key.get_secret_value()}

    # noinspection PyBroadException
    async def resolve(self, ip: str | None) -> str:
        started = time.perf_counter()
        outcome = LookupOutcome.UNEXPECTED_FAILURE
        location = self.default_location

        try:
            with tracer.start_as_current_span('geolocation.resolve') as span:
                span.set_attribute('geolocation.provider', self.name)
                outcome, location = await self._lookup((ip or '').strip())
                span.set_attribute('geolocation.outcome', outcome.value)

        except Exception as e:
            self._log(outcome, ip).error(f'Geolocation lookup aborted: {e}')

        GEOLOCATION_LOOKUPS_TOTAL.labels(self.name, outcome.value).inc()
        GEOLOCATION_LOOKUP_DURATION.labels(self.name).observe(
            time.perf_counter() - started
        )
        return location

    async def _lookup(self, ip: str) -> tuple[LookupOutcome, str]:
        if ClientIPExtractor.is_local_or_empty(ip):
            self._log(LookupOutcome.EMPTY_OR_LOOPBACK, ip).debug(
                'Local or empty address, skipping geolocation lookup'
            )
            return LookupOutcome.EMPTY_OR_LOOPBACK, self.default_location

        try:
            response = await asyncio.wait_for(
                self._client.get(
                    self.build_url(ip),
                    params=self.query_params(),
                    timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
            response.raise_for_status()

        except TimeoutError:
            self._log(LookupOutcome.TRANSPORT_FAILURE, ip).error(
                f'Geolocation provider did not answer within {self._timeout}s'
            )
            return LookupOutcome.TRANSPORT_FAILURE, self.default_location

        except httpx.HTTPError as e:
            self._log(LookupOutcome.TRANSPORT_FAILURE, ip).error(
                f'Geolocation request failed: {type(e).__name__}: {e}'
            )
            return LookupOutcome.TRANSPORT_FAILURE, self.default_location

        try:
            result = self.parse(response.json())

        except Exception as e:
            self._log(LookupOutcome.UNEXPECTED_FAILURE, ip).error(
                f'Geolocation response could not be read: {e}'
            )
            return LookupOutcome.UNEXPECTED_FAILURE, self.default_location

        if result.failed:
            self._log(LookupOutcome.PROVIDER_FAILURE, ip).warning(
                f'Geolocation provider rejected the lookup: {result.reason or "no reason given"}'
            )
            return LookupOutcome.PROVIDER_FAILURE, self.default_location

        location = result.compose()
        if location is None:
            self._log(LookupOutcome.EMPTY_RESULT, ip).warning(
                'Geolocation provider returned no location fields'
            )
            return LookupOutcome.EMPTY_RESULT, self.default_location

        self._log(LookupOutcome.RESOLVED, ip).info(f'Location resolved: {location}')
        return LookupOutcome.RESOLVED, location

    def _log(self, outcome: LookupOutcome, ip: str | None) -> Any:
        return logger.bind(
            event='geolocation', provider=self.name, outcome=outcome.value, ip=ip
        )
