import httpx

from app.core.configs import GeolocationConfiguration
from app.domain.geolocation import LocationProvider

from .base import HttpLocationProvider
from .disabled import DisabledLocationProvider
from .ip_api_com import IpApiComProvider
from .ipapi_co import IpApiCoProvider

HTTP_PROVIDERS: dict[str, type[HttpLocationProvider]] = {
    IpApiCoProvider.name: IpApiCoProvider,
    IpApiComProvider.name: IpApiComProvider,
}


def build_http_client(config: GeolocationConfiguration) -> httpx.AsyncClient:
    """Shared client for all geolocation lookups of the process."""
    headers = {'Accept': 'application/json'}
    if config.user_agent:
        headers['User-Agent'] = config.user_agent

    return httpx.AsyncClient(
        headers=headers,
        timeout=httpx.Timeout(config.timeout),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
        follow_redirects=False,
    )


def build_location_provider(
    config: GeolocationConfiguration, client: httpx.AsyncClient
) -> LocationProvider:
    if config.provider == DisabledLocationProvider.name:
        return DisabledLocationProvider(config.default_location)

    provider_cls = HTTP_PROVIDERS.get(config.provider)
    if provider_cls is None:
        msg = f'unsupported geolocation provider: {config.provider}'
        raise ValueError(msg)

    return provider_cls(
        client,
        base_url=config.endpoint,
        timeout=config.timeout,
        default_location=config.default_location,
        api_key=config.api_key,
    )
