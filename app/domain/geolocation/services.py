from fastapi.requests import Request

from app.domain.common.utils import ClientIPExtractor
from app.domain.geolocation.provider import LocationProvider


class LocationService:
    """Location lookups used by the users API."""

    def __init__(self, provider: LocationProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> LocationProvider:
        return self._provider

    async def resolve_location_from_ip(self, ip: str | None) -> str:
        return await self._provider.resolve(ip)

    async def resolve_location_from_request(self, request: Request) -> str:
        return await self.resolve_location_from_ip(
            ClientIPExtractor.extract_client_ip(request)
        )
