from typing import Any

from app.domain.geolocation import IpApiCoResponse, ProviderLocation

from .base import HttpLocationProvider


class IpApiCoProvider(HttpLocationProvider):
    """ipapi.co: ``<base>/<ip>/json/``, failures flagged by ``error`` + ``reason``."""

    name = 'ipapi_co'

    def build_url(self, ip: str) -> str:
        return f'{self._base_url}/{self.path_segment(ip)}/json/'

    def parse(self, payload: Any) -> ProviderLocation:
        return IpApiCoResponse.model_validate(payload).to_location()
