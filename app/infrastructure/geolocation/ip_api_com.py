from typing import Any

from app.domain.geolocation import IpApiComResponse, ProviderLocation

from .base import HttpLocationProvider


class IpApiComProvider(HttpLocationProvider):
    """ip-api.com: ``<base>/json/<ip>``, failures flagged by ``status == "fail"``."""

    name = 'ip_api_com'

    _FIELDS = 'status,message,country,regionName,city'

    def build_url(self, ip: str) -> str:
        return f'{self._base_url}/json/{self.path_segment(ip)}'

    def query_params(self) -> dict[str, str]:
        return {**super().query_params(), 'fields': self._FIELDS}

    def parse(self, payload: Any) -> ProviderLocation:
        return IpApiComResponse.model_validate(payload).to_location()
