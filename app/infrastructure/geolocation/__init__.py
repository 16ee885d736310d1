from .base import HttpLocationProvider
from .disabled import DisabledLocationProvider
from .factory import build_http_client, build_location_provider
from .ip_api_com import IpApiComProvider
from .ipapi_co import IpApiCoProvider

__all__ = [
    'DisabledLocationProvider',
    'HttpLocationProvider',
    'IpApiCoProvider',
    'IpApiComProvider',
    'build_http_client',
    'build_location_provider',
]
