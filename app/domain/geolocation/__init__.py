from .models import (
    IpApiComResponse,
    IpApiCoResponse,
    LookupOutcome,
    ProviderLocation,
)
from .provider import LocationProvider
from .services import LocationService

__all__ = [
    'IpApiCoResponse',
    'IpApiComResponse',
    'LocationProvider',
    'LocationService',
    'LookupOutcome',
    'ProviderLocation',
]
