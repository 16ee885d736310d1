from .api import APIConfiguration
from .geolocation import GeolocationConfiguration, GeolocationProviderName
from .log import LogConfiguration
from .observability import ObservabilityConfiguration
from .security import SecurityConfiguration

__all__ = [
    'APIConfiguration',
    'GeolocationConfiguration',
    'GeolocationProviderName',
    'LogConfiguration',
    'ObservabilityConfiguration',
    'SecurityConfiguration',
]
