from .bootstrap import configure_observability
from .metrics import (
    GEOLOCATION_LOOKUP_DURATION,
    GEOLOCATION_LOOKUPS_TOTAL,
    USER_SIGN_UPS_TOTAL,
)

__all__ = [
    'GEOLOCATION_LOOKUPS_TOTAL',
    'GEOLOCATION_LOOKUP_DURATION',
    'USER_SIGN_UPS_TOTAL',
    'configure_observability',
]
