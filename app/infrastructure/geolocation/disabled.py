from app.core.logging import get_logger
from app.domain.geolocation import LocationProvider

logger = get_logger(__name__)


class DisabledLocationProvider(LocationProvider):
    """Answers every lookup with the default location, without network access."""

    name = 'disabled'

    async def resolve(self, ip: str | None) -> str:
        logger.bind(event='geolocation', provider=self.name).debug(
            'Geolocation disabled, using default location'
        )
        return self.default_location
