from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class LookupOutcome(StrEnum):
    """How a geolocation lookup ended. Only ``RESOLVED`` yields a real location."""

    RESOLVED = 'resolved'
    EMPTY_OR_LOOPBACK = 'empty_or_loopback'
    TRANSPORT_FAILURE = 'transport_failure'
    PROVIDER_FAILURE = 'provider_failure'
    EMPTY_RESULT = 'empty_result'
    UNEXPECTED_FAILURE = 'unexpected_failure'


@dataclass(frozen=True, slots=True)
class ProviderLocation:
    """Provider payload reduced to the fields a location string is built from."""

    primary: str | None = None
    secondary: str | None = None
    failed: bool = False
    reason: str | None = None

    def compose(self) -> str | None:
        """``"<primary>, <secondary>"``, a single part, or ``None`` if both are blank."""
        parts = [
            part.strip()
            for part in (self.primary, self.secondary)
            if part and part.strip()
        ]
        return ', '.join(parts) or None


class IpApiCoResponse(BaseModel):
    """Response of ``https://ipapi.co/<ip>/json/``."""

    model_config = ConfigDict(extra='ignore')

    city: str | None = None
    region: str | None = None
    country_name: str | None = None
    error: bool | None = None
    reason: str | None = None

    def to_location(self) -> ProviderLocation:
        return ProviderLocation(
            primary=self.city or self.region,
            secondary=self.country_name,
            failed=self.error is True,
            reason=self.reason,
        )


class IpApiComResponse(BaseModel):
    """Response of ``http://ip-api.com/json/<ip>``."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    status: str | None = None
    message: str | None = None
    city: str | None = None
    region_name: str | None = Field(None, alias='regionName')
    country: str | None = None

    def to_location(self) -> ProviderLocation:
        return ProviderLocation(
            primary=self.city or self.region_name,
            secondary=self.country,
            failed=(self.status or '').lower() == 'fail',
            reason=self.message,
        )
