from collections.abc import Mapping
from ipaddress import ip_address
from typing import ClassVar

from fastapi.requests import Request


class ClientIPExtractor:
    """Utility for extracting the originating client IP behind proxies."""

    HEADER_PRECEDENCE: ClassVar[tuple[str, ...]] = (
        'x-forwarded-for',
        'x-real-ip',
        'proxy-client-ip',
        'wl-proxy-client-ip',
    )

    _FORWARDED_FOR = 'x-forwarded-for'
    _UNKNOWN = 'unknown'
    _LOOPBACK_LITERALS = frozenset(
        {'localhost', '127.0.0.1', '::1', '0:0:0:0:0:0:0:1'}
    )

    @staticmethod
    def extract(headers: Mapping[str, str], fallback_address: str | None) -> str:
        """Return the client IP from proxy headers, else the socket address.

        Header names are matched case-insensitively. A header is skipped when
        it is missing, blank or the literal ``unknown``. Only the first entry
        of an ``X-Forwarded-For`` chain is kept. The result is not validated.
        """
        lowered: dict[str, str] = {}
        for name, value in headers.items():
            lowered.setdefault(name.lower(), value)

        for name in ClientIPExtractor.HEADER_PRECEDENCE:
            value = (lowered.get(name) or '').strip()
            if not value or value.lower() == ClientIPExtractor._UNKNOWN:
                continue

            if name == ClientIPExtractor._FORWARDED_FOR and ',' in value:
                return value.split(',', 1)[0].strip()

            return value

        return fallback_address or ''

    @staticmethod
    def extract_client_ip(request: Request) -> str:
        """Extract client IP of a Starlette/FastAPI request."""
        return ClientIPExtractor.extract(
            request.headers, request.client.host if request.client else None
        )

    @staticmethod
    def is_local_or_empty(address: str | None) -> bool:
        """True for blank input and addresses pointing at the local host."""
        candidate = (address or '').strip().lower()
        if not candidate or candidate in ClientIPExtractor._LOOPBACK_LITERALS:
            return True

        try:
            return ip_address(candidate).is_loopback
        except ValueError:
            return False
