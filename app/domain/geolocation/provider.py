from abc import ABC, abstractmethod


class LocationProvider(ABC):
    """Resolves an IP address to a human readable location.

    Implementations are total: every failure is answered with
    :attr:`default_location` and nothing is raised to the caller.
    """

    name: str = 'abstract'

    def __init__(self, default_location: str) -> None:
        self._default_location = default_location

    @property
    def default_location(self) -> str:
        return self._default_location

    @abstractmethod
    async def resolve(self, ip: str | None) -> str:
        raise NotImplementedError
