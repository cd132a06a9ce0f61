"""Destination resolver mapping drain tokens to Sentry destinations."""

from types import MappingProxyType
from typing import Mapping, Protocol

from ..errors import UnknownSourceError
from ..models import Destination


class IDestinationResolver(Protocol):
    """Looks up the destination for a drain token."""

    def resolve(self, token: str) -> Destination:
        """Return the destination or raise UnknownSourceError."""
        ...


class DestinationResolver:
    """Read-only lookup over the mapping built at startup."""

    def __init__(self, mapping: Mapping[str, Destination]):
        self._mapping = MappingProxyType(dict(mapping))

    def resolve(self, token: str) -> Destination:
        try:
            return self._mapping[token]
        except KeyError:
            raise UnknownSourceError(token) from None

    def __contains__(self, token: object) -> bool:
        return token in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)
