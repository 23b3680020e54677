from __future__ import annotations


class GeocodeError(RuntimeError):
    """Base class for every geocoding failure."""


class InvalidAddressError(GeocodeError):
    """The address was rejected before any provider was contacted."""


class ProviderError(GeocodeError):
    """An external provider could not answer."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class AddressNotFoundError(ProviderError):
    """The provider answered but had no match."""


class ServiceUnavailableError(ProviderError):
    """Transport failure, error status, missing credentials or client library."""


class UpstreamError(ServiceUnavailableError):
    """A successful HTTP response whose body reports errors."""


class MalformedResponseError(ServiceUnavailableError):
    """The response body does not decode into the expected shape."""
