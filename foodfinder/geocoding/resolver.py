from __future__ import annotations

import logging
from functools import lru_cache

import requests

from .cache import GeocodeCache
from .config import DEFAULT_GEOCODE_CONFIG, GeocodeConfig
from .errors import InvalidAddressError, ServiceUnavailableError
from .models import GeocodeResult
from .providers import Geocoder, NominatimGeocoder, TgosGeocoder

logger = logging.getLogger(__name__)


class GeocodeResolver:
    """
    Address -> coordinates with a primary/secondary fallback chain.

    Primary failures of any kind are logged and recovered by the secondary;
    secondary failures reach the caller. The first successful answer for
    each trimmed address is cached.
    """

    def __init__(
        self,
        secondary: Geocoder | None,
        primary: Geocoder | None = None,
        cache: GeocodeCache | None = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.cache = cache if cache is not None else GeocodeCache()

    @classmethod
    def from_config(
        cls,
        config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
        session: requests.Session | None = None,
    ) -> "GeocodeResolver":
        primary = TgosGeocoder.from_config(config, session) if config.primary_configured else None
        secondary = NominatimGeocoder.from_config(config, session) if config.nominatim_enabled else None
        cache = GeocodeCache(
            max_entries=config.cache_max_entries,
            ttl_seconds=config.cache_ttl_seconds,
        )
        return cls(secondary=secondary, primary=primary, cache=cache)

    def resolve(self, address: str) -> GeocodeResult:
        normalized = (address or "").strip()
        if not normalized:
            raise InvalidAddressError("address must not be empty")

        cached = self.cache.get(normalized)
        if cached is not None:
            return cached

        result = self._locate(normalized)
        self.cache.set(normalized, result)
        return result

    def _locate(self, address: str) -> GeocodeResult:
        if self.primary is not None:
            try:
                return self.primary.geocode(address)
            except Exception:
                logger.warning(
                    "%s geocoding failed for %r, falling back",
                    self.primary.name,
                    address,
                    exc_info=True,
                )

        if self.secondary is None:
            raise ServiceUnavailableError("no geocoding provider is available")
        return self.secondary.geocode(address)


@lru_cache(maxsize=1)
def get_resolver() -> GeocodeResolver:
    """Process-wide resolver built from environment configuration."""
    return GeocodeResolver.from_config()
