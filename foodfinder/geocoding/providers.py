from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from .config import DEFAULT_GEOCODE_CONFIG, GeocodeConfig
from .errors import AddressNotFoundError, ServiceUnavailableError, UpstreamError
from .http import decode_json, send, validate
from .loader import SingleFlightLoader
from .models import GeocodeResult, NominatimPlace, TgosLocateResponse
from .projection import TWD97_TM2, Reprojector, load_twd97_reprojector

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    name: str

    def geocode(self, address: str) -> GeocodeResult:
        ...


# ── TGOS (primary) ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ProjectedPoint:
    x: float
    y: float
    display_name: str | None = None
    type: str | None = None


class Locator(Protocol):
    def locate(self, address: str) -> ProjectedPoint:
        """Return the best match for ``address`` in TWD97 / TM2 metres."""


class TgosAddressLocator:
    provider = "tgos"

    def __init__(
        self,
        app_id: str,
        api_key: str,
        url: str = DEFAULT_GEOCODE_CONFIG.tgos_locate_url,
        timeout: float = DEFAULT_GEOCODE_CONFIG.timeout,
        session: requests.Session | None = None,
    ) -> None:
        self.app_id = app_id
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def locate(self, address: str) -> ProjectedPoint:
        params = {
            "oAPPId": self.app_id,
            "oAPIKey": self.api_key,
            "oAddress": address,
            "oSRS": TWD97_TM2,
            "oFuzzyType": 2,
            "oResultDataType": "JSON",
            "oFuzzyBuffer": 0,
            "oIsOnlyFullMatch": "false",
            "oReturnMaxCount": 1,
        }
        response = send(
            self._session, self.url, provider=self.provider, params=params, timeout=self.timeout
        )
        payload = decode_json(response.text, provider=self.provider)
        parsed: TgosLocateResponse = validate(TgosLocateResponse, payload, provider=self.provider)

        info = parsed.info[0] if parsed.info else None
        if info is not None and info.is_success.lower() != "true":
            raise UpstreamError("TGOS rejected the locate request", provider=self.provider)
        if not parsed.addresses:
            raise AddressNotFoundError(f"TGOS found no match for {address!r}", provider=self.provider)

        best = parsed.addresses[0]
        return ProjectedPoint(
            x=best.x,
            y=best.y,
            display_name=best.full_address,
            type=info.match_type if info is not None else None,
        )


class TgosGeocoder:
    """Locate with TGOS, then reproject its TWD97 answer to WGS84."""

    name = "tgos"

    def __init__(
        self,
        locator: SingleFlightLoader[Locator],
        reprojector: SingleFlightLoader[Reprojector],
    ) -> None:
        self._locator = locator
        self._reprojector = reprojector

    @classmethod
    def from_config(
        cls,
        config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
        session: requests.Session | None = None,
    ) -> "TgosGeocoder":
        def _build_locator() -> Locator:
            if not config.primary_configured:
                raise ServiceUnavailableError("TGOS AppID / APIKey are not configured", provider=cls.name)
            return TgosAddressLocator(
                config.tgos_app_id,
                config.tgos_api_key,
                url=config.tgos_locate_url,
                timeout=config.timeout,
                session=session,
            )

        return cls(
            locator=SingleFlightLoader("TGOS locator", _build_locator),
            reprojector=SingleFlightLoader("TWD97 reprojector", load_twd97_reprojector),
        )

    def geocode(self, address: str) -> GeocodeResult:
        locator = self._locator.get()
        reprojector = self._reprojector.get()

        point = locator.locate(address)
        lng, lat = reprojector.to_wgs84(point.x, point.y)
        return GeocodeResult(
            lat=lat,
            lng=lng,
            display_name=point.display_name or address,
            type=point.type,
            source="tgos",
        )


# ── Nominatim (secondary) ────────────────────────────────────────────────


class NominatimGeocoder:
    name = "nominatim"

    def __init__(
        self,
        url: str = DEFAULT_GEOCODE_CONFIG.nominatim_url,
        user_agent: str = DEFAULT_GEOCODE_CONFIG.user_agent,
        accept_language: str = DEFAULT_GEOCODE_CONFIG.accept_language,
        timeout: float = DEFAULT_GEOCODE_CONFIG.timeout,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
        session: requests.Session | None = None,
    ) -> "NominatimGeocoder":
        return cls(
            url=config.nominatim_url,
            user_agent=config.user_agent,
            accept_language=config.accept_language,
            timeout=config.timeout,
            session=session,
        )

    def geocode(self, address: str) -> GeocodeResult:
        params = {"format": "json", "q": address, "limit": 1, "addressdetails": 1}
        headers = {"User-Agent": self.user_agent, "Accept-Language": self.accept_language}
        response = send(
            self._session,
            self.url,
            provider=self.name,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )
        payload = decode_json(response.text, provider=self.name)
        places: list[NominatimPlace] = validate(list[NominatimPlace], payload, provider=self.name)
        if not places:
            raise AddressNotFoundError(f"Nominatim found no match for {address!r}", provider=self.name)

        target = places[0]
        return GeocodeResult(
            lat=target.lat,
            lng=target.lon,
            display_name=target.display_name or address,
            type=target.type,
            source="nominatim",
        )
