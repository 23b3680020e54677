from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import requests
from pydantic import ValidationError

from .config import DEFAULT_TGOS_DATA_CONFIG, TgosDataConfig
from .errors import AddressNotFoundError, ServiceUnavailableError
from .http import decode_json, raise_for_message_list, send, validate
from .models import (
    AdministrativeTown,
    NearbyRestaurant,
    TgosRangeResponse,
    TgosThemeFeature,
    TgosThemeResponse,
)

logger = logging.getLogger(__name__)

UNNAMED_RESTAURANT = "未命名餐廳"


class TgosDataClient:
    """TGOS open-data themes: administrative towns and restaurant points."""

    provider = "tgos"

    def __init__(
        self,
        config: TgosDataConfig = DEFAULT_TGOS_DATA_CONFIG,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._session = session or requests.Session()

    def _request(self, path: str, params: dict[str, Any]) -> Any:
        if not self.config.api_key:
            raise ServiceUnavailableError("TGOS_DATA_API_KEY is not configured", provider=self.provider)

        query = {"Apikey": self.config.api_key}
        query.update({key: value for key, value in params.items() if value is not None})
        response = send(
            self._session,
            f"{self.config.base_url}{path}",
            provider=self.provider,
            params=query,
            timeout=self.config.timeout,
        )
        payload = decode_json(response.text, provider=self.provider)
        raise_for_message_list(payload, provider=self.provider)
        return payload

    def administrative_town(self, lat: float, lng: float) -> AdministrativeTown:
        payload = self._request("/Range/Administrative", {"Unit": "town", "Lng": lng, "Lat": lat})
        data: TgosRangeResponse = validate(TgosRangeResponse, payload, provider=self.provider)
        if not data.response_count or not data.response_data:
            raise AddressNotFoundError(
                f"TGOS could not place ({lat}, {lng}) in a town", provider=self.provider
            )
        unit = data.response_data[0]
        return AdministrativeTown(county=unit.county, town=unit.town)

    def restaurants_by_town(self, county: str, town: str) -> list[NearbyRestaurant]:
        payload = self._request(
            "/Theme/Query",
            {
                "Theme_Id": self.config.restaurant_theme_id,
                "County": county,
                "Town": town,
                "Keywords": self.config.restaurant_keyword,
            },
        )
        data: TgosThemeResponse = validate(TgosThemeResponse, payload, provider=self.provider)
        if not data.response_count or not data.features:
            return []

        restaurants: list[NearbyRestaurant] = []
        for raw in data.features:
            try:
                feature = TgosThemeFeature.model_validate(raw)
            except ValidationError:
                logger.debug("Skipping malformed TGOS feature: %r", raw)
                continue
            restaurant = _to_restaurant(feature)
            if restaurant is None:
                logger.debug("Skipping TGOS feature without coordinates: %r", raw)
                continue
            restaurants.append(restaurant)
        return restaurants


def _to_restaurant(feature: TgosThemeFeature) -> NearbyRestaurant | None:
    props = feature.properties
    coordinates = feature.geometry.coordinates if feature.geometry else []

    lng = props.lng if props.lng is not None else _at(coordinates, 0)
    lat = props.lat if props.lat is not None else _at(coordinates, 1)
    if lng is None or lat is None:
        return None

    return NearbyRestaurant(
        name=(props.category or "").strip() or UNNAMED_RESTAURANT,
        address=props.address,
        village=props.villname,
        lng=lng,
        lat=lat,
    )


def _at(values: list[float | None], index: int) -> float | None:
    return values[index] if index < len(values) else None


@lru_cache(maxsize=1)
def get_tgos_data_client() -> TgosDataClient:
    return TgosDataClient()
