from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class GeocodeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    display_name: str
    type: str | None = None
    source: Literal["tgos", "nominatim"]


class AdministrativeTown(BaseModel):
    county: str
    town: str


class NearbyRestaurant(BaseModel):
    name: str
    address: str | None = None
    village: str | None = None
    lat: float
    lng: float


class NearbyResponse(BaseModel):
    county: str
    town: str
    restaurants: list[NearbyRestaurant]


# ── Upstream payloads ────────────────────────────────────────────────────


class NominatimPlace(BaseModel):
    lat: float
    lon: float
    display_name: str | None = None
    type: str | None = None


class TgosLocateInfo(BaseModel):
    is_success: str = Field(default="True", alias="IsSuccess")
    match_type: str | None = Field(default=None, alias="OutMatchType")


class TgosAddressCandidate(BaseModel):
    x: float = Field(alias="X")
    y: float = Field(alias="Y")
    full_address: str | None = Field(default=None, alias="FULL_ADDR")


class TgosLocateResponse(BaseModel):
    info: list[TgosLocateInfo] = Field(default_factory=list, alias="Info")
    addresses: list[TgosAddressCandidate] = Field(default_factory=list, alias="AddressList")


class TgosRangeUnit(BaseModel):
    county: str = Field(alias="countyname")
    town: str = Field(alias="townname")


class TgosRangeResponse(BaseModel):
    response_count: int = Field(default=0, alias="responseCount")
    response_data: list[TgosRangeUnit] | None = Field(default=None, alias="responseData")


class TgosThemeGeometry(BaseModel):
    type: str = "Point"
    coordinates: list[float | None] = Field(default_factory=list)


class TgosThemeProperties(BaseModel):
    category: str | None = None
    address: str | None = None
    villname: str | None = None
    lng: float | None = None
    lat: float | None = None


class TgosThemeFeature(BaseModel):
    geometry: TgosThemeGeometry | None = None
    properties: TgosThemeProperties = Field(default_factory=TgosThemeProperties)


class TgosThemeResponse(BaseModel):
    response_count: int = Field(default=0, alias="responseCount")
    # Validated one by one so a bad feature only drops itself.
    features: list[Any] | None = None
