from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _optional_number(name: str, cast: type) -> int | float | None:
    raw = os.getenv(name, "").strip()
    return cast(raw) if raw else None


@dataclass(frozen=True)
class GeocodeConfig:
    tgos_app_id: str = os.getenv("TGOS_APP_ID", "")
    tgos_api_key: str = os.getenv("TGOS_API_KEY", "")
    tgos_locate_url: str = os.getenv(
        "TGOS_LOCATE_URL",
        "https://addr.tgos.tw/addrws/v40/QueryAddr.asmx/QueryAddr",
    )
    nominatim_url: str = os.getenv(
        "NOMINATIM_URL", "https://nominatim.openstreetmap.org/search"
    )
    nominatim_enabled: bool = True
    user_agent: str = os.getenv("NOMINATIM_USER_AGENT", "foodfinder/1.0")
    accept_language: str = "zh-TW"
    timeout: float = float(os.getenv("GEOCODE_TIMEOUT", "10"))
    # None keeps every entry for the process lifetime.
    cache_max_entries: int | None = _optional_number("GEOCODE_CACHE_MAX_ENTRIES", int)
    cache_ttl_seconds: float | None = _optional_number("GEOCODE_CACHE_TTL", float)

    @property
    def primary_configured(self) -> bool:
        return bool(self.tgos_app_id and self.tgos_api_key)


@dataclass(frozen=True)
class TgosDataConfig:
    api_key: str = os.getenv("TGOS_DATA_API_KEY", "")
    base_url: str = "https://data.tgos.tw/MOIDataThemeAPIMgr"
    restaurant_theme_id: str = "amk94aCG"
    restaurant_keyword: str = "餐"
    timeout: float = float(os.getenv("GEOCODE_TIMEOUT", "10"))


DEFAULT_GEOCODE_CONFIG = GeocodeConfig()
DEFAULT_TGOS_DATA_CONFIG = TgosDataConfig()
