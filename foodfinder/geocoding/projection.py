from __future__ import annotations

from typing import Any, Protocol

from .errors import ServiceUnavailableError

TWD97_TM2 = "EPSG:3826"
WGS84 = "EPSG:4326"


class Reprojector(Protocol):
    def to_wgs84(self, x: float, y: float) -> tuple[float, float]:
        """Return ``(lng, lat)`` for a projected point."""


class PyprojReprojector:
    def __init__(self, transformer: Any) -> None:
        self._transformer = transformer

    def to_wgs84(self, x: float, y: float) -> tuple[float, float]:
        lng, lat = self._transformer.transform(x, y)
        return float(lng), float(lat)


def load_twd97_reprojector() -> PyprojReprojector:
    """TWD97 / TM2 zone 121 (metres) to WGS84 longitude/latitude."""
    try:
        from pyproj import Transformer
    except ImportError as exc:
        raise ServiceUnavailableError(
            "pyproj is required to reproject TGOS coordinates", provider="tgos"
        ) from exc
    return PyprojReprojector(Transformer.from_crs(TWD97_TM2, WGS84, always_xy=True))
