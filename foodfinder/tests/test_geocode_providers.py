import html
import json

import pytest
import requests

from foodfinder.geocoding.config import GeocodeConfig
from foodfinder.geocoding.errors import (
    AddressNotFoundError,
    MalformedResponseError,
    ServiceUnavailableError,
    UpstreamError,
)
from foodfinder.geocoding.loader import SingleFlightLoader
from foodfinder.geocoding.projection import load_twd97_reprojector
from foodfinder.geocoding.providers import (
    NominatimGeocoder,
    ProjectedPoint,
    TgosAddressLocator,
    TgosGeocoder,
)


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload, ensure_ascii=False)


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


# ── Nominatim ────────────────────────────────────────────────────────────


def test_nominatim_uses_first_candidate():
    session = DummySession(DummyResponse(payload=[
        {"lat": "25.0330", "lon": "121.5654", "display_name": "台北101", "type": "attraction"},
        {"lat": "0", "lon": "0", "display_name": "ignored"},
    ]))
    geocoder = NominatimGeocoder(url="https://nominatim.test/search", user_agent="tests/1.0",
                                 timeout=7, session=session)

    result = geocoder.geocode("台北101")

    assert result.lat == pytest.approx(25.0330)
    assert result.lng == pytest.approx(121.5654)
    assert result.display_name == "台北101"
    assert result.type == "attraction"
    assert result.source == "nominatim"

    call = session.calls[0]
    assert call["params"]["q"] == "台北101"
    assert call["params"]["limit"] == 1
    assert call["headers"]["Accept-Language"] == "zh-TW"
    assert call["headers"]["User-Agent"] == "tests/1.0"
    assert call["timeout"] == 7


def test_nominatim_display_name_falls_back_to_address():
    session = DummySession(DummyResponse(payload=[{"lat": 1, "lon": 2}]))
    result = NominatimGeocoder(session=session).geocode("某處")
    assert result.display_name == "某處"
    assert result.type is None


def test_nominatim_empty_list_is_not_found():
    session = DummySession(DummyResponse(payload=[]))
    with pytest.raises(AddressNotFoundError) as excinfo:
        NominatimGeocoder(session=session).geocode("nowhere")
    assert excinfo.value.provider == "nominatim"


def test_nominatim_http_error_is_unavailable():
    session = DummySession(DummyResponse(status_code=503, text="busy"))
    with pytest.raises(ServiceUnavailableError):
        NominatimGeocoder(session=session).geocode("臺北市")


def test_nominatim_transport_error_is_unavailable():
    session = DummySession(error=requests.ConnectionError("refused"))
    with pytest.raises(ServiceUnavailableError):
        NominatimGeocoder(session=session).geocode("臺北市")


@pytest.mark.parametrize("body", ["not json", json.dumps({"lat": 1}), json.dumps([{"lat": "x"}])])
def test_nominatim_malformed_payload(body):
    session = DummySession(DummyResponse(text=body))
    with pytest.raises(MalformedResponseError):
        NominatimGeocoder(session=session).geocode("臺北市")


# ── TGOS locator ─────────────────────────────────────────────────────────


TGOS_PAYLOAD = {
    "Info": [{"IsSuccess": "True", "OutTotal": "1", "OutMatchType": "完全比對"}],
    "AddressList": [{"FULL_ADDR": "臺北市中正區重慶南路一段122號", "X": 302162.6, "Y": 2770592.3}],
}


def test_tgos_locator_reads_first_address():
    session = DummySession(DummyResponse(payload=TGOS_PAYLOAD))
    locator = TgosAddressLocator("app", "key", url="https://tgos.test/QueryAddr", session=session)

    point = locator.locate("重慶南路一段122號")

    assert point == ProjectedPoint(
        x=302162.6, y=2770592.3,
        display_name="臺北市中正區重慶南路一段122號", type="完全比對",
    )
    params = session.calls[0]["params"]
    assert params["oAPPId"] == "app"
    assert params["oAPIKey"] == "key"
    assert params["oSRS"] == "EPSG:3826"


def test_tgos_locator_accepts_xml_wrapped_json():
    body = '<?xml version="1.0" encoding="utf-8"?>\n<string xmlns="http://tempuri.org/">%s</string>' % (
        json.dumps(TGOS_PAYLOAD, ensure_ascii=False)
    )
    session = DummySession(DummyResponse(text=body))
    point = TgosAddressLocator("app", "key", session=session).locate("x")
    assert point.x == pytest.approx(302162.6)


def test_tgos_locator_unescapes_xml_wrapped_json():
    payload = {
        "Info": TGOS_PAYLOAD["Info"],
        "AddressList": [{"FULL_ADDR": "臺北市中正區A&B大樓", "X": 1.0, "Y": 2.0}],
    }
    body = "<string>%s</string>" % html.escape(json.dumps(payload, ensure_ascii=False), quote=False)
    assert "&amp;" in body
    session = DummySession(DummyResponse(text=body))
    point = TgosAddressLocator("app", "key", session=session).locate("x")
    assert point.display_name == "臺北市中正區A&B大樓"


def test_tgos_locator_unsuccessful_info_is_upstream_error():
    payload = {"Info": [{"IsSuccess": "False"}], "AddressList": []}
    session = DummySession(DummyResponse(payload=payload))
    with pytest.raises(UpstreamError):
        TgosAddressLocator("app", "key", session=session).locate("x")


def test_tgos_locator_no_candidates_is_not_found():
    payload = {"Info": [{"IsSuccess": "True", "OutTotal": "0"}], "AddressList": []}
    session = DummySession(DummyResponse(payload=payload))
    with pytest.raises(AddressNotFoundError):
        TgosAddressLocator("app", "key", session=session).locate("x")


# ── TGOS geocoder ────────────────────────────────────────────────────────


class FakeLocator:
    def locate(self, address):
        return ProjectedPoint(x=250000.0, y=2544283.12, display_name=None, type="完全比對")


class FakeReprojector:
    def __init__(self):
        self.calls = []

    def to_wgs84(self, x, y):
        self.calls.append((x, y))
        return 121.0, 23.0


def test_tgos_geocoder_reprojects_locator_output():
    reprojector = FakeReprojector()
    geocoder = TgosGeocoder(
        locator=SingleFlightLoader("locator", FakeLocator),
        reprojector=SingleFlightLoader("reprojector", lambda: reprojector),
    )

    result = geocoder.geocode("南投縣")

    assert reprojector.calls == [(250000.0, 2544283.12)]
    assert (result.lat, result.lng) == (23.0, 121.0)
    assert result.display_name == "南投縣"
    assert result.source == "tgos"


def test_tgos_geocoder_without_credentials_is_unavailable():
    geocoder = TgosGeocoder.from_config(GeocodeConfig(tgos_app_id="", tgos_api_key=""))
    with pytest.raises(ServiceUnavailableError):
        geocoder.geocode("臺北市")


def test_twd97_reprojection_on_central_meridian():
    pytest.importorskip("pyproj")
    reprojector = load_twd97_reprojector()

    lng, lat = reprojector.to_wgs84(250000.0, 2544283.12)

    assert lng == pytest.approx(121.0, abs=1e-6)
    assert lat == pytest.approx(23.0, abs=1e-3)
