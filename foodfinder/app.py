from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query

from .geocoding.errors import (
    AddressNotFoundError,
    GeocodeError,
    InvalidAddressError,
    ServiceUnavailableError,
)
from .geocoding.models import GeocodeResult, NearbyResponse
from .geocoding.resolver import GeocodeResolver, get_resolver
from .geocoding.tgos_data import TgosDataClient, get_tgos_data_client
from .search.data_store import Catalog, get_catalog, load_catalog
from .search.index import DEFAULT_SUGGEST_LIMIT, RestaurantIndex
from .search.models import (
    ActionLabelsResponse,
    BrandSummary,
    IngredientRecord,
    RestaurantListResponse,
    RestaurantRecord,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Datasets are indexed once, before the first request is served.
    load_catalog()
    yield


app = FastAPI(title="Restaurant Lookup API", version="1.0.0", lifespan=lifespan)


def _restaurants(dataset: str, catalog: Catalog) -> RestaurantIndex:
    index = catalog.restaurants(dataset)
    if index is None:
        raise HTTPException(status_code=404, detail=f"Unknown dataset: {dataset}")
    return index


def _http_error(exc: GeocodeError) -> HTTPException:
    if isinstance(exc, InvalidAddressError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, AddressNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ServiceUnavailableError):
        return HTTPException(status_code=503, detail=str(exc))
    logger.error("Unclassified geocoding failure: %s", exc)
    return HTTPException(status_code=502, detail=str(exc))


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Restaurants ──────────────────────────────────────────────────────────


@app.get("/restaurants/eco/actions", response_model=ActionLabelsResponse)
def eco_actions(catalog: Catalog = Depends(get_catalog)) -> ActionLabelsResponse:
    return ActionLabelsResponse(actions=catalog.eco_friendly.list_distinct_action_labels())


@app.get("/restaurants/{dataset}", response_model=RestaurantListResponse)
def list_restaurants(
    dataset: str,
    catalog: Catalog = Depends(get_catalog),
) -> RestaurantListResponse:
    records = _restaurants(dataset, catalog).list_all()
    return RestaurantListResponse(restaurants=records, total=len(records))


@app.get("/restaurants/{dataset}/search", response_model=RestaurantListResponse)
def search_restaurants(
    dataset: str,
    q: str = "",
    catalog: Catalog = Depends(get_catalog),
) -> RestaurantListResponse:
    records = _restaurants(dataset, catalog).search(q)
    return RestaurantListResponse(restaurants=records, total=len(records))


@app.get("/restaurants/{dataset}/suggest", response_model=list[RestaurantRecord])
def suggest_restaurants(
    dataset: str,
    q: str = "",
    limit: int = Query(default=DEFAULT_SUGGEST_LIMIT, ge=1, le=50),
    catalog: Catalog = Depends(get_catalog),
) -> list[RestaurantRecord]:
    return _restaurants(dataset, catalog).suggest(q, limit)


@app.get("/restaurants/{dataset}/lookup", response_model=RestaurantRecord)
def lookup_restaurant(
    dataset: str,
    name: str,
    catalog: Catalog = Depends(get_catalog),
) -> RestaurantRecord:
    record = _restaurants(dataset, catalog).find_by_exact_name(name)
    if record is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return record


# ── Ingredients ──────────────────────────────────────────────────────────


@app.get("/ingredients/brands", response_model=list[BrandSummary])
def brands(q: str = "", catalog: Catalog = Depends(get_catalog)) -> list[BrandSummary]:
    return catalog.ingredients.suggest_brands(q)


@app.get("/ingredients/brands/{brand}", response_model=list[IngredientRecord])
def brand_ingredients(brand: str, catalog: Catalog = Depends(get_catalog)) -> list[IngredientRecord]:
    return catalog.ingredients.brand_ingredients(brand)


# ── Geocoding ────────────────────────────────────────────────────────────


@app.get("/geocode", response_model=GeocodeResult)
def geocode(
    address: str = "",
    resolver: GeocodeResolver = Depends(get_resolver),
) -> GeocodeResult:
    try:
        return resolver.resolve(address)
    except GeocodeError as exc:
        raise _http_error(exc) from exc


@app.get("/geocode/cache/stats")
def geocode_cache_stats(resolver: GeocodeResolver = Depends(get_resolver)) -> dict:
    return resolver.cache.stats()


@app.get("/nearby", response_model=NearbyResponse)
def nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    client: TgosDataClient = Depends(get_tgos_data_client),
) -> NearbyResponse:
    try:
        town = client.administrative_town(lat, lng)
        restaurants = client.restaurants_by_town(town.county, town.town)
    except GeocodeError as exc:
        raise _http_error(exc) from exc
    return NearbyResponse(county=town.county, town=town.town, restaurants=restaurants)
