from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from ..search.models import IngredientRecord, RestaurantRecord
from .csv_reader import RawRow
from .gazetteer import GazetteerEntry
from .headers import (
    ECO_FRIENDLY_HEADERS,
    INGREDIENT_HEADERS,
    SAFETY_HEADERS,
    resolve_fields,
)

logger = logging.getLogger(__name__)

# Official place names use 臺; addresses in the wild mostly use 台.
LEGACY_TAI = "台"
CANONICAL_TAI = "臺"

_WHITESPACE = re.compile(r"\s+")
_ACTION_DELIMITERS = re.compile(r"[,，、]")
_EDGE_QUOTES = re.compile(r"^[\"'\s]+|[\"'\s]+$")

Fields = dict[str, Any]


def normalize_keyword(value: str | None) -> str:
    """
    Search-key normalization shared by load time and query time.

    Removes every whitespace character (ASCII and full-width) and case-folds.
    Applying it twice gives the same result as applying it once.
    """
    if not value:
        return ""
    return _WHITESPACE.sub("", value).casefold()


def parse_eco_actions(raw: str | None) -> list[str]:
    if not raw:
        return []

    actions: list[str] = []
    for item in _ACTION_DELIMITERS.split(raw):
        label = _EDGE_QUOTES.sub("", item).strip()
        # Bare numbers are row indices leaking out of the source sheet.
        if not label or label.isdecimal():
            continue
        actions.append(label)
    return actions


def _canonical_place(value: str) -> str:
    return value.strip().replace(LEGACY_TAI, CANONICAL_TAI)


def derive_region(
    address: str | None,
    gazetteer: Sequence[GazetteerEntry],
) -> tuple[str | None, str | None]:
    """
    Tag an address with its county and town.

    First gazetteer entry whose county+town is a prefix wins; otherwise the
    first entry whose county alone is a prefix gives a county-only tag.
    """
    if not address:
        return None, None

    target = _canonical_place(address)
    for entry in gazetteer:
        if target.startswith(_canonical_place(entry.county + entry.town)):
            return entry.county, entry.town
    for entry in gazetteer:
        if target.startswith(_canonical_place(entry.county)):
            return entry.county, None
    return None, None


@dataclass(frozen=True)
class DatasetProfile:
    """Alias table plus the dataset-specific enrichment applied to each row."""

    name: str
    headers: Mapping[str, Sequence[str]]
    key_field: str = "name"
    enrich: Callable[[Fields], Fields] | None = None


def normalize_rows(rows: Iterable[RawRow], profile: DatasetProfile) -> list[Fields]:
    """Resolve aliases and enrich each row; rows without the key field are dropped."""
    normalized: list[Fields] = []
    dropped = 0
    for row in rows:
        fields: Fields = resolve_fields(row, profile.headers)
        if not fields.get(profile.key_field):
            dropped += 1
            continue
        if profile.enrich is not None:
            fields.update(profile.enrich(fields))
        normalized.append(fields)

    if dropped:
        logger.info(
            "%s: dropped %d row(s) without %r", profile.name, dropped, profile.key_field
        )
    return normalized


def _eco_enrich(fields: Fields) -> Fields:
    return {"eco_actions": parse_eco_actions(fields.get("level"))}


def eco_friendly_profile() -> DatasetProfile:
    return DatasetProfile(
        name="eco-friendly",
        headers=ECO_FRIENDLY_HEADERS,
        enrich=_eco_enrich,
    )


def safety_profile(gazetteer: Sequence[GazetteerEntry]) -> DatasetProfile:
    def _region_enrich(fields: Fields) -> Fields:
        county, town = derive_region(fields.get("address"), gazetteer)
        return {"county": county, "town": town}

    return DatasetProfile(name="safety", headers=SAFETY_HEADERS, enrich=_region_enrich)


def to_restaurant_record(fields: Fields) -> RestaurantRecord:
    return RestaurantRecord(
        name=fields["name"],
        address=fields.get("address"),
        phone=fields.get("phone"),
        level=fields.get("level"),
        eco_actions=list(fields.get("eco_actions") or []),
        county=fields.get("county"),
        town=fields.get("town"),
    )


def normalize_restaurants(
    rows: Iterable[RawRow],
    profile: DatasetProfile,
) -> list[RestaurantRecord]:
    return [to_restaurant_record(fields) for fields in normalize_rows(rows, profile)]


def ingredient_profile() -> DatasetProfile:
    return DatasetProfile(name="ingredients", headers=INGREDIENT_HEADERS, key_field="brand")


def to_ingredient_record(fields: Fields) -> IngredientRecord:
    return IngredientRecord(
        brand_name=fields["brand"],
        company_name=fields.get("company"),
        product_name=fields.get("product"),
        ingredient_name=fields.get("ingredient"),
        ingredient_brand=fields.get("ingredient_brand"),
        serving_size=fields.get("serving_size"),
        calories=fields.get("calories"),
        info_url=fields.get("info_url"),
    )


def normalize_ingredients(rows: Iterable[RawRow]) -> list[IngredientRecord]:
    return [to_ingredient_record(fields) for fields in normalize_rows(rows, ingredient_profile())]
