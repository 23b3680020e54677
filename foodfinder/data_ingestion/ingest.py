from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..search.index import RestaurantIndex
from ..search.ingredients import IngredientCatalog
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from .csv_reader import RawRow, parse_csv, read_csv_text
from .gazetteer import GazetteerEntry, load_gazetteer
from .normalize import (
    DatasetProfile,
    eco_friendly_profile,
    normalize_ingredients,
    normalize_restaurants,
    safety_profile,
)

logger = logging.getLogger(__name__)


def read_rows(path: Path, encoding: str = "utf-8") -> list[RawRow]:
    """Decode one source file; a missing file yields no rows."""
    if not path.is_file():
        logger.warning("Data file %s not found; dataset will be empty", path)
        return []
    return parse_csv(read_csv_text(path, encoding))


def load_restaurant_index(
    path: Path,
    profile: DatasetProfile,
    encoding: str = "utf-8",
) -> RestaurantIndex:
    rows = read_rows(path, encoding)
    records = normalize_restaurants(rows, profile)
    logger.info("Loaded %d %s restaurants from %s", len(records), profile.name, path)
    return RestaurantIndex(records)


def load_ingredient_catalog(path: Path, encoding: str = "utf-8") -> IngredientCatalog:
    records = normalize_ingredients(read_rows(path, encoding))
    logger.info("Loaded %d ingredient rows from %s", len(records), path)
    return IngredientCatalog(records)


def load_eco_friendly(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> RestaurantIndex:
    return load_restaurant_index(config.eco_friendly_path, eco_friendly_profile(), config.encoding)


def load_safety(
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    gazetteer: Sequence[GazetteerEntry] | None = None,
) -> RestaurantIndex:
    if gazetteer is None:
        gazetteer = load_gazetteer(config.gazetteer_path, config.encoding)
    return load_restaurant_index(config.safety_path, safety_profile(gazetteer), config.encoding)
