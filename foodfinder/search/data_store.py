from __future__ import annotations

from dataclasses import dataclass

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from ..data_ingestion.ingest import load_eco_friendly, load_ingredient_catalog, load_safety
from .index import RestaurantIndex
from .ingredients import IngredientCatalog


@dataclass(frozen=True)
class Catalog:
    eco_friendly: RestaurantIndex
    safety: RestaurantIndex
    ingredients: IngredientCatalog

    def restaurants(self, dataset: str) -> RestaurantIndex | None:
        return {"eco": self.eco_friendly, "safety": self.safety}.get(dataset)


_catalog: Catalog | None = None


def load_catalog(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Catalog:
    """Read and index every dataset. Called once at startup."""
    global _catalog
    _catalog = Catalog(
        eco_friendly=load_eco_friendly(config),
        safety=load_safety(config),
        ingredients=load_ingredient_catalog(config.ingredients_path, config.encoding),
    )
    return _catalog


def get_catalog() -> Catalog:
    """Return the process-wide catalog, loading it if startup has not run."""
    if _catalog is None:
        return load_catalog()
    return _catalog
