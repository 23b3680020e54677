from __future__ import annotations

from typing import Sequence

from ..data_ingestion.normalize import normalize_keyword
from .models import BrandSummary, IngredientRecord

INGREDIENT_SEPARATOR = "、"

# Filled from later rows of the same product only while still empty.
_FIRST_WINS_FIELDS = (
    "company_name",
    "product_name",
    "ingredient_brand",
    "serving_size",
    "calories",
    "info_url",
)


class IngredientCatalog:
    """Ingredient rows keyed by normalized brand name."""

    def __init__(self, records: Sequence[IngredientRecord]) -> None:
        self._records = list(records)
        self._brand_keys = [normalize_keyword(r.brand_name) for r in self._records]

        self._brands: dict[str, BrandSummary] = {}
        for key, record in zip(self._brand_keys, self._records):
            if key not in self._brands:
                self._brands[key] = BrandSummary(
                    brand_name=record.brand_name,
                    company_name=record.company_name,
                )

    def __len__(self) -> int:
        return len(self._records)

    def suggest_brands(self, keyword: str) -> list[BrandSummary]:
        """Distinct brands containing the keyword; an empty keyword lists them all."""
        normalized = normalize_keyword(keyword)
        return [
            summary
            for key, summary in self._brands.items()
            if not normalized or normalized in key
        ]

    def brand_ingredients(self, brand_name: str) -> list[IngredientRecord]:
        """
        One detail record per product of the brand.

        Rows are grouped by product name, falling back to the ingredient name
        and then the brand. Ingredient names of a group are joined in
        first-seen order; every other field keeps the first value supplied.
        """
        normalized = normalize_keyword(brand_name)
        if not normalized:
            return []

        grouped: dict[str, tuple[IngredientRecord, list[str]]] = {}
        for key, item in zip(self._brand_keys, self._records):
            if key != normalized:
                continue

            group_key = item.product_name or item.ingredient_name or item.brand_name
            if group_key not in grouped:
                detail = item.model_copy(update={"ingredient_name": None})
                grouped[group_key] = (detail, [])

            detail, ingredients = grouped[group_key]
            for field in _FIRST_WINS_FIELDS:
                value = getattr(item, field)
                if value and not getattr(detail, field):
                    setattr(detail, field, value)
            if item.ingredient_name and item.ingredient_name not in ingredients:
                ingredients.append(item.ingredient_name)

        results: list[IngredientRecord] = []
        for detail, ingredients in grouped.values():
            if ingredients:
                detail.ingredient_name = INGREDIENT_SEPARATOR.join(ingredients)
            results.append(detail)
        return results
