from __future__ import annotations

from pydantic import BaseModel, Field


class RestaurantRecord(BaseModel):
    name: str
    address: str | None = None
    phone: str | None = None
    level: str | None = Field(
        default=None,
        description="Eco level or inspection grade, depending on the source dataset",
    )
    eco_actions: list[str] = Field(default_factory=list)
    county: str | None = None
    town: str | None = None


class IngredientRecord(BaseModel):
    brand_name: str
    company_name: str | None = None
    product_name: str | None = None
    ingredient_name: str | None = None
    ingredient_brand: str | None = None
    serving_size: str | None = None
    calories: str | None = None
    info_url: str | None = None


class BrandSummary(BaseModel):
    brand_name: str
    company_name: str | None = None


class RestaurantListResponse(BaseModel):
    restaurants: list[RestaurantRecord]
    total: int


class ActionLabelsResponse(BaseModel):
    actions: list[str]
