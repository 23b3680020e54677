from __future__ import annotations

from typing import Mapping, Sequence

# Alias tables: logical field -> accepted column spellings, most preferred first.

ECO_FRIENDLY_HEADERS: dict[str, tuple[str, ...]] = {
    "name": ("餐廳名稱", "restaurant_name", "name"),
    "address": ("餐廳地址", "地址", "address"),
    "phone": ("餐廳電話", "電話", "tel", "phone"),
    "level": ("額外環保作為", "環保等級", "eco_level"),
}

SAFETY_HEADERS: dict[str, tuple[str, ...]] = {
    "name": ("餐廳名稱", "業者名稱", "店名", "restaurant_name", "name"),
    "address": ("餐廳地址", "營業地址", "地址", "address"),
    "phone": ("餐廳電話", "電話", "tel", "phone"),
    "level": ("評核結果", "分級評核等級", "等級", "grade", "rating"),
}

INGREDIENT_HEADERS: dict[str, tuple[str, ...]] = {
    "company": ("公司名稱", "company_name"),
    "brand": ("品牌名稱", "brand_name"),
    "product": ("產品名稱", "product_name"),
    "ingredient": ("原料名稱", "ingredient_name"),
    "ingredient_brand": ("原料品牌", "ingredient_brand"),
    "serving_size": ("每一份量", "serving_size"),
    "calories": ("熱量大卡", "calories"),
    "info_url": ("相關資訊連結", "info_link", "link"),
}

GAZETTEER_HEADERS: dict[str, tuple[str, ...]] = {
    "county": ("縣市", "縣市名稱", "county", "countyname"),
    "town": ("鄉鎮市區", "鄉鎮市區名稱", "town", "townname"),
}


def pick_first(row: Mapping[str, str], aliases: Sequence[str]) -> str | None:
    """Return the trimmed value of the first alias present with a non-blank value."""
    for alias in aliases:
        value = row.get(alias)
        if value and value.strip():
            return value.strip()
    return None


def resolve_fields(
    row: Mapping[str, str],
    alias_table: Mapping[str, Sequence[str]],
) -> dict[str, str | None]:
    return {field: pick_first(row, aliases) for field, aliases in alias_table.items()}
