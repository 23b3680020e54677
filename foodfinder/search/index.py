from __future__ import annotations

from typing import Sequence

import icu
import pandas as pd

from ..data_ingestion.normalize import normalize_keyword
from .models import RestaurantRecord

DEFAULT_SUGGEST_LIMIT = 5

# Traditional Chinese collation orders Han characters by stroke count.
_COLLATOR = icu.Collator.createInstance(icu.Locale("zh_Hant_TW"))


def collation_key(label: str) -> tuple[bytes, str]:
    """Sort key for labels: the zh-Hant ICU sort key, then the label itself."""
    return _COLLATOR.getSortKey(label), label


class RestaurantIndex:
    """
    Immutable collection of restaurant records plus their search keys.

    Keys are computed once here and live in a DataFrame aligned with the
    record list, so positional index ``i`` always refers to ``records[i]``.
    """

    def __init__(self, records: Sequence[RestaurantRecord]) -> None:
        self._records: list[RestaurantRecord] = list(records)
        self._keys = pd.DataFrame(
            {
                "name_key": [normalize_keyword(r.name) for r in self._records],
                "address_key": [normalize_keyword(r.address) for r in self._records],
            },
            dtype=object,
        )
        self._action_labels = sorted(
            {action for r in self._records for action in r.eco_actions},
            key=collation_key,
        )

    def __len__(self) -> int:
        return len(self._records)

    def list_all(self) -> list[RestaurantRecord]:
        return list(self._records)

    def _contains(self, column: str, keyword: str) -> pd.Series:
        return self._keys[column].str.contains(keyword, regex=False, na=False)

    def _select(self, mask: pd.Series) -> list[RestaurantRecord]:
        return [self._records[i] for i in self._keys.index[mask.to_numpy(dtype=bool)]]

    def search(self, keyword: str) -> list[RestaurantRecord]:
        """Records whose name or address contains the keyword, in ingestion order."""
        normalized = normalize_keyword(keyword)
        if not normalized or self._keys.empty:
            return []
        mask = self._contains("name_key", normalized) | self._contains("address_key", normalized)
        return self._select(mask)

    def suggest(self, keyword: str, limit: int = DEFAULT_SUGGEST_LIMIT) -> list[RestaurantRecord]:
        normalized = normalize_keyword(keyword)
        if not normalized or limit <= 0 or self._keys.empty:
            return []
        return self._select(self._contains("name_key", normalized))[:limit]

    def find_by_exact_name(self, name: str) -> RestaurantRecord | None:
        normalized = normalize_keyword(name)
        if not normalized or self._keys.empty:
            return None
        hits = self._keys.index[(self._keys["name_key"] == normalized).to_numpy(dtype=bool)]
        if len(hits) == 0:
            return None
        return self._records[hits[0]]

    def list_distinct_action_labels(self) -> list[str]:
        return list(self._action_labels)
