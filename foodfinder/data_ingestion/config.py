from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _default_data_dir() -> Path:
    return Path(os.getenv("FOODFINDER_DATA_DIR", "data"))


@dataclass(frozen=True)
class IngestionConfig:
    """
    Locations of the source files read at startup.
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    eco_friendly_filename: str = "eco-friendly.csv"
    safety_filename: str = "safety.csv"
    ingredients_filename: str = "ingredients.csv"
    gazetteer_filename: str = "gazetteer.csv"
    encoding: str = "utf-8"

    @property
    def eco_friendly_path(self) -> Path:
        return self.data_dir / self.eco_friendly_filename

    @property
    def safety_path(self) -> Path:
        return self.data_dir / self.safety_filename

    @property
    def ingredients_path(self) -> Path:
        return self.data_dir / self.ingredients_filename

    @property
    def gazetteer_path(self) -> Path:
        return self.data_dir / self.gazetteer_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
