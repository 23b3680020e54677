from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .csv_reader import parse_csv, read_csv_text
from .headers import GAZETTEER_HEADERS, resolve_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GazetteerEntry:
    county: str
    town: str


def parse_gazetteer(content: str) -> list[GazetteerEntry]:
    """Read county/town pairs, keeping the file order (most specific first)."""
    entries: list[GazetteerEntry] = []
    for row in parse_csv(content):
        fields = resolve_fields(row, GAZETTEER_HEADERS)
        county, town = fields["county"], fields["town"]
        if not county or not town:
            continue
        entries.append(GazetteerEntry(county=county, town=town))
    return entries


def load_gazetteer(path: Path, encoding: str = "utf-8") -> list[GazetteerEntry]:
    if not path.is_file():
        logger.warning("Gazetteer file %s not found; region tags will be empty", path)
        return []
    entries = parse_gazetteer(read_csv_text(path, encoding))
    logger.info("Loaded %d gazetteer entries from %s", len(entries), path)
    return entries
