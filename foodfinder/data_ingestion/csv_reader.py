from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

BOM = "\ufeff"

_LINE_BREAK = re.compile(r"\r?\n")

RawRow = dict[str, str]


def split_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed fields.

    Double quotes toggle the quoted state, ``""`` inside a quoted field is a
    literal quote, and commas only separate fields outside quotes. An
    unmatched quote keeps the rest of the line quoted.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current))
    return [value.strip() for value in values]


def parse_csv(content: str) -> list[RawRow]:
    """Decode CSV text into header-keyed rows, one per non-blank data line."""
    sanitized = content.removeprefix(BOM)
    lines = [line for line in _LINE_BREAK.split(sanitized) if line.strip()]
    if not lines:
        return []

    # Some exports carry a second BOM on the first header.
    headers = [header.removeprefix(BOM).strip() for header in split_csv_line(lines[0])]

    rows: list[RawRow] = []
    for line in lines[1:]:
        values = split_csv_line(line)
        row: RawRow = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)
    return rows


def read_csv_text(path: Path, encoding: str = "utf-8") -> str:
    """
    Read a source file line by line, dropping lines that fail to decode.

    A single corrupt row is logged and skipped so the rest of the file still
    loads.
    """
    kept: list[str] = []
    for lineno, raw in enumerate(path.read_bytes().split(b"\n"), start=1):
        try:
            kept.append(raw.decode(encoding))
        except UnicodeDecodeError:
            logger.warning("Skipping undecodable line %d in %s", lineno, path)
    return "\n".join(kept)
