"""
Data ingestion package for the restaurant lookup service.

Responsibilities:
- Decode raw CSV text (BOM-tolerant, quoted fields) into header-keyed rows.
- Resolve per-dataset column aliases into logical fields.
- Normalize rows into canonical records (eco actions, region tags).
- Load every dataset once at startup for the search layer.
"""
