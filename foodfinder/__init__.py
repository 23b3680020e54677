"""
Restaurant lookup service for Taiwanese open datasets.

Subpackages:
- data_ingestion: decode the source CSV files into canonical records.
- search: in-memory keyword search, suggestion and lookup.
- geocoding: resolve addresses to coordinates with provider fallback.
"""
