"""
In-memory search over the normalized datasets.

Responsibilities:
- Hold each restaurant dataset with its precomputed search keys.
- Answer keyword search, bounded suggestion and exact-name lookup.
- Group ingredient rows per brand and product.
"""
