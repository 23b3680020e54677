"""
Geocoding layer.

Responsibilities:
- Resolve a free-text address to WGS84 coordinates.
- Try TGOS first when credentials are configured, then fall back to Nominatim.
- Memoize results per address for the process lifetime.
- Query TGOS open data for administrative towns and nearby restaurants.
"""
