"""Zippopotam.us postal code data source.

Public API:
  - geocode: lookup_postal_code
  - client: API URL
"""

from birdbrain.datasources.zippopotam.client import ZIP_LOOKUP_URL
from birdbrain.datasources.zippopotam.geocode import lookup_postal_code

__all__ = ["ZIP_LOOKUP_URL", "lookup_postal_code"]
