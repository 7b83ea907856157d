"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helpers
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Sources:
  - ebird/       Hotspots and recent observations (eBird API v2, token required)
  - zippopotam/  Postal code → coordinates (free, no key)

Fetch functions are synchronous and use a ``requests`` session from
``birdbrain.services.http``; the async pipeline in ``flows/`` runs them off
the event loop. Non-success responses raise ``UpstreamError`` or
``NotFound`` from ``birdbrain.errors``.
"""
