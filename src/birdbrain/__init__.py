"""Birdbrain - find nearby birding hotspots ranked by recent eBird activity.

Architecture::

    datasources/   External APIs (eBird hotspots + observations, Zippopotam geocoding)
    analysis/      Pure logic (activity aggregation, ranking)
    concurrency.py Ordered async map with a worker budget
    flows/         Request pipeline (origin → hotspots → activity → ranking)
    services/      Shared utilities (HTTP session with default timeout)
    schemas.py     Pydantic models returned to callers (camelCase on the wire)
    errors.py      BadInput / NotFound / UpstreamError and the error payload

Data flow: flows → datasources → analysis → schemas → caller (CLI or a web layer)

The eBird API key never leaves the process: it is read into ``Settings`` at
startup and attached as a request header by ``EBirdClient``.
"""

__version__ = "0.1.0"

from birdbrain.config import Settings
from birdbrain.flows.hotspots import HotspotFinder

__all__ = ["HotspotFinder", "Settings", "__version__"]
