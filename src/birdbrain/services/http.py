"""
Shared HTTP client factory.

Provides a pre-configured ``requests.Session`` with a default timeout injected
into every request. The default retry policy performs no retries: a failed
upstream call surfaces immediately and the hotspot pipeline never re-issues
it. All datasource modules should use this instead of bare ``requests.get``.

Usage::

    from birdbrain.services.http import session

    resp = session.get("https://api.example.com/v1/data")
    resp.raise_for_status()
"""

from __future__ import annotations

from collections.abc import Mapping

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Default retry strategy: none. Status codes are left to the caller.
DEFAULT_RETRY = Retry(
    total=0,
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # let the caller inspect resp.status_code
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "Birdbrain/1.0"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
) -> requests.Session:
    """
    Build a ``requests.Session`` with an adapter mounted and a default timeout.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        headers: Extra headers sent with every request (e.g. API tokens).
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"
    if headers:
        s.headers.update(headers)

    # Inject a default timeout so an unresponsive upstream cannot stall a
    # request indefinitely.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        # Session.request passes timeout=None when the caller omits it.
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session for unauthenticated lookups. Import and use directly.
session: requests.Session = create_session()
