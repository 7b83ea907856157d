"""
Error taxonomy for the hotspot pipeline.

Every error carries the status code a transport layer should answer with.
``error_payload`` turns any exception into the structured payload returned to
clients; unexpected exceptions become a generic 500 and are logged.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected server error"


class BirdbrainError(Exception):
    """Base class for errors with a client-facing message and status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadInput(BirdbrainError):  # noqa: N818
    """Malformed or missing request parameters. Raised before any network call."""

    status_code = 400


class NotFound(BirdbrainError):  # noqa: N818
    """Postal code has no known location, or no hotspots matched."""

    status_code = 404


class UpstreamError(BirdbrainError):
    """Non-success response from an upstream provider."""

    def __init__(self, status_code: int, body: str = "", provider: str = "eBird") -> None:
        super().__init__(f"{provider} request failed ({status_code}): {body}", status_code)
        self.body = body
        self.provider = provider


class ConfigurationError(RuntimeError):
    """Fatal startup problem, e.g. a missing API credential."""


def error_payload(exc: BaseException) -> tuple[int, dict[str, Any]]:
    """
    Map an exception to ``(status_code, {"message": ...})``.

    Known errors keep their message and status. Anything else is logged with
    its traceback and reported as a generic 500 without internal details.
    """
    if isinstance(exc, BirdbrainError):
        return exc.status_code, {"message": exc.message}
    logger.exception("Unhandled error in hotspot pipeline", exc_info=exc)
    return 500, {"message": UNEXPECTED_ERROR_MESSAGE}
