"""
Bounded-concurrency async mapping.

``map_with_concurrency`` applies an async transform to every item using a
fixed pool of workers that pull the next index from a shared cursor. Results
land at their input index, so output order matches input order whatever the
completion order. The first failure cancels the remaining workers and is
re-raised; no partial results are returned.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar, cast

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_CONCURRENCY = 5


async def map_with_concurrency(
    items: Iterable[T],
    transform: Callable[[T], Awaitable[R]],
    limit: int = DEFAULT_CONCURRENCY,
    *,
    timeout: float | None = None,
) -> list[R]:
    """
    Run ``transform`` over ``items`` with at most ``min(limit, len(items))`` in flight.

    Args:
        items: Inputs; consumed once.
        transform: Async function applied to each item.
        limit: Worker budget.
        timeout: Optional per-item timeout in seconds. Exceeding it fails the
            whole batch with ``TimeoutError``.

    Raises:
        ValueError: ``limit`` is less than 1.
        Exception: The first error raised by any transform.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    pending_items = list(items)
    if not pending_items:
        return []

    results: list[R | None] = [None] * len(pending_items)
    cursor = 0

    async def worker() -> None:
        nonlocal cursor
        while cursor < len(pending_items):
            index = cursor
            cursor += 1
            call = transform(pending_items[index])
            if timeout is not None:
                results[index] = await asyncio.wait_for(call, timeout)
            else:
                results[index] = await call

    worker_count = min(limit, len(pending_items))
    workers = [asyncio.create_task(worker()) for _ in range(worker_count)]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        logger.debug("Cancelled batch of %d items after a failure", len(pending_items))
        raise

    return cast("list[R]", results)
