"""site_probe.executor: ограниченный параллелизм для асинхронных операций."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")

__all__ = ["run_bounded"]


async def run_bounded(
    items: Iterable[T],
    limit: int,
    op: Callable[[T], Awaitable[R]],
) -> List[R]:
    """Run ``op(item)`` for every item with at most *limit* operations in flight.

    The next item is submitted only after a slot frees up, so ``limit=1`` is
    plain sequential execution. Results come back in the order of *items*.
    A failing operation does not cancel its siblings; once everything has
    settled, the first failure in item order is re-raised. Cancelling the caller
    cancels and awaits every operation already started.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    slots = asyncio.Semaphore(limit)

    async def _guarded(item: T) -> R:
        try:
            return await op(item)
        finally:
            slots.release()

    tasks: List[asyncio.Task[R]] = []
    try:
        for item in items:
            await slots.acquire()
            tasks.append(asyncio.create_task(_guarded(item)))
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
    except BaseException:
        # caller cancelled: nothing submitted so far may outlive this call
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return outcomes  # type: ignore[return-value]
