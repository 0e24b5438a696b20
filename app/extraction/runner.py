import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def map_limit(
    items: Sequence[T],
    limit: int,
    fn: Callable[[T, int], Awaitable[R]],
) -> list[R]:
    """Run `fn(item, index)` over `items` with at most `limit` in flight.

    Results are returned in input order regardless of completion order. The
    first exception raised by `fn` cancels the remaining workers and is
    re-raised; no partial results are returned.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    results: list[R | None] = [None] * len(items)
    next_index = 0

    async def worker() -> None:
        nonlocal next_index
        while next_index < len(items):
            idx = next_index
            next_index += 1
            results[idx] = await fn(items[idx], idx)

    workers = [asyncio.create_task(worker()) for _ in range(min(limit, len(items)))]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        raise
    return results  # type: ignore[return-value]
