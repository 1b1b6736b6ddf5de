"""Shared concurrency primitives.

``throttled_gather`` is a drop-in replacement for ``asyncio.gather`` that
wraps each awaitable in a semaphore acquire/release, so fan-out over
network-bound steps (extractors calling enrichment services) stays bounded.
Results always come back in input order, whatever order they finish in.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")

_DEFAULT_LIMIT = 4


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore | None = None,
    return_exceptions: bool = False,
) -> list[_T | BaseException]:
    """Run awaitables concurrently with semaphore throttling.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Optional semaphore for concurrency control.  A fresh one allowing
        four concurrent awaitables is created when omitted.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.  The
        default raises the first failure (in input order among those
        finished) after cancelling and awaiting every sibling still
        running.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """
    if semaphore is None:
        semaphore = asyncio.Semaphore(_DEFAULT_LIMIT)

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    if return_exceptions:
        return await asyncio.gather(
            *(_wrapped(c) for c in coros),
            return_exceptions=True,
        )

    tasks = [asyncio.create_task(_wrapped(c)) for c in coros]
    if not tasks:
        return []

    try:
        done, _pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in tasks:
            if task in done and not task.cancelled() and task.exception() is not None:
                raise task.exception()
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Collect cancelled siblings so none is left pending or unretrieved.
        await asyncio.gather(*tasks, return_exceptions=True)

    return [task.result() for task in tasks]
