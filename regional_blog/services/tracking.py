"""
Best-effort side channel

View counters, ad impressions/clicks and visitor analytics are dispatched
here and never awaited by the response path. Failures are logged on the
``regional_blog.tracking`` logger and dropped.

Tasks are kept referenced until they finish so the event loop cannot
garbage-collect them mid-flight; ``drain()`` waits for whatever is still
running (used on shutdown and in tests).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger("regional_blog.tracking")


class BestEffortChannel:
    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, name: str, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> asyncio.Task:
        task = asyncio.create_task(self._run(name, func, *args, **kwargs), name=f"tracking:{name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, name: str, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> None:
        try:
            await func(*args, **kwargs)
        except asyncio.CancelledError:
            logger.warning("Tracking task %s cancelled", name)
        except Exception:
            logger.error("Tracking task %s failed", name, exc_info=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


tracking_channel = BestEffortChannel()
