"""
Concurrency Infrastructure.

Thread pool for blocking I/O (blob storage file access). The pool is created
lazily on first access and shut down with the application.

Usage:
    from planner.backend.core.concurrency import run_blocking

    data = await run_blocking(path.read_bytes)
"""

import asyncio
import contextvars
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, TypeVar

from planner.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_io_pool: ThreadPoolExecutor | None = None


class TracedThreadPoolExecutor(ThreadPoolExecutor):
    """ThreadPoolExecutor that propagates contextvars to worker threads.

    Standard ThreadPoolExecutor does not carry structlog context or the
    request_id into worker threads. This subclass copies the current context
    before dispatching.
    """

    def submit(self, fn, /, *args, **kwargs):
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


def get_io_pool() -> TracedThreadPoolExecutor:
    """Get the shared thread pool for blocking I/O operations."""
    global _io_pool
    if _io_pool is None:
        from planner.backend.core.config import get_app_config

        max_workers = get_app_config().concurrency.io_pool.max_workers
        _io_pool = TracedThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="io",
        )
        logger.debug("I/O thread pool created", extra={"max_workers": max_workers})
    return _io_pool


async def run_blocking(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking callable in the I/O pool and await its result."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_io_pool(), partial(fn, *args, **kwargs))


def shutdown_pools() -> None:
    """Shut down the I/O pool, waiting for running jobs."""
    global _io_pool
    if _io_pool is not None:
        _io_pool.shutdown(wait=True)
        _io_pool = None
        logger.debug("I/O thread pool shut down")
