"""Helpers for running blocking filesystem work from coroutines."""

import asyncio
import functools
from concurrent.futures import Executor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


async def run_blocking(
    func: Callable[..., T],
    *args: Any,
    executor: Optional[Executor] = None,
    **kwargs: Any,
) -> T:
    """Run *func* on a worker thread and await its result.

    Args:
        func: Blocking callable.
        *args: Positional arguments for *func*.
        executor: Executor to use; ``asyncio.to_thread`` when omitted.
        **kwargs: Keyword arguments for *func*.

    Returns:
        Whatever *func* returns. Exceptions raised by *func* propagate.
    """
    if executor is None:
        return await asyncio.to_thread(func, *args, **kwargs)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, functools.partial(func, *args, **kwargs))
