"""Carry the ambient scope into threads and thread pools.

asyncio tasks (``asyncio.create_task``, ``gather``, ``TaskGroup``) and
``asyncio.to_thread`` copy the caller's context by themselves. Plain
``threading.Thread`` targets and ``ThreadPoolExecutor`` jobs do not, so a
scope entered by the spawning flow would be invisible to them. The helpers
below capture the context at spawn time and run the work inside a private
copy of it: the unit sees the spawner's scope, and scopes it enters or
releases stay local to it.
"""

from __future__ import annotations

import contextvars
import functools
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def bind(fn: Callable[..., T]) -> Callable[..., T]:
    """Return ``fn`` bound to the caller's current context.

    Every call runs in a fresh copy of the captured context, so the bound
    callable may be invoked repeatedly and from several threads at once.
    """
    captured = contextvars.copy_context()

    @functools.wraps(fn)
    def runner(*args: Any, **kwargs: Any) -> T:
        return captured.copy().run(fn, *args, **kwargs)

    return runner


def start_thread(
    target: Callable[..., Any],
    *args: Any,
    name: Optional[str] = None,
    daemon: Optional[bool] = None,
    **kwargs: Any,
) -> threading.Thread:
    """Start a thread that inherits the spawning flow's ambient scope."""
    thread = threading.Thread(target=bind(target), args=args, kwargs=kwargs, name=name, daemon=daemon)
    thread.start()
    return thread


class FlowThreadPoolExecutor(ThreadPoolExecutor):
    """``ThreadPoolExecutor`` whose jobs run in a copy of the submitter's context.

    Worker threads are reused, but each job gets its own context copy, so a
    job never sees a scope left over from a previous job on the same worker.
    ``map`` goes through ``submit`` and inherits the same behavior.
    """

    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> "Future[T]":
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


__all__ = ["bind", "start_thread", "FlowThreadPoolExecutor"]
