"""Execution mode engine — the sync/async duality every combinator shares.

A grip's value is either a plain value or an awaitable of one. Combinators
that must know which classify it once per operation into the tagged union
``Sync | Async`` and match on it.

Deferred callbacks (the observable initial-value replay) go through defer(),
which picks a scheduler: explicit > set_scheduler() > running loop > timer
thread.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")

Scheduler = Callable[[Callable[[], None]], None]


@dataclass(frozen=True, slots=True)
class Sync(Generic[T]):
    """A value that is available now."""

    value: T


@dataclass(frozen=True, slots=True)
class Async(Generic[T]):
    """A value that will be available once awaited."""

    awaitable: Awaitable[T]


Mode = Sync[T] | Async[T]


def classify(value: T | Awaitable[T]) -> Mode[T]:
    if inspect.isawaitable(value):
        return Async(value)
    return Sync(value)


async def settle(value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


def shareable(value: T | Awaitable[T]) -> T | asyncio.Future[T]:
    """Make value safe to hand to more than one consumer.

    Plain values, futures and tasks come back unchanged. Coroutines are
    scheduled as tasks on the running loop, so they also start running.
    """
    if inspect.isawaitable(value):
        return asyncio.ensure_future(value)
    return value


def resolved(value: T) -> asyncio.Future[T]:
    """A future that is already done with value."""
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


def discard(value: object) -> None:
    """Drop a value read only for inspection.

    Coroutines are closed so they don't warn about never being awaited.
    """
    if inspect.iscoroutine(value):
        value.close()


# ─── Deferred callbacks ──────────────────────────────────────────────────────
_scheduler: Scheduler | None = None


def set_scheduler(scheduler: Scheduler | None) -> None:
    """Set the process-wide scheduler for deferred grip callbacks.

    The scheduler receives a zero-argument callable and must run it later,
    outside the current call stack:
        gripx.set_scheduler(app.call_later)

    Pass None to restore the default (running asyncio loop, else a timer).
    """
    global _scheduler
    _scheduler = scheduler


def defer(fn: Callable[..., Any], *args: Any, scheduler: Scheduler | None = None) -> None:
    """Run fn(*args) on the next scheduling tick.

    Without a scheduler or a running loop, fn runs on a daemon timer thread.
    Install a scheduler to keep it on the caller's thread.
    """
    chosen = scheduler or _scheduler
    if chosen is not None:
        chosen(lambda: fn(*args))
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(0, fn, args=args)
        timer.daemon = True
        timer.start()
    else:
        loop.call_soon(fn, *args)
