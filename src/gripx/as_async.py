"""Async adapter — present a synchronous grip as an awaitable-valued one.

set() takes an awaitable, awaits it in a task and writes the result to the
wrapped grip. Writes land in the order set() was called.

value returns a future. While a write is pending the future resolves only
after that write lands, so a read never overtakes a write issued before it.

Needs a running event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from gripx import _mode
from gripx.grip import DelegatingGrip, Grip

T = TypeVar("T")

logger = logging.getLogger("gripx.as_async")


class AsyncGrip(DelegatingGrip[Awaitable[T]]):
    """A grip of futures over a grip of plain values."""

    __slots__ = ("_last_write",)

    def __init__(self, grip: Grip[T]) -> None:
        super().__init__(grip)
        self._last_write: asyncio.Future[T] | None = None

    @property
    def pending(self) -> bool:
        return self._last_write is not None and not self._last_write.done()

    @property
    def value(self) -> asyncio.Future[T]:
        if self._last_write is None:
            return _mode.resolved(self._subject.value)
        return _mode.shareable(self._read_after(self._last_write))

    def set(self, new_value: Awaitable[T]) -> asyncio.Future[T]:
        if isinstance(_mode.classify(new_value), _mode.Sync):
            raise TypeError(f"AsyncGrip.set() expects an awaitable, got {type(new_value).__name__}")
        self._last_write = _mode.shareable(self._write(self._last_write, new_value))
        logger.debug("Scheduled write on %r", self._subject)
        return self._last_write

    async def _write(self, previous: asyncio.Future[T] | None, new_value: Awaitable[T]) -> T:
        if previous is not None and not previous.done():
            # land writes in call order; a failed write does not block the next
            await asyncio.wait([previous])
        return self._subject.set(await new_value)

    async def _read_after(self, write: asyncio.Future[T]) -> T:
        await write
        return self._subject.value


def as_async(grip: Grip[T]) -> AsyncGrip[T]:
    """Adapt a synchronous grip to one that reads and writes awaitables.

    Usage:
        counter = value_grip(42)
        adapted = as_async(counter)
        await adapted.value            # 42
        adapted.set(fetch_count())
        await adapted.value            # waits for the write
    """
    return AsyncGrip(grip)
