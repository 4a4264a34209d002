"""Guarded grips — route reads and writes between two grips by a condition.

A guard is a zero-argument callable or a grip of bool. Either may produce an
awaitable of bool instead of a bool.

    guard true   read guarded; write source, then guarded
    guard false  read source;  write source only

Three flavors:
- guarded_grip_sync: guard, source and guarded are all synchronous.
- guarded_grip_async: everything is awaited; value and set return tasks.
- guarded_grip: picks per call. The sync path is taken only when the guard
  result and both grips' current values are plain values; anything
  awaitable sends that call down the async path.

The guard is evaluated on every call, never cached, and always before any
write. A failing guard leaves both grips untouched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from gripx import _mode
from gripx.grip import Grip

T = TypeVar("T")

Guard = Callable[[], bool | Awaitable[bool]] | Grip[bool] | Grip[Awaitable[bool]]

logger = logging.getLogger("gripx.guarded")


class GuardedGrip(Grip[T]):
    """Routes between source and guarded, choosing sync or async per call."""

    __slots__ = ("_source", "_guard", "_guarded")

    def __init__(self, source: Grip[T], guard: Guard, guarded: Grip[T]) -> None:
        self._source = source
        self._guard = guard
        self._guarded = guarded

    # --- Routing primitives ---

    def _check(self) -> bool | Awaitable[bool]:
        if isinstance(self._guard, Grip):
            return self._guard.value
        return self._guard()

    def _pick(self, on: bool) -> Grip[T]:
        return self._guarded if on else self._source

    def _write(self, on: bool, new_value: T) -> T:
        if on:
            new_value = _mode.shareable(new_value)
            self._source.set(new_value)
            return self._guarded.set(new_value)
        return self._source.set(new_value)

    async def _read_async(self, guard_result: bool | Awaitable[bool]) -> T:
        on = await _mode.settle(guard_result)
        return await _mode.settle(self._pick(on).value)

    async def _write_async(self, guard_result: bool | Awaitable[bool], new_value: T) -> T:
        on = await _mode.settle(guard_result)
        if on:
            await _mode.settle(self._source.set(new_value))
            return await _mode.settle(self._guarded.set(new_value))
        return await _mode.settle(self._source.set(new_value))

    def _write_later(self, guard_result: bool | Awaitable[bool], new_value: T) -> asyncio.Task:
        new_value = _mode.shareable(new_value)
        return _mode.shareable(self._write_async(guard_result, new_value))

    def _values_are_sync(self) -> bool:
        source_value, guarded_value = self._source.value, self._guarded.value
        match _mode.classify(source_value), _mode.classify(guarded_value):
            case _mode.Sync(), _mode.Sync():
                return True
        _mode.discard(source_value)
        _mode.discard(guarded_value)
        return False

    # --- Grip ---

    @property
    def value(self) -> T:
        guard_result = self._check()
        match _mode.classify(guard_result):
            case _mode.Sync(on):
                source_value, guarded_value = self._source.value, self._guarded.value
                chosen, other = (guarded_value, source_value) if on else (source_value, guarded_value)
                match _mode.classify(chosen), _mode.classify(other):
                    case _mode.Sync(), _mode.Sync():
                        return chosen
                logger.debug("%r: async read, grip values are awaitable", self)
                _mode.discard(other)
                return _mode.shareable(_mode.settle(chosen))
            case _mode.Async(awaitable):
                logger.debug("%r: async read, guard is awaitable", self)
                return _mode.shareable(self._read_async(awaitable))

    def set(self, new_value: T) -> T:
        guard_result = self._check()
        match _mode.classify(guard_result):
            case _mode.Sync(on) if self._values_are_sync():
                return self._write(on, new_value)
        logger.debug("%r: async write", self)
        return self._write_later(guard_result, new_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r}, {self._guarded!r})"


class SyncGuardedGrip(GuardedGrip[T]):
    """Routes synchronously. The guard must produce a plain bool."""

    __slots__ = ()

    def _flag(self) -> bool:
        match _mode.classify(self._check()):
            case _mode.Sync(on):
                return bool(on)
            case _mode.Async(awaitable):
                _mode.discard(awaitable)
                raise TypeError("guard produced an awaitable; use guarded_grip or guarded_grip_async")

    @property
    def value(self) -> T:
        return self._pick(self._flag()).value

    def set(self, new_value: T) -> T:
        return self._write(self._flag(), new_value)


class AsyncGuardedGrip(GuardedGrip[T]):
    """Always awaits: value and set return tasks."""

    __slots__ = ()

    @property
    def value(self) -> asyncio.Task:
        return _mode.shareable(self._read_async(self._check()))

    def set(self, new_value: Any) -> asyncio.Task:
        return self._write_later(self._check(), new_value)


def guarded_grip(source: Grip[T], guard: Guard, guarded: Grip[T]) -> GuardedGrip[T]:
    """Route between source and guarded, sync when possible, async otherwise.

    Usage:
        logged_in = value_grip(False)
        theme = guarded_grip(local_theme, logged_in, account_theme)
        theme.value           # local_theme.value
        logged_in.set(True)
        theme.set("dark")     # written to local_theme and account_theme
    """
    return GuardedGrip(source, guard, guarded)


def guarded_grip_sync(source: Grip[T], guard: Guard, guarded: Grip[T]) -> SyncGuardedGrip[T]:
    return SyncGuardedGrip(source, guard, guarded)


def guarded_grip_async(source: Grip[T], guard: Guard, guarded: Grip[T]) -> AsyncGuardedGrip[T]:
    """Route between source and guarded, always through the event loop.

    Usage:
        async def is_premium() -> bool:
            return await billing.check(user)

        quota = guarded_grip_async(free_quota, is_premium, premium_quota)
        await quota.value
    """
    return AsyncGuardedGrip(source, guard, guarded)
