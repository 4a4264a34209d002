"""Caching grip — memoize a subject's value until it goes stale.

The cache starts stale. A read while stale fetches from the subject; later
reads return the stored value without touching the subject. A write through
the cache, or expire(), marks it stale again.

If the subject accepts observers, the cache subscribes expire() at
construction, so writes through any path invalidate it. Otherwise writes that
bypass the cache need an explicit expire().

Awaitable values are stored as futures, so every read before the next
expiry returns the same future and it can be awaited any number of times.
A stale read while an awaitable write through the cache is still pending
fetches once that write has landed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

from gripx import _mode
from gripx.grip import Disposer, Grip, is_observable

T = TypeVar("T")

logger = logging.getLogger("gripx.caching")


class CachingGrip(Grip[T]):
    """A grip that caches its subject's value."""

    __slots__ = ("_subject", "_cache", "_stale", "_pending", "_unsubscribe")

    def __init__(self, subject: Grip[T]) -> None:
        self._subject = subject
        self._cache: Any = None
        self._stale = True
        self._pending: asyncio.Future | None = None
        self._unsubscribe: Disposer | None = None
        if is_observable(subject):
            self._unsubscribe = subject.add_observer(self._on_subject_change)

    @property
    def stale(self) -> bool:
        return self._stale

    @property
    def value(self) -> T:
        if self._stale:
            logger.debug("Refetching %r", self._subject)
            if self._pending is not None and not self._pending.done():
                self._cache = _mode.shareable(self._fetch_after(self._pending))
            else:
                self._cache = _mode.shareable(self._subject.value)
            self._pending = None
            self._stale = False
        return self._cache

    def set(self, new_value: T) -> T:
        self._stale = True
        result = self._subject.set(new_value)
        match _mode.classify(result):
            # a setter handing back its argument has already written
            case _mode.Async(write) if write is not new_value:
                result = self._pending = _mode.shareable(write)
        return result

    async def _fetch_after(self, write: asyncio.Future) -> T:
        await asyncio.wait([write])
        return await _mode.settle(self._subject.value)

    def expire(self) -> None:
        """Force the next read to refetch from the subject."""
        self._stale = True

    def dispose(self) -> None:
        """Stop listening to an observable subject. expire() still works."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_subject_change(self, new_value: T, old_value: T | None) -> None:
        self.expire()

    def __repr__(self) -> str:
        state = "stale" if self._stale else f"cached={self._cache!r}"
        return f"CachingGrip({self._subject!r}, {state})"


def caching_grip(subject: Grip[T]) -> CachingGrip[T]:
    """Wrap subject with a cache.

    Usage:
        profile = caching_grip(manual_grip(fetch_profile, save_profile))
        profile.value   # fetched
        profile.value   # cached
        profile.expire()
        profile.value   # fetched again
    """
    return CachingGrip(subject)
