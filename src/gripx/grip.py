"""The Grip contract — a read/write handle onto some piece of state.

A grip exposes ``value`` (read) and ``set(new_value)`` (write, returning the
value that was accepted). It is a narrow facade, in the spirit of a lens,
but wrapped around one specific thing rather than a path into a structure.

The value may be a plain value or an awaitable of one. The contract does not
say which; combinators find out at runtime (see _mode).

Two decorators live here because every grip can produce them:
- to_read_only(): writes are ignored.
- to_observable(): writes notify registered observers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, TypeVar

from gripx import _mode

T = TypeVar("T")

Observer = Callable[[T, T | None], None]
Disposer = Callable[[], None]

logger = logging.getLogger("gripx.grip")


class Grip(ABC, Generic[T]):
    """Abstract read/write handle."""

    __slots__ = ()

    @property
    @abstractmethod
    def value(self) -> T:
        """Current state. May be an awaitable."""

    @abstractmethod
    def set(self, new_value: T) -> T:
        """Write new_value. Returns the accepted value for chaining."""

    def to_read_only(self) -> ReadOnlyGrip[T]:
        """A grip over self whose set() does nothing."""
        return ReadOnlyGrip(self)

    def to_observable(self) -> ObservableGrip[T]:
        """A grip over self that notifies observers on every set()."""
        return ObservableGrip(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DelegatingGrip(Grip[T]):
    """A grip that wraps a subject and forwards anything it doesn't define.

    Subclasses override value/set; extra capabilities of the subject
    (add_observer, expire, ...) stay reachable through the wrapper.
    """

    __slots__ = ("_subject",)

    def __init__(self, subject: Grip[Any]) -> None:
        self._subject = subject

    @property
    def subject(self) -> Grip[Any]:
        return self._subject

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._subject, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._subject!r})"


class ReadOnlyGrip(DelegatingGrip[T]):
    """Reads pass through; writes are dropped.

    Only the wrapper is read-only: the subject can still be written directly.
    """

    __slots__ = ()

    @property
    def value(self) -> T:
        return self._subject.value

    def set(self, new_value: T) -> T:
        return new_value


class ObservableGrip(DelegatingGrip[T]):
    """A grip that calls observers with (new, old) after every set().

    Observers run in registration order once the write has landed: inside
    set() for a synchronous subject, or in the task set() returns when the
    subject's write is awaitable. An exception from an observer reaches
    whoever receives set()'s result. Awaitable new and old values are passed
    as futures.
    """

    __slots__ = ("_observers", "_scheduler")

    def __init__(self, subject: Grip[T], scheduler: _mode.Scheduler | None = None) -> None:
        super().__init__(subject)
        self._observers: list[Observer[T]] = []
        self._scheduler = scheduler

    @property
    def value(self) -> T:
        return self._subject.value

    def set(self, new_value: T) -> T:
        new_value = _mode.shareable(new_value)
        old_value = _mode.shareable(self._subject.value)
        match _mode.classify(self._subject.set(new_value)):
            # a setter handing back its argument has already written
            case _mode.Async(write) if write is not new_value:
                return _mode.shareable(self._notify_after(write, new_value, old_value))
        self._notify(new_value, old_value)
        return new_value

    def _notify(self, new_value: T, old_value: T) -> None:
        for observer in list(self._observers):
            observer(new_value, old_value)

    async def _notify_after(self, write: Awaitable[Any], new_value: T, old_value: T) -> T:
        await write
        self._notify(new_value, old_value)
        return await _mode.settle(new_value)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def add_observer(self, handler: Observer[T], *, observe_initial_value: bool = False) -> Disposer:
        """Register handler. Returns a function that removes it.

        With observe_initial_value, handler is also called once with
        (current value, None) on the next scheduling tick, so callers can
        finish wiring up before it fires. The tick comes from this grip's
        scheduler, else set_scheduler(), else the running event loop. With
        none of those the replay runs on a daemon timer thread, so code
        without an event loop should pass a scheduler to stay on one thread.
        """
        self._observers.append(handler)
        logger.debug("Observer added to %r (%d total)", self, len(self._observers))
        if observe_initial_value:
            _mode.defer(self._replay, handler, scheduler=self._scheduler)

        def _remove() -> None:
            try:
                self._observers.remove(handler)
            except ValueError:
                pass  # already removed

        return _remove

    def _replay(self, handler: Observer[T]) -> None:
        try:
            handler(self._subject.value, None)
        except Exception:
            logger.exception("Initial value observer failed on %r", self)


def is_grip(obj: object) -> bool:
    return isinstance(obj, Grip)


def is_observable(grip: object) -> bool:
    """Does grip (or anything it delegates to) accept observers?"""
    return callable(getattr(grip, "add_observer", None))


def read_only_grip(grip: Grip[T]) -> ReadOnlyGrip[T]:
    """Wrap grip so that set() is a no-op returning its argument."""
    return ReadOnlyGrip(grip)


def observable_grip(grip: Grip[T], scheduler: _mode.Scheduler | None = None) -> ObservableGrip[T]:
    """Wrap grip with add_observer().

    Usage:
        name = observable_grip(value_grip("foo"))
        remove = name.add_observer(lambda new, old: print(old, "->", new))
        name.set("bar")   # prints: foo -> bar
        remove()
    """
    return ObservableGrip(grip, scheduler)
