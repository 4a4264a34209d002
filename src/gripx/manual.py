"""Manual grip — a grip built from a getter and a setter.

This is the building block for adapters over external state. The functions
may be synchronous, or asynchronous (the getter returns an awaitable, the
setter receives an awaitable and returns one); the grip does not care.

An optional context object is passed as the last argument to both functions.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from gripx.grip import Grip

T = TypeVar("T")

_NO_CONTEXT = object()


class ManualGrip(Grip[T]):
    """A grip whose value and set are caller-supplied functions."""

    __slots__ = ("_getter", "_setter", "_context")

    def __init__(
        self,
        getter: Callable[..., T],
        setter: Callable[..., T],
        context: Any = _NO_CONTEXT,
    ) -> None:
        self._getter = getter
        self._setter = setter
        self._context = context

    @property
    def has_context(self) -> bool:
        return self._context is not _NO_CONTEXT

    @property
    def value(self) -> T:
        if self._context is _NO_CONTEXT:
            return self._getter()
        return self._getter(self._context)

    def set(self, new_value: T) -> T:
        if self._context is _NO_CONTEXT:
            return self._setter(new_value)
        return self._setter(new_value, self._context)

    def __repr__(self) -> str:
        name = getattr(self._getter, "__name__", "getter")
        return f"ManualGrip({name})"


def manual_grip(
    getter: Callable[..., T],
    setter: Callable[..., T],
    context: Any = _NO_CONTEXT,
) -> ManualGrip[T]:
    """Create a grip with custom getter and setter functions.

    Usage:
        settings = {"theme": "dark"}
        theme = manual_grip(
            lambda ctx: ctx["theme"],
            lambda v, ctx: ctx.__setitem__("theme", v) or v,
            settings,
        )

    Async works the same way:
        async def load():
            return await db.fetch("theme")

        async def save(pending):
            value = await pending
            await db.store("theme", value)
            return value

        theme = manual_grip(load, save)
        await theme.set(resolved("light"))
    """
    return ManualGrip(getter, setter, context)
