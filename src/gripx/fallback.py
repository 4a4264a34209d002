"""Fallback grip — prefer a primary grip, fall back to a secondary one.

Reads return the primary's value unless use_fallback(primary_value) holds,
in which case the fallback's value is returned. The default predicate is
"the value is None".

Writes go to both grips, fallback first, so they stay in step. When the
fallback's write is awaitable the primary is written once it lands, and not
at all if it fails; set() then returns a task. Wrap either one in a read-only
grip to make writes land on the other only, e.g. a locally overridable global
setting.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from gripx import _mode
from gripx.grip import DelegatingGrip, Grip

T = TypeVar("T")


def _is_none(value: object) -> bool:
    return value is None


class WithFallbackGrip(DelegatingGrip[T]):
    """Primary grip with a fallback for missing values."""

    __slots__ = ("_fallback", "_use_fallback")

    def __init__(
        self,
        primary: Grip[Any],
        fallback: Grip[Any],
        use_fallback: Callable[[Any], bool] | None = None,
    ) -> None:
        super().__init__(primary)
        self._fallback = fallback
        self._use_fallback = use_fallback or _is_none

    @property
    def primary(self) -> Grip[Any]:
        return self._subject

    @property
    def fallback(self) -> Grip[Any]:
        return self._fallback

    @property
    def value(self) -> T:
        primary_value = self._subject.value
        if self._use_fallback(primary_value):
            return self._fallback.value
        return primary_value

    def set(self, new_value: T) -> T:
        new_value = _mode.shareable(new_value)
        match _mode.classify(self._fallback.set(new_value)):
            # a setter handing back its argument has already written
            case _mode.Async(write) if write is not new_value:
                return _mode.shareable(self._set_primary_after(write, new_value))
        return self._subject.set(new_value)

    async def _set_primary_after(self, fallback_write: Awaitable[Any], new_value: T) -> T:
        await fallback_write
        return await _mode.settle(self._subject.set(new_value))

    def __repr__(self) -> str:
        return f"WithFallbackGrip({self._subject!r}, {self._fallback!r})"


def with_fallback_grip(
    primary: Grip[Any],
    fallback: Grip[Any],
    use_fallback: Callable[[Any], bool] | None = None,
) -> WithFallbackGrip:
    """Combine primary and fallback grips.

    Usage:
        global_theme = value_grip("dark")
        local_theme = value_grip(None)
        theme = with_fallback_grip(local_theme, global_theme.to_read_only())
        theme.value         # "dark"
        theme.set("light")  # only local_theme changes
    """
    return WithFallbackGrip(primary, fallback, use_fallback)
