"""In-memory grip — a plain variable with the Grip interface.

Holds the object itself, not a copy: mutating a held list or dict is visible
to every reader.
"""

from __future__ import annotations

from typing import TypeVar

from gripx.grip import Grip

T = TypeVar("T")


class ValueGrip(Grip[T]):
    """A single in-memory value."""

    __slots__ = ("_value",)

    def __init__(self, initial_value: T) -> None:
        self._value = initial_value

    @property
    def value(self) -> T:
        return self._value

    def set(self, new_value: T) -> T:
        self._value = new_value
        return new_value

    def __repr__(self) -> str:
        return f"ValueGrip({self._value!r})"


def value_grip(initial_value: T) -> ValueGrip[T]:
    """Create a grip on a mutable in-memory variable.

    Usage:
        counter = value_grip(0)
        counter.set(counter.value + 1)
        counter.value  # 1
    """
    return ValueGrip(initial_value)
