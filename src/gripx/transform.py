"""Transform grip — view a grip of A as a grip of B through a pair of casts.

    cast_out: A -> B   applied on every read
    cast_in:  B -> A   applied on every write

If the subject holds awaitables, write casts that take and return
awaitables (async def works); reads and writes compose the same way. An
awaitable produced by cast_in is stored as a future so the subject can hand
it out more than once.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from gripx import _mode
from gripx.grip import DelegatingGrip, Grip

A = TypeVar("A")
B = TypeVar("B")


class TransformGrip(DelegatingGrip[B]):
    """A grip of B backed by a grip of A."""

    __slots__ = ("_cast_in", "_cast_out")

    def __init__(
        self,
        grip: Grip[A],
        cast_in: Callable[[B], A],
        cast_out: Callable[[A], B],
    ) -> None:
        super().__init__(grip)
        self._cast_in = cast_in
        self._cast_out = cast_out

    @property
    def value(self) -> B:
        return self._cast_out(self._subject.value)

    def set(self, new_value: B) -> Any:
        return self._subject.set(_mode.shareable(self._cast_in(new_value)))


def transform_grip(
    grip: Grip[A],
    *,
    cast_in: Callable[[B], A],
    cast_out: Callable[[A], B],
) -> TransformGrip[B]:
    """Transform a grip by applying a pair of casts.

    Usage:
        hex_grip = value_grip("a")
        number = transform_grip(
            hex_grip,
            cast_in=lambda n: format(n, "x"),
            cast_out=lambda s: int(s, 16),
        )
        number.value      # 10
        number.set(255)
        hex_grip.value    # "ff"
    """
    return TransformGrip(grip, cast_in, cast_out)
