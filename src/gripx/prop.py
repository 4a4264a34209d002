"""Property grips — focus on one key or index of a composite value.

Two flavors:
- object_prop_grip(prop)(target): writes mutate target in place. Use it when
  the target is owned elsewhere, e.g. an object inside a cache cell.
- prop_grip(grip, prop): writes build a new composite and write it back
  through grip. Anyone holding the old composite sees it unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any, Awaitable, Callable, Hashable, TypeVar

from gripx import _mode
from gripx.grip import DelegatingGrip, Grip

T = TypeVar("T")


class ObjectPropGrip(Grip[T]):
    """Grip on target[prop], updated in place."""

    __slots__ = ("_prop", "_target")

    def __init__(self, prop: Hashable, target: MutableMapping | MutableSequence) -> None:
        self._prop = prop
        self._target = target

    @property
    def value(self) -> T:
        return self._target[self._prop]

    def set(self, new_value: T) -> T:
        self._target[self._prop] = new_value
        return new_value

    def __repr__(self) -> str:
        return f"ObjectPropGrip({self._prop!r})"


def object_prop_grip(prop: Hashable) -> Callable[[Any], ObjectPropGrip]:
    """Return a factory that grips prop on whatever target it is given.

    Usage:
        foo = object_prop_grip("foo")
        config = {"foo": 1}
        foo(config).set(2)
        config["foo"]  # 2
    """

    def _grip(target: MutableMapping | MutableSequence) -> ObjectPropGrip:
        return ObjectPropGrip(prop, target)

    return _grip


def _replace(composite: Any, prop: Hashable, new_value: Any) -> Any:
    """Shallow copy of composite with prop replaced."""
    if isinstance(composite, (list, tuple)):
        copied = list(composite)
        copied[prop] = new_value
        return copied if isinstance(composite, list) else tuple(copied)
    if isinstance(composite, Mapping):
        return {**composite, prop: new_value}
    raise TypeError(f"Cannot replace {prop!r} on {type(composite).__name__}")


class PropGrip(DelegatingGrip[T]):
    """Grip on grip.value[prop] with copy-on-write updates.

    If the composite is awaitable, value returns a task for the property and
    set() returns a task that writes the updated copy back as a future.
    """

    __slots__ = ("_prop",)

    def __init__(self, grip: Grip[Any], prop: Hashable) -> None:
        super().__init__(grip)
        self._prop = prop

    @property
    def value(self) -> T:
        match _mode.classify(self._subject.value):
            case _mode.Sync(composite):
                return composite[self._prop]
            case _mode.Async(composite):
                return _mode.shareable(self._read(composite))

    def set(self, new_value: T) -> T:
        match _mode.classify(self._subject.value):
            case _mode.Async(composite):
                return _mode.shareable(self._write(composite, new_value))
            case _mode.Sync(composite):
                result = self._subject.set(_replace(composite, self._prop, new_value))
                match _mode.classify(result):
                    case _mode.Async(write):
                        return _mode.shareable(self._landed(write, new_value))
                return new_value

    async def _read(self, composite: Awaitable[Any]) -> T:
        return (await composite)[self._prop]

    async def _write(self, composite: Awaitable[Any], new_value: T) -> T:
        new_value = await _mode.settle(new_value)
        updated = _replace(await composite, self._prop, new_value)
        await _mode.settle(self._subject.set(_mode.resolved(updated)))
        return new_value

    async def _landed(self, write: Awaitable[Any], new_value: T) -> T:
        await write
        return new_value

    def __repr__(self) -> str:
        return f"PropGrip({self._subject!r}, {self._prop!r})"


def prop_grip(grip: Grip[Any], prop: Hashable) -> PropGrip:
    """Grip on one property of the composite held by grip.

    Usage:
        point = value_grip({"x": 1, "y": 2})
        x = prop_grip(point, "x")
        before = point.value
        x.set(10)
        point.value   # {"x": 10, "y": 2}
        before        # {"x": 1, "y": 2}, untouched
    """
    return PropGrip(grip, prop)
