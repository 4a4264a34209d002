"""Tests for WithFallbackGrip."""

import pytest

from gripx import manual_grip, resolved, value_grip, with_fallback_grip


class TestFallbackRead:
    def test_uses_primary_value(self):
        grip = with_fallback_grip(value_grip("bar"), value_grip("foo"))
        assert grip.value == "bar"

    def test_uses_fallback_when_none(self):
        grip = with_fallback_grip(value_grip(None), value_grip("foo"))
        assert grip.value == "foo"

    def test_falsy_primary_is_not_missing(self):
        grip = with_fallback_grip(value_grip(""), value_grip("foo"))
        assert grip.value == ""

    def test_custom_predicate(self):
        use_fallback = False
        grip = with_fallback_grip(value_grip("foo"), value_grip("bar"), lambda v: use_fallback)
        use_fallback = True
        assert grip.value == "bar"
        use_fallback = False
        assert grip.value == "foo"

    def test_predicate_is_stable(self):
        grip = with_fallback_grip(value_grip(0), value_grip(10), lambda v: v == 0)
        assert [grip.value for _ in range(3)] == [10, 10, 10]


class TestFallbackWrite:
    def test_updates_both(self):
        fallback = value_grip("foo")
        primary = value_grip(None)
        grip = with_fallback_grip(primary, fallback)
        grip.set("baz")
        assert grip.value == "baz"
        assert fallback.value == "baz"
        assert primary.value == "baz"

    def test_updates_just_the_fallback(self):
        fallback = value_grip("foo")
        primary = value_grip(None)
        grip = with_fallback_grip(primary.to_read_only(), fallback)
        grip.set("bar")
        assert fallback.value == "bar"
        assert primary.value is None
        assert grip.value == "bar"

    def test_updates_just_the_primary(self):
        fallback = value_grip("foo")
        primary = value_grip(None)
        grip = with_fallback_grip(primary, fallback.to_read_only())
        grip.set("bar")
        assert grip.value == "bar"
        assert fallback.value == "foo"
        assert primary.value == "bar"

    def test_fallback_written_first(self):
        order = []
        primary = manual_grip(lambda: None, lambda v: order.append("primary") or v)
        fallback = manual_grip(lambda: None, lambda v: order.append("fallback") or v)
        assert with_fallback_grip(primary, fallback).set(1) == 1
        assert order == ["fallback", "primary"]

    def test_failed_fallback_write_skips_primary(self):
        primary = value_grip("a")

        def boom(v):
            raise RuntimeError("boom")

        grip = with_fallback_grip(primary, manual_grip(lambda: None, boom))
        with pytest.raises(RuntimeError):
            grip.set("b")
        assert primary.value == "a"

    @pytest.mark.asyncio
    async def test_awaitable_shared_by_both(self):
        async def compute():
            return 3

        fallback = value_grip(resolved(1))
        primary = value_grip(resolved(2))
        grip = with_fallback_grip(primary, fallback)
        await grip.set(compute())
        assert await primary.value == 3
        assert await fallback.value == 3


def async_store(initial, log=None, name=None):
    state = {"value": initial}

    async def getter():
        return state["value"]

    async def setter(pending):
        state["value"] = await pending
        if log is not None:
            log.append(name)
        return state["value"]

    return state, manual_grip(getter, setter)


class TestFallbackAsync:
    @pytest.mark.asyncio
    async def test_async_setters_write_both(self):
        primary_state, primary = async_store(0)
        fallback_state, fallback = async_store(0)
        grip = with_fallback_grip(primary, fallback)
        assert await grip.set(resolved(5)) == 5
        assert (primary_state["value"], fallback_state["value"]) == (5, 5)
        assert await grip.value == 5

    @pytest.mark.asyncio
    async def test_async_fallback_written_first(self):
        order = []
        _, primary = async_store(0, order, "primary")
        _, fallback = async_store(0, order, "fallback")
        await with_fallback_grip(primary, fallback).set(resolved(1))
        assert order == ["fallback", "primary"]

    @pytest.mark.asyncio
    async def test_failed_async_fallback_write_skips_primary(self):
        primary_state, primary = async_store(0)

        async def getter():
            return None

        async def boom(pending):
            raise RuntimeError("boom")

        grip = with_fallback_grip(primary, manual_grip(getter, boom))
        with pytest.raises(RuntimeError):
            await grip.set(resolved(5))
        assert primary_state["value"] == 0

    @pytest.mark.asyncio
    async def test_async_fallback_with_sync_primary(self):
        primary = value_grip(None)
        fallback_state, fallback = async_store(0)
        grip = with_fallback_grip(primary, fallback)
        await grip.set(resolved(7))
        assert fallback_state["value"] == 7
        assert await primary.value == 7
