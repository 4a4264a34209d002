"""Tests for ValueGrip and ManualGrip."""

import pytest

from gripx import ManualGrip, ValueGrip, manual_grip, resolved, value_grip


class TestValueGrip:
    def test_stores_numbers(self):
        assert value_grip(1).value == 1
        assert value_grip(2).value == 2

    def test_stores_objects(self):
        obj = {"one": 1, "two": [1, 2, 3], 3: "tree"}
        assert value_grip(obj).value == obj

    def test_read_after_write(self):
        g = value_grip("foo")
        g.set("bar")
        assert g.value == "bar"
        g.set("baz")
        assert g.value == "baz"

    def test_holds_reference_not_copy(self):
        items = [1]
        g = value_grip(items)
        items.append(2)
        assert g.value == [1, 2]

    def test_repr(self):
        assert "ValueGrip(5)" in repr(ValueGrip(5))


class TestManualGrip:
    def test_arbitrary_getter_and_setter(self):
        state = {"val": 7}

        def setter(v):
            state["val"] = v
            return v

        g = manual_grip(lambda: state["val"], setter)
        assert g.value == 7
        assert g.set(8) == 8
        assert g.value == 8
        assert state["val"] == 8

    def test_context(self):
        def setter(v, ctx):
            ctx["val"] = v
            return v

        g = manual_grip(lambda ctx: ctx["val"], setter, {"val": 7})
        assert g.has_context
        assert g.value == 7
        g.set(8)
        assert g.value == 8

    def test_none_is_a_valid_context(self):
        g = ManualGrip(lambda ctx: ctx, lambda v, ctx: v, None)
        assert g.has_context
        assert g.value is None

    def test_getter_errors_propagate(self):
        def getter():
            raise KeyError("missing")

        g = manual_grip(getter, lambda v: v)
        with pytest.raises(KeyError):
            g.value

    @pytest.mark.asyncio
    async def test_async_getter_and_setter(self):
        state = {"val": 7}

        async def getter():
            return state["val"]

        async def setter(pending):
            state["val"] = await pending
            return state["val"]

        g = manual_grip(getter, setter)
        assert await g.value == 7
        assert await g.set(resolved(8)) == 8
        assert await g.value == 8
        assert state["val"] == 8

    @pytest.mark.asyncio
    async def test_async_with_context(self):
        async def getter(ctx):
            return ctx["value"]

        async def setter(pending, ctx):
            ctx["value"] = await pending
            return ctx["value"]

        g = manual_grip(getter, setter, {"value": 7})
        assert await g.value == 7
        await g.set(resolved(8))
        assert await g.value == 8
