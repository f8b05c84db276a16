import asyncio
from types import SimpleNamespace

import pytest
from bluebirdish import Promise


@pytest.mark.asyncio
async def test_tap_keeps_value_and_waits_for_effect():
    seen = []

    async def effect(value):
        await asyncio.sleep(0.01)
        seen.append(value)
        return "ignored"

    assert await Promise.resolve(1).tap(effect) == 1
    assert seen == [1]


@pytest.mark.asyncio
async def test_tap_failure_rejects():
    def effect(value):
        raise RuntimeError("tap failed")

    with pytest.raises(RuntimeError, match="tap failed"):
        await Promise.resolve(1).tap(effect)
    with pytest.raises(KeyError):
        await Promise.resolve(1).tap(lambda _: Promise.reject(KeyError()))


@pytest.mark.asyncio
async def test_spread():
    assert await Promise.resolve([1, 2]).spread(lambda a, b: a + b) == 3
    assert await Promise.all([1, Promise.resolve(2)]).spread(lambda a, b: (b, a)) == (2, 1)
    with pytest.raises(TypeError, match="spread"):
        await Promise.resolve([1]).spread("not callable")
    with pytest.raises(TypeError, match="spread"):
        await Promise.resolve(5).spread(lambda *args: args)


@pytest.mark.asyncio
async def test_call():
    assert await Promise.resolve("abc").call("upper") == "ABC"
    assert await Promise.resolve("a,b").call("split", ",") == ["a", "b"]
    with pytest.raises(TypeError, match="'missing'"):
        await Promise.resolve("abc").call("missing")
    with pytest.raises(TypeError):
        await Promise.resolve(None).call("upper")


@pytest.mark.asyncio
async def test_get_indexes_and_attributes():
    assert await Promise.resolve([1, 2, 3]).get(0) == 1
    assert await Promise.resolve([1, 2, 3]).get(-1) == 3
    assert await Promise.resolve([1, 2, 3]).get(-10) == 1
    assert await Promise.resolve([1, 2, 3]).get(5) is None
    assert await Promise.resolve({"a": 1}).get("a") == 1
    assert await Promise.resolve({"a": 1}).get("b") is None
    assert await Promise.resolve(SimpleNamespace(name="x")).get("name") == "x"


@pytest.mark.asyncio
async def test_return_and_throw():
    assert await Promise.resolve(1).return_(2) == 2
    assert await Promise.resolve(1).then_return(3) == 3
    with pytest.raises(ValueError):
        await Promise.resolve(1).throw(ValueError())
    with pytest.raises(KeyError):
        await Promise.reject(KeyError()).return_(2)


@pytest.mark.asyncio
async def test_delay():
    loop = asyncio.get_running_loop()
    started = loop.time()
    assert await Promise.delay(0.02, "v") == "v"
    assert loop.time() - started >= 0.015
    assert await Promise.delay(0) is None


@pytest.mark.asyncio
async def test_instance_delay_holds_value_and_skips_on_rejection():
    assert await Promise.resolve(1).delay(0.01) == 1
    with pytest.raises(ValueError):
        await asyncio.wait_for(Promise.reject(ValueError()).delay(10), timeout=1)
