import asyncio

import pytest
from bluebirdish import Promise, RejectionError


@pytest.mark.asyncio
async def test_try_lifts_values_and_exceptions():
    assert await Promise.try_(lambda: 1) == 1
    assert await Promise.attempt(lambda: Promise.delay(0.001, 2)) == 2

    def fail():
        raise ValueError("sync failure")

    p = Promise.try_(fail)
    assert p.is_rejected
    with pytest.raises(ValueError, match="sync failure"):
        await p


@pytest.mark.asyncio
async def test_method_always_returns_a_promise():
    @Promise.method
    def parse(text):
        """Parse an integer."""
        return int(text)

    assert parse.__name__ == "parse"
    assert parse.__doc__ == "Parse an integer."
    assert await parse("12") == 12
    with pytest.raises(ValueError):
        await parse("twelve")


@pytest.mark.asyncio
async def test_spawn_drives_a_generator():
    def flow():
        first = yield Promise.resolve(1)
        rest = yield [Promise.resolve(2), Promise.delay(0.001, 3)]
        return first + sum(rest)

    assert await Promise.spawn(flow) == 6


@pytest.mark.asyncio
async def test_spawn_starts_on_a_later_iteration():
    started = []

    def flow():
        started.append(True)
        yield Promise.resolve(None)

    p = Promise.spawn(flow)
    assert started == []
    await p
    assert started == [True]


@pytest.mark.asyncio
async def test_spawn_accepts_coroutines_and_awaitables():
    def flow():
        value = yield asyncio.sleep(0, result="slept")
        return value

    async def native():
        await asyncio.sleep(0)
        return "native"

    assert await Promise.spawn(flow) == "slept"
    assert await Promise.spawn(native) == "native"


@pytest.mark.asyncio
async def test_spawn_throws_rejections_into_the_generator():
    def flow():
        try:
            yield Promise.reject(ValueError("boom"))
        except ValueError as exc:
            return f"caught {exc}"

    def boxed():
        try:
            yield Promise.reject("plain")
        except RejectionError as exc:
            return exc.reason

    assert await Promise.spawn(flow) == "caught boom"
    assert await Promise.spawn(boxed) == "plain"


@pytest.mark.asyncio
async def test_spawn_answers_non_eventual_yields_with_type_error():
    def recovering():
        try:
            yield 5
        except TypeError:
            return "recovered"

    def unhandled():
        yield "nope"

    assert await Promise.spawn(recovering) == "recovered"
    with pytest.raises(TypeError, match="spawn"):
        await Promise.spawn(unhandled)


@pytest.mark.asyncio
async def test_spawn_rejects_when_generator_raises():
    def flow():
        yield Promise.resolve(1)
        raise KeyError("inside")

    with pytest.raises(KeyError):
        await Promise.spawn(flow)


@pytest.mark.asyncio
async def test_spawn_rejects_non_generators():
    with pytest.raises(TypeError, match="spawn"):
        await Promise.spawn(lambda: 5)


@pytest.mark.asyncio
async def test_coroutine_decorator():
    @Promise.coroutine
    def double(value):
        resolved = yield Promise.resolve(value)
        return resolved * 2

    assert double.__name__ == "double"
    assert await double(21) == 42
