import pytest
from bluebirdish import Promise, RejectionError
from kungfu import Error, LazyCoroResult, Ok


@pytest.mark.asyncio
async def test_from_result():
    assert await Promise.from_result(Ok(1)) == 1
    with pytest.raises(ValueError):
        await Promise.from_result(Error(ValueError("bad")))
    with pytest.raises(RejectionError):
        await Promise.from_result(Error("bad"))
    with pytest.raises(TypeError, match="from_result"):
        await Promise.from_result(1)


@pytest.mark.asyncio
async def test_to_result():
    match await Promise.resolve(1).to_result():
        case Ok(value):
            assert value == 1
        case other:
            pytest.fail(f"unexpected {other!r}")

    match await Promise.reject("nope").to_result():
        case Error(reason):
            assert reason == "nope"
        case other:
            pytest.fail(f"unexpected {other!r}")


@pytest.mark.asyncio
async def test_to_lazy_runs_as_lazy_coro_result():
    lazy = Promise.delay(0.001, "later").to_lazy()
    assert isinstance(lazy, LazyCoroResult)
    match await lazy():
        case Ok(value):
            assert value == "later"
        case other:
            pytest.fail(f"unexpected {other!r}")


@pytest.mark.asyncio
async def test_failed_lazy_coro_result_rejects():
    with pytest.raises(KeyError):
        await Promise.resolve(Error(KeyError()).to_async()).then(lambda v: v)
