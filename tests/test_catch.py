import pytest
from bluebirdish import Promise, matches_predicate
from bluebirdish.matching import ClassSelector, PredicateSelector, ShapeSelector, to_selector


class NotFound(Exception):
    def __init__(self, code):
        super().__init__(f"not found: {code}")
        self.code = code


def test_to_selector_classifies():
    assert to_selector(ValueError) == ClassSelector(ValueError)
    assert isinstance(to_selector(lambda reason: True), PredicateSelector)
    assert to_selector({"code": 1}) == ShapeSelector({"code": 1})
    assert to_selector(42) is None


def test_matches_predicate():
    assert matches_predicate(ValueError(), ValueError)
    assert matches_predicate("text", str)
    assert not matches_predicate(KeyError(), ValueError)
    assert matches_predicate(NotFound(404), {"code": 404})
    assert not matches_predicate(NotFound(404), {"code": 500})
    assert matches_predicate({"code": 1, "extra": True}, {"code": 1})
    assert matches_predicate(3, lambda reason: reason > 2)
    assert not matches_predicate(ValueError(), "not a selector")


@pytest.mark.asyncio
async def test_single_argument_catch_handles_everything():
    assert await Promise.reject(KeyError()).catch(lambda reason: "handled") == "handled"


@pytest.mark.asyncio
async def test_catch_without_arguments_raises():
    with pytest.raises(TypeError):
        Promise.resolve(1).catch()


@pytest.mark.asyncio
async def test_class_selector():
    result = await Promise.reject(ValueError("bad")).catch(ValueError, lambda e: str(e))
    assert result == "bad"


@pytest.mark.asyncio
async def test_non_matching_selector_rethrows_unchanged():
    error = ValueError("bad")
    with pytest.raises(ValueError) as info:
        await Promise.reject(error).catch(KeyError, lambda e: "wrong")
    assert info.value is error


@pytest.mark.asyncio
async def test_any_selector_may_match():
    result = await Promise.reject(KeyError()).caught(ValueError, KeyError, lambda e: "either")
    assert result == "either"


@pytest.mark.asyncio
async def test_predicate_and_shape_selectors():
    assert await Promise.reject(NotFound(404)).catch({"code": 404}, lambda e: e.code) == 404
    assert await Promise.reject("oops").catch(lambda r: r == "oops", lambda r: "pred") == "pred"


@pytest.mark.asyncio
async def test_invalid_selector_never_matches():
    with pytest.raises(ValueError):
        await Promise.reject(ValueError()).catch(42, lambda e: "never")


@pytest.mark.asyncio
async def test_catch_return_and_catch_throw():
    assert await Promise.reject(KeyError()).catch_return(KeyError, "default") == "default"
    assert await Promise.reject(KeyError()).catch_return("always") == "always"

    with pytest.raises(RuntimeError, match="replaced"):
        await Promise.reject(KeyError()).catch_throw(KeyError, RuntimeError("replaced"))

    with pytest.raises(KeyError):
        await Promise.reject(KeyError()).catch_return(ValueError, "skipped")


def test_shape_selector_requires_same_type():
    assert matches_predicate({"code": 1}, {"code": 1})
    assert not matches_predicate({"code": True}, {"code": 1})
    assert not matches_predicate({"code": 1.0}, {"code": 1})
    assert not matches_predicate(NotFound("404"), {"code": 404})
