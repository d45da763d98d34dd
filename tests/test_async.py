"""Tests for asynchronous refinements and the async entry points."""

import asyncio

import pytest

from wenfit import (
    AsyncValidationRequired,
    Err,
    ErrorCodes,
    Ok,
    ValidationError,
    array,
    number,
    object,
    string,
    union,
)


async def _is_available(username):
    await asyncio.sleep(0)
    return username != "taken"


async def _explode(value):
    await asyncio.sleep(0)
    raise LookupError("service unavailable")


@pytest.fixture
def signup():
    return object(
        {
            "username": string().min(3).refine(_is_available, "Username is taken"),
            "age": number().min(0),
        }
    )


class TestSyncEntryPoints:
    def test_parse_raises(self, signup):
        with pytest.raises(AsyncValidationRequired) as exc_info:
            signup.parse({"username": "alice", "age": 3})
        assert exc_info.value.entry_point == "parse"
        assert "parse_async" in str(exc_info.value)

    def test_safe_parse_raises(self, signup):
        with pytest.raises(AsyncValidationRequired) as exc_info:
            signup.safe_parse({"username": "alice", "age": 3})
        assert exc_info.value.entry_point == "safe_parse"

    def test_not_raised_when_refine_never_runs(self, signup):
        # the inner min(3) fails, so the async predicate is never called
        result = signup.safe_parse({"username": "al", "age": 3})
        assert isinstance(result, Err)

    def test_async_inside_union_branch(self):
        schema = union([number(), string().refine(_is_available)])
        with pytest.raises(AsyncValidationRequired):
            schema.parse("alice")


class TestAsyncEntryPoints:
    def test_parse_async(self, signup):
        data = {"username": "alice", "age": 3}
        assert asyncio.run(signup.parse_async(data)) == data

    def test_async_failure(self, signup):
        result = asyncio.run(signup.safe_parse_async({"username": "taken", "age": 3}))
        assert isinstance(result, Err)
        error = result.error.errors[0]
        assert error.path == ("username",)
        assert error.message == "Username is taken"

    def test_parse_async_raises_validation_error(self, signup):
        with pytest.raises(ValidationError):
            asyncio.run(signup.parse_async({"username": "taken", "age": 3}))

    def test_error_order_matches_sync_traversal(self):
        schema = array(string().refine(_is_available, "taken"))
        result = asyncio.run(schema.safe_parse_async(["taken", 1, "ok", "taken"]))
        assert [e.path for e in result.error.errors] == [(0,), (1,), (3,)]

    def test_sync_schema_through_async_entry(self):
        assert asyncio.run(number().safe_parse_async(4)) == Ok(4)

    def test_predicate_exception_becomes_error(self):
        schema = string().refine(_explode, "unused")
        error = asyncio.run(schema.safe_parse_async("x")).error.errors[0]
        assert error.code == ErrorCodes.CUSTOM
        assert error.message == "service unavailable"

    def test_async_union(self):
        schema = union([string().refine(_is_available), number()])
        result = asyncio.run(schema.safe_parse_async("taken"))
        assert result.error.codes == ["union.invalid"]
        assert asyncio.run(schema.parse_async("free")) == "free"

    def test_async_intersection(self):
        schema = object({"a": string().refine(_is_available)}) & object({"b": number()})
        data = {"a": "free", "b": 1}
        assert asyncio.run(schema.parse_async(data)) == data
