"""Tests for the Schema base class and its wrapper combinators."""

import pytest

from wenfit import (
    MISSING,
    Err,
    ErrorCodes,
    IntersectionSchema,
    Ok,
    OptionalSchema,
    UnionSchema,
    ValidationError,
    array,
    lazy,
    number,
    object,
    string,
)


class TestEntryPoints:
    def test_parse_returns_value(self):
        assert string().parse("hello") == "hello"

    def test_parse_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            string().parse(42)
        assert exc_info.value.errors[0].code == ErrorCodes.INVALID_TYPE

    def test_safe_parse_ok(self):
        result = number().safe_parse(3)
        assert isinstance(result, Ok)
        assert result.success
        assert result.data == 3

    def test_safe_parse_err(self):
        result = number().safe_parse("3")
        assert isinstance(result, Err)
        assert not result.success
        assert isinstance(result.error, ValidationError)
        assert result.errors == result.error.errors

    def test_schema_is_reusable(self):
        schema = object({"a": number()})
        assert isinstance(schema.safe_parse({"a": "x"}), Err)
        assert schema.parse({"a": 1}) == {"a": 1}


class TestOptional:
    def test_accepts_missing(self):
        assert string().optional().safe_parse(MISSING) == Ok(None)

    def test_still_validates_present_values(self):
        assert isinstance(string().optional().safe_parse(1), Err)

    def test_none_is_not_absence(self):
        assert isinstance(string().optional().safe_parse(None), Err)

    def test_returns_new_schema(self):
        base = string()
        wrapped = base.optional()
        assert isinstance(wrapped, OptionalSchema)
        assert wrapped is not base
        assert isinstance(base.safe_parse(MISSING), Err)

    def test_missing_reports_undefined(self):
        result = string().safe_parse(MISSING)
        assert result.error.errors[0].meta["received"] == "undefined"


class TestNullable:
    def test_accepts_none(self):
        assert string().nullable().parse(None) is None

    def test_validates_other_values(self):
        assert isinstance(string().nullable().safe_parse(3), Err)

    def test_json_schema(self):
        assert string().nullable().to_json_schema() == {
            "anyOf": [{"type": "string"}, {"type": "null"}]
        }


class TestDefault:
    def test_fills_absent_field(self):
        schema = object({"retries": number().default(3)})
        assert schema.parse({}) == {"retries": 3}

    def test_not_applied_for_none(self):
        assert isinstance(number().default(5).safe_parse(None), Err)

    def test_default_is_validated(self):
        result = number().min(10).default(5).safe_parse(MISSING)
        assert result.error.errors[0].code == ErrorCodes.NUMBER_MIN

    def test_mutable_default_not_shared(self):
        schema = object({"tags": array(string()).default([])})
        first = schema.parse({})
        second = schema.parse({})
        assert first["tags"] == [] and second["tags"] == []
        assert first["tags"] is not second["tags"]

    def test_json_schema(self):
        assert number().default(1).to_json_schema() == {"type": "number", "default": 1}


class TestRefine:
    def test_passing_predicate(self):
        even = number().refine(lambda x: x % 2 == 0, "Must be even")
        assert even.parse(4) == 4

    def test_failing_predicate(self):
        even = number().refine(lambda x: x % 2 == 0, "Must be even")
        error = even.safe_parse(3).error.errors[0]
        assert error.message == "Must be even"
        assert error.code == ErrorCodes.CUSTOM
        assert error.path == ()

    def test_custom_code(self):
        even = number().refine(lambda x: x % 2 == 0, {"message": "odd", "code": "number.even"})
        assert even.safe_parse(3).error.errors[0].code == "number.even"

    def test_skipped_when_inner_fails(self):
        calls = []

        def predicate(value):
            calls.append(value)
            return True

        result = number().refine(predicate).safe_parse("x")
        assert isinstance(result, Err)
        assert calls == []

    def test_predicate_exception_becomes_error(self):
        def explode(value):
            raise ValueError("lookup failed")

        error = string().refine(explode, "unused").safe_parse("a").error.errors[0]
        assert error.message == "lookup failed"
        assert error.code == ErrorCodes.CUSTOM

    def test_runs_after_unrelated_sibling_failure(self):
        schema = object(
            {
                "a": number(),
                "b": number().refine(lambda x: x > 0, "Must be positive"),
            }
        )
        errors = schema.safe_parse({"a": "x", "b": -1}).error.errors
        assert [e.path for e in errors] == [("a",), ("b",)]

    def test_optional_absent_is_not_refined(self):
        schema = object({"n": number().optional().refine(lambda x: x > 0)})
        assert schema.parse({}) == {}


class TestTransform:
    def test_applies_after_validation(self):
        assert string().transform(len).parse("abc") == 3

    def test_not_applied_on_failure(self):
        assert isinstance(string().transform(len).safe_parse(1), Err)

    def test_exception_becomes_error(self):
        def fail(value):
            raise ValueError("cannot convert")

        error = string().transform(fail).safe_parse("x").error.errors[0]
        assert error.code == ErrorCodes.TRANSFORM_ERROR
        assert error.message == "cannot convert"

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            string().transform("nope")


class TestOperators:
    def test_or_builds_union(self):
        schema = string() | number() | string().nullable()
        assert isinstance(schema, UnionSchema)
        assert len(schema.options) == 3

    def test_and_builds_intersection(self):
        schema = object({"a": number()}) & object({"b": number()})
        assert isinstance(schema, IntersectionSchema)


class TestLazy:
    def test_recursive_definition(self):
        tree = lazy(
            lambda: object({"value": number(), "children": array(tree).optional()})
        )
        data = {"value": 1, "children": [{"value": 2}, {"value": 3, "children": []}]}
        assert tree.parse(data) == data

    def test_nested_error_path(self):
        tree = lazy(lambda: object({"value": number(), "children": array(tree).optional()}))
        result = tree.safe_parse({"value": 1, "children": [{"value": "x"}]})
        assert result.error.errors[0].path == ("children", 0, "value")

    def test_factory_must_return_schema(self):
        with pytest.raises(TypeError):
            lazy(lambda: 5).parse(1)

    def test_recursive_json_schema_terminates(self):
        tree = lazy(lambda: object({"children": array(tree)}))
        exported = tree.to_json_schema()
        assert exported["properties"]["children"]["items"] == {}
