"""Tests for IntersectionSchema and value merging."""

import pytest

from wenfit import ErrorCodes, IntersectionSchema, MISSING, intersection, number, object, string
from wenfit.core.intersection import merge_values


@pytest.fixture
def named():
    return object({"name": string()})


@pytest.fixture
def aged():
    return object({"age": number()})


class TestMerge:
    def test_objects_merge(self, named, aged):
        schema = intersection([named, aged])
        assert schema.parse({"name": "Ada", "age": 36}) == {"name": "Ada", "age": 36}

    def test_commutative_for_objects(self, named, aged):
        data = {"name": "Ada", "age": 36}
        assert (named & aged).parse(data) == (aged & named).parse(data)

    def test_identical_primitives(self):
        assert intersection([number().min(0), number().max(10)]).parse(5) == 5

    def test_nested_mappings_merge(self):
        assert merge_values({"a": {"x": 1}}, {"a": {"y": 2}}) == {"a": {"x": 1, "y": 2}}

    def test_lists_merge_elementwise(self):
        assert merge_values([{"a": 1}], [{"b": 2}]) == [{"a": 1, "b": 2}]

    def test_missing_yields_other(self):
        assert merge_values(MISSING, 3) == 3
        assert merge_values(3, MISSING) == 3


class TestFailure:
    def test_member_failures(self, named, aged):
        error = (named & aged).safe_parse({}).error.errors
        assert len(error) == 1
        assert error[0].code == ErrorCodes.INTERSECTION_INVALID
        assert len(error[0].meta["intersection_errors"]) == 2

    def test_single_member_failure(self, named, aged):
        error = (named & aged).safe_parse({"name": "Ada"}).error.errors[0]
        failures = error.meta["intersection_errors"]
        assert len(failures) == 1
        assert failures[0][0].path == ("age",)

    def test_conflicting_outputs(self):
        schema = intersection([string().transform(str.upper), string()])
        error = schema.safe_parse("abc").error.errors[0]
        assert error.code == ErrorCodes.INTERSECTION_INVALID
        assert error.meta["conflict_path"] == []
        assert error.meta["values"] == ["ABC", "abc"]
        assert "root" in error.message

    def test_conflict_inside_object(self):
        left = object({"n": number().transform(lambda n: n + 1)})
        right = object({"n": number()})
        error = (left & right).safe_parse({"n": 1}).error.errors[0]
        assert error.meta["conflict_path"] == ["n"]
        assert error.message.endswith("at n")

    def test_bool_and_number_conflict(self):
        schema = intersection([number().transform(lambda n: True), number().transform(lambda n: 1)])
        assert schema.safe_parse(0).error.codes == ["intersection.invalid"]


class TestConstruction:
    def test_empty(self):
        with pytest.raises(ValueError):
            intersection([])

    def test_and_flattens(self, named, aged):
        schema = named & aged & object({"id": number()})
        assert isinstance(schema, IntersectionSchema)
        assert len(schema.schemas) == 3

    def test_json_schema(self, named, aged):
        exported = (named & aged).to_json_schema()
        assert [member["properties"] for member in exported["allOf"]] == [
            {"name": {"type": "string"}},
            {"age": {"type": "number"}},
        ]
