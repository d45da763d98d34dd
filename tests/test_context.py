"""Tests for ParseContext path, error, cycle and async bookkeeping."""

import pytest

from wenfit import ErrorCodes, ParseContext, ValidationErrorData


class TestPath:
    def test_push_and_pop(self):
        ctx = ParseContext()
        ctx.push_path("user")
        ctx.push_path(0)
        assert ctx.get_current_path() == ("user", 0)
        ctx.pop_path()
        assert ctx.get_current_path() == ("user",)

    def test_snapshot_is_not_live(self):
        ctx = ParseContext()
        ctx.push_path("a")
        snapshot = ctx.get_current_path()
        ctx.push_path("b")
        assert snapshot == ("a",)

    def test_path_segment_pops_on_exception(self):
        ctx = ParseContext()
        with pytest.raises(RuntimeError):
            with ctx.path_segment("broken"):
                raise RuntimeError("boom")
        assert ctx.get_current_path() == ()

    def test_errors_are_stamped_with_current_path(self):
        ctx = ParseContext()
        with ctx.path_segment("items"):
            with ctx.path_segment(2):
                ctx.add_error_with_template(ErrorCodes.REQUIRED, "missing")
        ctx.add_error_with_template(ErrorCodes.CUSTOM, "root level")

        errors = ctx.get_errors()
        assert errors[0].path == ("items", 2)
        assert errors[1].path == ()


class TestErrors:
    def test_add_error_keeps_record_as_given(self):
        ctx = ParseContext()
        record = ValidationErrorData(path=("x",), message="bad", code="custom")
        ctx.add_error(record)
        assert ctx.has_errors()
        assert ctx.get_errors() == [record]

    def test_fresh_context_has_no_errors(self):
        ctx = ParseContext()
        assert not ctx.has_errors()
        assert ctx.error_count == 0

    def test_template_meta_is_attached(self):
        ctx = ParseContext()
        ctx.add_error_with_template(ErrorCodes.ARRAY_MIN, "too short", {"min": 2, "actual": 1})
        assert ctx.get_errors()[0].meta == {"min": 2, "actual": 1}


class TestVisited:
    def test_identity_not_equality(self):
        ctx = ParseContext()
        first, second = {"a": 1}, {"a": 1}
        ctx.mark_visited(first)
        assert ctx.has_visited(first)
        assert not ctx.has_visited(second)

    def test_unmark(self):
        ctx = ParseContext()
        data = {}
        ctx.mark_visited(data)
        ctx.unmark_visited(data)
        assert not ctx.has_visited(data)

    def test_visiting_restores_on_exception(self):
        ctx = ParseContext()
        data = []
        with pytest.raises(ValueError):
            with ctx.visiting(data):
                assert ctx.has_visited(data)
                raise ValueError("abort")
        assert not ctx.has_visited(data)


class TestChild:
    def test_child_errors_do_not_leak(self):
        ctx = ParseContext()
        child = ctx.child()
        child.add_error_with_template(ErrorCodes.CUSTOM, "speculative")
        assert child.has_errors()
        assert not ctx.has_errors()

    def test_child_starts_at_parent_path(self):
        ctx = ParseContext()
        ctx.push_path("field")
        child = ctx.child()
        child.push_path("inner")
        assert child.get_current_path() == ("field", "inner")
        assert ctx.get_current_path() == ("field",)

    def test_child_inherits_visited_copy(self):
        ctx = ParseContext()
        outer, inner = {}, {}
        ctx.mark_visited(outer)
        child = ctx.child()
        child.mark_visited(inner)
        assert child.has_visited(outer)
        assert not ctx.has_visited(inner)


class TestAsyncFlag:
    def test_one_way_flag(self):
        ctx = ParseContext()
        assert not ctx.is_async_validation()
        ctx.mark_async()
        ctx.mark_async()
        assert ctx.is_async_validation()
