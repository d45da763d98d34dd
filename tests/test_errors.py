"""Tests for ValidationError views, error codes and message templates."""

import pytest

from wenfit import (
    ErrorCodes,
    ValidationError,
    ValidationErrorData,
    array,
    error_messages,
    get_message_registry,
    number,
    object,
    set_error_message,
    set_error_messages,
    string,
)


def _error(path, message, code="custom"):
    return ValidationErrorData(path=path, message=message, code=code)


class TestValidationError:
    def test_format(self):
        error = ValidationError(
            [_error(("name",), "Expected string"), _error((), "Whole payload rejected")]
        )
        assert error.format() == "name: Expected string\nroot: Whole payload rejected"

    def test_flatten_groups_by_path(self):
        error = ValidationError(
            [
                _error(("items", 0), "first"),
                _error(("items", 0), "second"),
                _error(("title",), "third"),
            ]
        )
        assert error.flatten() == {"items.0": ["first", "second"], "title": ["third"]}

    def test_keeps_every_error(self):
        errors = [_error((str(i),), f"error {i}") for i in range(5)]
        assert ValidationError(errors).errors == errors

    def test_message_summarizes(self):
        error = ValidationError([_error(("a",), "bad")])
        assert "1 error" in str(error)
        assert "a: bad" in str(error)

    def test_flatten_from_failed_parse(self):
        with pytest.raises(ValidationError) as exc_info:
            object({"name": string()}).parse({"name": 123})
        assert exc_info.value.flatten() == {"name": ["Expected string"]}

    def test_codes(self):
        result = object({"a": string(), "b": number()}).safe_parse({"b": "x"})
        assert result.error.codes == ["required", "invalid_type"]


class TestErrorCodes:
    def test_codes_compare_as_strings(self):
        assert ErrorCodes.REQUIRED == "required"
        assert ErrorCodes.UNION_INVALID == "union.invalid"
        assert str(ErrorCodes.NUMBER_MIN) == "number.min"

    def test_stable_values(self):
        assert ErrorCodes.INVALID_TYPE.value == "invalid_type"
        assert ErrorCodes.ARRAY_LENGTH.value == "array.length"
        assert ErrorCodes.ENUM_INVALID.value == "enum.invalid"
        assert ErrorCodes.INTERSECTION_INVALID.value == "intersection.invalid"
        assert ErrorCodes.UNKNOWN_KEYS.value == "unknown_keys"


@pytest.mark.usefixtures("clean_registries")
class TestMessageTemplates:
    def test_string_template_placeholders(self):
        set_error_message("required", "{{field}} is needed")
        result = object({"name": string()}).safe_parse({})
        assert result.error.errors[0].message == "name is needed"

    def test_unknown_placeholder_left_intact(self):
        set_error_message("array.min", "Need {{min}} items, not {{nope}}")
        result = array(string()).min(2).safe_parse([])
        assert result.error.errors[0].message == "Need 2 items, not {{nope}}"

    def test_callable_template(self):
        set_error_messages({"number.min": lambda meta: f"min is {meta['min']}"})
        result = number().min(3).safe_parse(1)
        assert result.error.errors[0].message == "min is 3"

    def test_per_schema_message_wins(self):
        set_error_message("string.min", "template message")
        result = string().min(3, "schema message").safe_parse("a")
        assert result.error.errors[0].message == "schema message"

    def test_default_message_without_template(self):
        assert get_message_registry().format_message("custom", "fallback") == "fallback"

    def test_scoped_templates_restore(self):
        schema = string()
        with error_messages({"invalid_type": "Wrong type"}):
            inside = schema.safe_parse(1)
        outside = schema.safe_parse(1)
        assert inside.error.errors[0].message == "Wrong type"
        assert outside.error.errors[0].message == "Expected string"

    def test_scoped_templates_override_global(self):
        set_error_message("required", "global")
        with error_messages(required="scoped"):
            result = object({"a": string()}).safe_parse({})
        assert result.error.errors[0].message == "scoped"
