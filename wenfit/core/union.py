"""
UnionSchema - input must match at least one of several schemas.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..context import ParseContext
from ..errors.codes import ErrorCodes
from ..errors.validation_error import ValidationErrorData
from ..types import INVALID
from .schema import Schema

logger = logging.getLogger(__name__)


class UnionSchema(Schema):
    """
    Tries each option in order; the first one that validates wins.

    Each attempt runs in a child context, so a rejected option never leaves
    errors behind. If no option matches, a single UNION_INVALID error is
    recorded with every option's errors under the `union_errors` meta key.
    """

    def __init__(self, options: Sequence[Schema]):
        options = list(options)
        if not options:
            raise ValueError("Union must have at least one schema option")
        for option in options:
            if not isinstance(option, Schema):
                raise TypeError(f"Union options must be Schemas, got {type(option).__name__}")
        self._options = tuple(options)

    @property
    def options(self) -> tuple[Schema, ...]:
        return self._options

    @property
    def accepts_missing(self) -> bool:
        return any(option.accepts_missing for option in self._options)

    def __repr__(self) -> str:
        return f"UnionSchema({list(self._options)!r})"

    def __or__(self, other: Schema) -> Schema:
        return UnionSchema([*self._options, other])

    def _fail(self, failures: list[list[ValidationErrorData]], ctx: ParseContext) -> Any:
        logger.debug("No union option matched at %s", ctx.get_current_path())
        ctx.add_error_with_template(
            ErrorCodes.UNION_INVALID,
            "Input did not match any union member",
            {"union_errors": failures},
        )
        return INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        failures: list[list[ValidationErrorData]] = []
        for option in self._options:
            attempt = ctx.child()
            result = option._parse(value, attempt)
            if attempt.is_async_validation():
                ctx.mark_async()
            if not attempt.has_errors():
                return result
            failures.append(attempt.get_errors())
        return self._fail(failures, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        failures: list[list[ValidationErrorData]] = []
        for option in self._options:
            attempt = ctx.child()
            result = await option._parse_async(value, attempt)
            if attempt.is_async_validation():
                ctx.mark_async()
            if not attempt.has_errors():
                return result
            failures.append(attempt.get_errors())
        return self._fail(failures, ctx)

    def to_json_schema(self) -> dict[str, Any]:
        return {"anyOf": [option.to_json_schema() for option in self._options]}
