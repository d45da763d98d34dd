"""
Base Schema class and the single-child wrapper schemas.

Every validator implements `_parse(value, ctx)`; schemas that delegate to
children also override `_parse_async` so awaitable refinements are awaited
in place, in the same depth-first order as the synchronous traversal.
"""

from __future__ import annotations

import copy
import inspect
import logging
from abc import ABC, abstractmethod
from contextvars import ContextVar
from typing import Any, Awaitable, Callable, Mapping, Union

from ..context import ParseContext
from ..errors.codes import ErrorCodes
from ..errors.validation_error import AsyncValidationRequired, ValidationError, ValidationErrorData
from ..types import INVALID, MISSING, Err, Ok, SafeParseResult

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], Union[bool, Awaitable[bool]]]
RefineMessage = Union[str, Mapping[str, str]]


def discard_awaitable(awaitable: Any) -> None:
    """Close an awaitable that will never be awaited on a sync path."""
    close = getattr(awaitable, "close", None)
    if callable(close):
        close()


class Schema(ABC):
    """
    Abstract base for all schemas.

    Schemas are immutable: combinators and constraint methods return new
    instances and leave the receiver untouched.
    """

    @abstractmethod
    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        """
        Validate `value`, recording failures on `ctx`.

        Returns the (possibly transformed) value, or INVALID if this call
        added at least one error to `ctx`.
        """

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        return self._parse(value, ctx)

    @property
    def accepts_missing(self) -> bool:
        """Whether an absent value is acceptable (optional or defaulted)."""
        return False

    # Entry points

    def parse(self, value: Any) -> Any:
        """
        Validate `value` and return the result.

        Raises:
            ValidationError: If validation fails.
            AsyncValidationRequired: If the schema performed async work.
        """
        result = self._run(value, "parse")
        if isinstance(result, Err):
            raise result.error
        return result.data

    def safe_parse(self, value: Any) -> SafeParseResult:
        """Validate `value` and return Ok(data) or Err(ValidationError)."""
        return self._run(value, "safe_parse")

    async def parse_async(self, value: Any) -> Any:
        """Validate `value`, awaiting any asynchronous refinement."""
        result = await self.safe_parse_async(value)
        if isinstance(result, Err):
            raise result.error
        return result.data

    async def safe_parse_async(self, value: Any) -> SafeParseResult:
        from ..plugins import run_global_rules_async

        ctx = ParseContext()
        data = await self._parse_async(value, ctx)
        if not ctx.has_errors():
            await run_global_rules_async(self, value, ctx)
        return self._finish(data, ctx)

    def _run(self, value: Any, entry_point: str) -> SafeParseResult:
        from ..plugins import run_global_rules

        ctx = ParseContext()
        data = self._parse(value, ctx)
        if not ctx.has_errors():
            run_global_rules(self, value, ctx)
        if ctx.is_async_validation():
            raise AsyncValidationRequired(entry_point)
        return self._finish(data, ctx)

    def _finish(self, data: Any, ctx: ParseContext) -> SafeParseResult:
        if ctx.has_errors():
            logger.debug(
                "%s rejected input with %d error(s)", type(self).__name__, ctx.error_count
            )
            return Err(ValidationError(ctx.get_errors()))
        return Ok(None if data is MISSING else data)

    # Combinators

    def optional(self) -> OptionalSchema:
        """Accept an absent value (MISSING)."""
        return OptionalSchema(self)

    def nullable(self) -> NullableSchema:
        """Accept None."""
        return NullableSchema(self)

    def default(self, value: Any) -> DefaultSchema:
        """Substitute `value` for an absent input before validation."""
        return DefaultSchema(self, value)

    def transform(self, fn: Callable[[Any], Any]) -> TransformSchema:
        """Apply `fn` to the validated value."""
        return TransformSchema(self, fn)

    def refine(self, predicate: Predicate, message: RefineMessage = "Invalid value") -> RefineSchema:
        """
        Add a custom rule that runs after built-in validation passes.

        The predicate may return a bool or an awaitable resolving to one;
        awaitable predicates require `parse_async`.
        """
        return RefineSchema(self, predicate, message)

    def __or__(self, other: Schema) -> Schema:
        from .union import UnionSchema

        return UnionSchema([self, other])

    def __and__(self, other: Schema) -> Schema:
        from .intersection import IntersectionSchema

        return IntersectionSchema([self, other])

    def to_json_schema(self) -> dict[str, Any]:
        """Best-effort export to JSON Schema. Subclasses override."""
        return {}


class WrapperSchema(Schema):
    """A schema that delegates to exactly one inner schema."""

    def __init__(self, inner: Schema):
        if not isinstance(inner, Schema):
            raise TypeError(f"Expected a Schema, got {type(inner).__name__}")
        self._inner = inner

    @property
    def inner(self) -> Schema:
        return self._inner

    @property
    def accepts_missing(self) -> bool:
        return self._inner.accepts_missing

    def to_json_schema(self) -> dict[str, Any]:
        return self._inner.to_json_schema()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"


class OptionalSchema(WrapperSchema):
    """Accepts MISSING; otherwise validates with the inner schema."""

    @property
    def accepts_missing(self) -> bool:
        return True

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            return MISSING
        return self._inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            return MISSING
        return await self._inner._parse_async(value, ctx)


class NullableSchema(WrapperSchema):
    """Accepts None; otherwise validates with the inner schema."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is None:
            return None
        return self._inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is None:
            return None
        return await self._inner._parse_async(value, ctx)

    def to_json_schema(self) -> dict[str, Any]:
        return {"anyOf": [self._inner.to_json_schema(), {"type": "null"}]}


class DefaultSchema(WrapperSchema):
    """
    Substitutes a default for MISSING, then validates.

    None is a value, not an absence, so it never triggers the default.
    """

    def __init__(self, inner: Schema, default: Any):
        super().__init__(inner)
        self._default = default

    @property
    def default_value(self) -> Any:
        return self._default

    @property
    def accepts_missing(self) -> bool:
        return True

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            value = copy.deepcopy(self._default)
        return self._inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            value = copy.deepcopy(self._default)
        return await self._inner._parse_async(value, ctx)

    def to_json_schema(self) -> dict[str, Any]:
        return {**self._inner.to_json_schema(), "default": self._default}


class TransformSchema(WrapperSchema):
    """Applies a function to the validated value."""

    def __init__(self, inner: Schema, fn: Callable[[Any], Any]):
        super().__init__(inner)
        if not callable(fn):
            raise TypeError("transform() requires a callable")
        self._fn = fn

    def _apply(self, result: Any, ctx: ParseContext) -> Any:
        try:
            return self._fn(result)
        except Exception as e:
            ctx.add_error(
                ValidationErrorData(
                    path=ctx.get_current_path(),
                    message=str(e) or "Transformation failed",
                    code=ErrorCodes.TRANSFORM_ERROR,
                )
            )
            return INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        result = self._inner._parse(value, ctx)
        if result is INVALID or result is MISSING:
            return result
        return self._apply(result, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        result = await self._inner._parse_async(value, ctx)
        if result is INVALID or result is MISSING:
            return result
        return self._apply(result, ctx)


class RefineSchema(WrapperSchema):
    """
    Adds a custom predicate that runs after the inner schema succeeds.

    A falsy predicate result records an error with the configured message and
    code (`custom` unless given). An exception raised by the predicate is
    recorded as an error carrying the exception text. Absent values (MISSING)
    are not refined.
    """

    def __init__(self, inner: Schema, predicate: Predicate, message: RefineMessage):
        super().__init__(inner)
        if not callable(predicate):
            raise TypeError("refine() requires a callable predicate")
        self._predicate = predicate
        if isinstance(message, Mapping):
            self._message = message["message"]
            self._code = message.get("code") or ErrorCodes.CUSTOM
        else:
            self._message = message
            self._code = ErrorCodes.CUSTOM

    def _fail(self, ctx: ParseContext, message: str | None = None) -> Any:
        ctx.add_error(
            ValidationErrorData(
                path=ctx.get_current_path(),
                message=message or self._message,
                code=self._code,
            )
        )
        return INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        result = self._inner._parse(value, ctx)
        if result is INVALID or result is MISSING:
            return result

        try:
            passed = self._predicate(result)
        except Exception as e:
            return self._fail(ctx, str(e))

        if inspect.isawaitable(passed):
            discard_awaitable(passed)
            ctx.mark_async()
            return result

        return result if passed else self._fail(ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        result = await self._inner._parse_async(value, ctx)
        if result is INVALID or result is MISSING:
            return result

        try:
            passed = self._predicate(result)
            if inspect.isawaitable(passed):
                ctx.mark_async()
                passed = await passed
        except Exception as e:
            return self._fail(ctx, str(e))

        return result if passed else self._fail(ctx)


_exporting: ContextVar[frozenset[int]] = ContextVar("exporting_lazy", default=frozenset())


class LazySchema(Schema):
    """
    Defers schema construction to first use, enabling recursive definitions.

    Example:
        node = lazy(lambda: object({
            "name": string(),
            "children": array(node),
        }))
    """

    def __init__(self, factory: Callable[[], Schema]):
        if not callable(factory):
            raise TypeError("lazy() requires a zero-argument callable")
        self._factory = factory
        self._resolved: Schema | None = None

    @property
    def schema(self) -> Schema:
        if self._resolved is None:
            resolved = self._factory()
            if not isinstance(resolved, Schema):
                raise TypeError(
                    f"lazy() factory must return a Schema, got {type(resolved).__name__}"
                )
            self._resolved = resolved
        return self._resolved

    @property
    def accepts_missing(self) -> bool:
        return self.schema.accepts_missing

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        return self.schema._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        return await self.schema._parse_async(value, ctx)

    def to_json_schema(self) -> dict[str, Any]:
        active = _exporting.get()
        if id(self) in active:
            return {}
        token = _exporting.set(active | {id(self)})
        try:
            return self.schema.to_json_schema()
        finally:
            _exporting.reset(token)
