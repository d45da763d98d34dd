"""
ParseContext tracks validation state during a single parse run.

Handles path tracking, error accumulation, cycle detection and async
detection. Schemas never hold per-run state themselves; everything mutable
lives here, so a schema instance can be shared by concurrent runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from .errors.messages import get_message_registry
from .errors.validation_error import ValidationErrorData
from .types import Path, PathSegment


class ParseContext:
    """
    Mutable state for one validation run.

    Created by the top-level `parse`/`safe_parse`/`parse_async` call and
    discarded when it returns. Union and intersection members run in
    disposable children created with `child()`.
    """

    __slots__ = ("_path", "_errors", "_is_async", "_visited")

    def __init__(self, path: Path = ()):
        self._path: list[PathSegment] = list(path)
        self._errors: list[ValidationErrorData] = []
        self._is_async = False
        self._visited: set[int] = set()

    def child(self) -> ParseContext:
        """
        Fork an isolated context for a speculative attempt.

        The child starts at the current path with a copy of the visited set
        and an empty error list; nothing it records reaches this context.
        """
        forked = ParseContext(self._path)
        forked._visited = set(self._visited)
        return forked

    # Errors

    def add_error(self, error: ValidationErrorData) -> None:
        self._errors.append(error)

    def add_error_with_template(
        self,
        code: str,
        default_message: str,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        """Record an error at the current path, resolving its message template."""
        message = get_message_registry().format_message(code, default_message, meta)
        self._errors.append(
            ValidationErrorData(
                path=self.get_current_path(),
                message=message,
                code=code,
                meta=meta,
            )
        )

    def get_errors(self) -> list[ValidationErrorData]:
        return list(self._errors)

    def has_errors(self) -> bool:
        return len(self._errors) > 0

    @property
    def error_count(self) -> int:
        return len(self._errors)

    # Path

    def push_path(self, segment: PathSegment) -> None:
        self._path.append(segment)

    def pop_path(self) -> None:
        self._path.pop()

    def get_current_path(self) -> Path:
        """Snapshot of the current path."""
        return tuple(self._path)

    @contextmanager
    def path_segment(self, segment: PathSegment) -> Iterator[None]:
        """Push `segment` for the duration of the block."""
        self.push_path(segment)
        try:
            yield
        finally:
            self.pop_path()

    # Cycle detection (by object identity)

    def has_visited(self, obj: Any) -> bool:
        return id(obj) in self._visited

    def mark_visited(self, obj: Any) -> None:
        self._visited.add(id(obj))

    def unmark_visited(self, obj: Any) -> None:
        self._visited.discard(id(obj))

    @contextmanager
    def visiting(self, obj: Any) -> Iterator[None]:
        """Mark `obj` as on the current descent path for the duration of the block."""
        self.mark_visited(obj)
        try:
            yield
        finally:
            self.unmark_visited(obj)

    # Async

    def mark_async(self) -> None:
        self._is_async = True

    def is_async_validation(self) -> bool:
        return self._is_async
