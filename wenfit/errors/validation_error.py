"""
ValidationError and the structured error record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..types import Path

ROOT_KEY = "root"


@dataclass(frozen=True, slots=True)
class ValidationErrorData:
    """One path-located validation failure."""

    path: Path
    message: str
    code: str
    meta: Mapping[str, Any] | None = field(default=None, compare=False)

    @property
    def path_key(self) -> str:
        """Dotted path string, `root` for the empty path."""
        return ".".join(str(segment) for segment in self.path) if self.path else ROOT_KEY


class ValidationError(Exception):
    """
    Raised by `parse` when validation fails.

    Carries every error collected during the run, in discovery order.
    """

    def __init__(self, errors: Iterable[ValidationErrorData]):
        self.errors: list[ValidationErrorData] = list(errors)
        super().__init__(self._summary())

    def _summary(self) -> str:
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        if not count:
            return "Validation failed"
        return f"Validation failed with {count} {noun}:\n{self.format()}"

    def format(self) -> str:
        """One `path: message` line per error."""
        return "\n".join(f"{e.path_key}: {e.message}" for e in self.errors)

    def flatten(self) -> dict[str, list[str]]:
        """Group messages by dotted path key, preserving discovery order."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            result.setdefault(error.path_key, []).append(error.message)
        return result

    @property
    def codes(self) -> list[str]:
        return [str(e.code) for e in self.errors]


class AsyncValidationRequired(RuntimeError):
    """A synchronous entry point was used on a schema that performed async work."""

    def __init__(self, entry_point: str = "parse"):
        super().__init__(
            f"Schema requires asynchronous validation; use parse_async() instead of {entry_point}()"
        )
        self.entry_point = entry_point
