"""
Error message templates for localization and customization.

Templates are looked up by error code. Scoped templates set through
`error_messages()` take precedence over the global registry.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Mapping, Union

MessageTemplate = Union[str, Callable[[Mapping[str, Any] | None], str]]

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")

# Templates active for the current call tree
_scoped_templates: ContextVar[Mapping[str, MessageTemplate]] = ContextVar(
    "scoped_templates", default={}
)


def _render(template: MessageTemplate, meta: Mapping[str, Any] | None) -> str:
    if callable(template):
        return template(meta)
    if not meta:
        return template

    def substitute(match: re.Match) -> str:
        key = match.group(1)
        if key in meta and meta[key] is not None:
            return str(meta[key])
        return match.group(0)

    return _PLACEHOLDER.sub(substitute, template)


class MessageRegistry:
    """Registry of message templates keyed by error code."""

    def __init__(self) -> None:
        self._templates: dict[str, MessageTemplate] = {}

    def set_template(self, code: str, template: MessageTemplate) -> None:
        self._templates[str(code)] = template

    def set_templates(self, templates: Mapping[str, MessageTemplate]) -> None:
        for code, template in templates.items():
            self.set_template(code, template)

    def get_template(self, code: str) -> MessageTemplate | None:
        scoped = _scoped_templates.get()
        if str(code) in scoped:
            return scoped[str(code)]
        return self._templates.get(str(code))

    def has_template(self, code: str) -> bool:
        return self.get_template(code) is not None

    def remove_template(self, code: str) -> None:
        self._templates.pop(str(code), None)

    def clear(self) -> None:
        self._templates.clear()

    def format_message(
        self,
        code: str,
        default_message: str,
        meta: Mapping[str, Any] | None = None,
    ) -> str:
        """
        Resolve the message for an error code.

        String templates support `{{placeholder}}` substitution from meta;
        placeholders with no matching meta key are left untouched. Callable
        templates receive the meta mapping. Without a template the default
        message is returned.
        """
        template = self.get_template(code)
        if template is None:
            return default_message
        return _render(template, meta)


_global_registry = MessageRegistry()


def get_message_registry() -> MessageRegistry:
    """Return the process-wide message registry."""
    return _global_registry


def set_error_messages(templates: Mapping[str, MessageTemplate]) -> None:
    """Register several global templates at once."""
    _global_registry.set_templates(templates)


def set_error_message(code: str, template: MessageTemplate) -> None:
    """Register a single global template."""
    _global_registry.set_template(code, template)


def clear_error_messages() -> None:
    """Remove every global template."""
    _global_registry.clear()


@contextmanager
def error_messages(
    templates: Mapping[str, MessageTemplate] | None = None, **by_name: MessageTemplate
):
    """
    Context manager applying message templates to validations run inside it.

    Args:
        templates: Mapping of error code to template. Codes containing dots
            (e.g. "string.min") must be passed this way.
        **by_name: Templates for dot-free codes such as `required`.

    Example:
        from wenfit import object, string, error_messages

        schema = object({"name": string()})

        with error_messages({"required": "Please fill in {{field}}"}):
            schema.safe_parse({})

        # Outside the block, messages fall back to the global registry
        schema.safe_parse({})
    """
    merged = {**_scoped_templates.get(), **{str(k): v for k, v in (templates or {}).items()}}
    merged.update(by_name)
    token = _scoped_templates.set(merged)
    try:
        yield
    finally:
        _scoped_templates.reset(token)
