"""
Plugin system for extending wenfit with global validation rules.

A plugin installs rules into a registry; every rule runs after a root schema
validates successfully, against that schema and the original input.

Example:
    from wenfit import GlobalValidationRule, plugin_registry

    class NoSecrets:
        name = "no-secrets"

        def install(self, registry):
            registry.add_global_rule(
                GlobalValidationRule(
                    name="no-password-key",
                    validate=lambda schema, value: "password" not in value,
                    message="Payload must not contain a password",
                )
            )

    plugin_registry.register(NoSecrets())
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, Union, runtime_checkable

from .context import ParseContext
from .errors.codes import ErrorCodes
from .errors.validation_error import ValidationErrorData

if TYPE_CHECKING:
    from .core.schema import Schema

logger = logging.getLogger(__name__)

RuleCheck = Callable[["Schema", Any], Union[bool, Awaitable[bool]]]


@dataclass(frozen=True)
class GlobalValidationRule:
    """A rule applied to every successfully validated root value."""

    name: str
    validate: RuleCheck
    message: str
    code: str = ErrorCodes.PLUGIN_ERROR


@runtime_checkable
class Plugin(Protocol):
    name: str

    def install(self, registry: PluginRegistry) -> None: ...


class PluginRegistry:
    """Registered plugins and the global rules they installed, in order."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._rules: list[GlobalValidationRule] = []

    def register(self, plugin: Plugin) -> None:
        """
        Register and install a plugin.

        Raises:
            ValueError: If a plugin with the same name is already registered.
        """
        if plugin.name in self._plugins:
            raise ValueError(f'Plugin "{plugin.name}" is already registered')
        self._plugins[plugin.name] = plugin
        plugin.install(self)
        logger.debug("Registered plugin %s", plugin.name)

    def add_global_rule(self, rule: GlobalValidationRule) -> None:
        self._rules.append(rule)

    def get(self, name: str) -> Plugin | None:
        return self._plugins.get(name)

    def has(self, name: str) -> bool:
        return name in self._plugins

    def get_all(self) -> list[Plugin]:
        return list(self._plugins.values())

    def get_global_rules(self) -> list[GlobalValidationRule]:
        return list(self._rules)

    def clear(self) -> None:
        self._plugins.clear()
        self._rules.clear()


plugin_registry = PluginRegistry()


def _rule_error(ctx: ParseContext, rule: GlobalValidationRule, message: str | None = None) -> None:
    ctx.add_error(
        ValidationErrorData(
            path=ctx.get_current_path(),
            message=message or rule.message,
            code=rule.code or ErrorCodes.PLUGIN_ERROR,
        )
    )


def run_global_rules(schema: Schema, value: Any, ctx: ParseContext) -> None:
    """Apply every global rule synchronously, recording failures on `ctx`."""
    from .core.schema import discard_awaitable

    for rule in plugin_registry.get_global_rules():
        try:
            passed = rule.validate(schema, value)
        except Exception as e:
            _rule_error(ctx, rule, str(e))
            continue
        if inspect.isawaitable(passed):
            discard_awaitable(passed)
            ctx.mark_async()
        elif not passed:
            _rule_error(ctx, rule)


async def run_global_rules_async(schema: Schema, value: Any, ctx: ParseContext) -> None:
    """Apply every global rule, awaiting asynchronous ones in registration order."""
    for rule in plugin_registry.get_global_rules():
        try:
            passed = rule.validate(schema, value)
            if inspect.isawaitable(passed):
                ctx.mark_async()
                passed = await passed
        except Exception as e:
            _rule_error(ctx, rule, str(e))
            continue
        if not passed:
            _rule_error(ctx, rule)
