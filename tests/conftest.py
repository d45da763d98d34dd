import pytest

from wenfit import clear_error_messages, plugin_registry


@pytest.fixture(scope="function")
def clean_registries():
    """Reset global message templates and plugins around a test."""
    clear_error_messages()
    plugin_registry.clear()
    yield
    clear_error_messages()
    plugin_registry.clear()
