"""Handler registry used by CLI commands."""

from __future__ import annotations

from rulesync.config.settings import get_settings
from rulesync.handlers import HandlerRegistry, build_registry
from rulesync.mimir.client import MimirRulerClient


def default_registry() -> HandlerRegistry:
    """Registry wired to the ruler configured through RULESYNC_* settings."""
    client = MimirRulerClient.from_settings(get_settings())
    return build_registry(client)
