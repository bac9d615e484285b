"""Resource handlers and the registry that dispatches to them by kind."""

from rulesync.handlers.base import API_VERSION, BaseHandler, Handler, HandlerRegistry
from rulesync.handlers.rules import PROMETHEUS_RULE_GROUP_KIND, RuleGroupHandler
from rulesync.mimir.client import RulerClient


def build_registry(client: RulerClient) -> HandlerRegistry:
    """Registry with every built-in handler wired to the given ruler client."""
    registry = HandlerRegistry()
    registry.register(RuleGroupHandler(client))
    return registry


__all__ = [
    "API_VERSION",
    "BaseHandler",
    "Handler",
    "HandlerRegistry",
    "PROMETHEUS_RULE_GROUP_KIND",
    "RuleGroupHandler",
    "build_registry",
]
