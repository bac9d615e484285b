"""Mimir/Cortex ruler client and wire models."""

from rulesync.mimir.client import MimirRulerClient, MimirRulerError, RulerClient
from rulesync.mimir.models import PrometheusRuleGroup, PrometheusRuleGrouping

__all__ = [
    "MimirRulerClient",
    "MimirRulerError",
    "RulerClient",
    "PrometheusRuleGroup",
    "PrometheusRuleGrouping",
]
