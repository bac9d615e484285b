"""Wire models for the Mimir/Cortex ruler API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml


@dataclass
class PrometheusRuleGroup:
    """A rule group as the ruler stores it: a name and its ordered rules."""

    name: str
    rules: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "rules": self.rules}

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrometheusRuleGroup":
        return cls(
            name=str(data.get("name", "")),
            rules=list(data.get("rules") or []),
        )


@dataclass
class PrometheusRuleGrouping:
    """Rule groups addressed to one ruler namespace."""

    namespace: str
    groups: List[PrometheusRuleGroup] = field(default_factory=list)


def parse_rule_groupings(payload: Any) -> Dict[str, List[PrometheusRuleGroup]]:
    """Parse the ruler's list response: namespace -> list of rule groups."""
    if not payload:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"expected mapping of namespaces, got {type(payload).__name__}")

    groupings: Dict[str, List[PrometheusRuleGroup]] = {}
    for namespace, groups in payload.items():
        groupings[str(namespace)] = [PrometheusRuleGroup.from_dict(g) for g in groups or []]
    return groupings
