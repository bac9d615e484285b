"""
Schema for the spec of PrometheusRuleGroup resources.

Validates the shape of a rule-group spec before it is translated for the
ruler, so a missing or malformed "rules" field fails with a clear error.
Rule bodies stay free-form: expression syntax is the ruler's concern.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from rulesync.core.errors import InvalidSpecError


class RuleType(StrEnum):
    """Rule kinds understood by the ruler."""

    RECORDING = "recording"
    ALERTING = "alerting"


class RuleGroupSpec(BaseModel):
    """Spec payload of a PrometheusRuleGroup resource."""

    model_config = ConfigDict(extra="allow")

    rules: List[Dict[str, Any]] = Field(..., description="Ordered rule mappings")


def parse_rule_group_spec(spec: Dict[str, Any], name: str) -> RuleGroupSpec:
    """
    Validate a raw spec mapping.

    Raises:
        InvalidSpecError: If "rules" is absent or not a list of mappings
    """
    try:
        return RuleGroupSpec.model_validate(spec)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidSpecError(
            f"invalid spec for rule group {name}: {problems}",
            details={"name": name},
        ) from exc
