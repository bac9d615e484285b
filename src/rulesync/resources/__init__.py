"""Generic resource model, rule-group spec schema and resource file I/O."""

from rulesync.resources.io import dump_resource, load_resources, write_resource
from rulesync.resources.models import Resource, new_resource
from rulesync.resources.schema import RuleGroupSpec, RuleType, parse_rule_group_spec

__all__ = [
    "Resource",
    "new_resource",
    "RuleGroupSpec",
    "RuleType",
    "parse_rule_group_spec",
    "load_resources",
    "dump_resource",
    "write_resource",
]
