"""
Prometheus rule group handler.

Maps PrometheusRuleGroup resources onto rule groups stored in a Mimir or
Cortex ruler. A rule group is identified by "<namespace>.<name>": the
namespace comes from resource metadata, the name from the resource itself.

Resources describe rules with generic field names which are translated
on the way out:

    type: recording, name: X  ->  record: X
    type: alerting,  name: X  ->  alert: X
    query: <expr>             ->  expr: <expr>

Reads return the ruler's rules as-is, so the translation is one-way.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

import structlog

from rulesync.core.errors import (
    InvalidArgumentError,
    MismatchError,
    MissingMetadataError,
    NotFoundError,
    UnsupportedOperationError,
)
from rulesync.handlers.base import API_VERSION, BaseHandler
from rulesync.mimir.client import RulerClient
from rulesync.mimir.models import PrometheusRuleGroup, PrometheusRuleGrouping
from rulesync.resources.models import Resource
from rulesync.resources.schema import RuleType, parse_rule_group_spec

logger = structlog.get_logger()

PROMETHEUS_RULE_GROUP_KIND = "PrometheusRuleGroup"
PROMETHEUS_RULE_GROUP_PATTERN = "prometheus/rules-{name}.{filetype}"

NAMESPACE_KEY = "namespace"


class RuleGroupHandler(BaseHandler):
    """Handler for PrometheusRuleGroup resources."""

    def __init__(self, client: RulerClient, api_version: str = API_VERSION) -> None:
        super().__init__(PROMETHEUS_RULE_GROUP_KIND, api_version)
        self._client = client

    def resource_file_path(self, resource: Resource, filetype: str) -> str:
        """Location on disk where a resource should be written."""
        filename = resource.name.replace(os.sep, "-").replace("/", "-")
        return PROMETHEUS_RULE_GROUP_PATTERN.format(name=filename, filetype=filetype)

    def validate(self, resource: Resource) -> None:
        uid, exists = resource.get_spec_string("uid")
        if exists and uid != resource.name:
            raise MismatchError(uid, resource.name)

    def get_uid(self, resource: Resource) -> str:
        if not resource.has_metadata(NAMESPACE_KEY):
            raise MissingMetadataError(self.kind, resource.name, NAMESPACE_KEY)
        return f"{resource.get_metadata(NAMESPACE_KEY)}.{resource.name}"

    def get_spec_uid(self, resource: Resource) -> str:
        raise UnsupportedOperationError("get_spec_uid is not supported for prometheus rules")

    def get_by_uid(self, uid: str) -> Resource:
        """Fetch a rule group from the ruler by its "<namespace>.<name>" uid."""
        namespace, sep, name = uid.partition(".")
        if not sep or not namespace or not name:
            raise InvalidArgumentError(
                f"invalid {self.kind} uid '{uid}', expected <namespace>.<name>",
                details={"uid": uid},
            )

        groupings = self._client.list_rules()
        for group in groupings.get(namespace, []):
            if group.name == name:
                resource = self.new_resource(group.name, {"rules": group.rules})
                resource.set_metadata(NAMESPACE_KEY, namespace)
                return resource

        raise NotFoundError(uid, kind=self.kind)

    def get_remote(self, resource: Resource) -> Resource:
        return self.get_by_uid(self.get_uid(resource))

    def list_remote(self) -> List[str]:
        """UIDs of every rule group known to the ruler."""
        groupings = self._client.list_rules()
        return [
            f"{namespace}.{group.name}"
            for namespace, groups in groupings.items()
            for group in groups
        ]

    def add(self, resource: Resource) -> None:
        self._write_rule_group(resource)

    def update(self, existing: Resource, resource: Resource) -> None:
        # The ruler replaces a group wholesale, so the existing state is unused
        self._write_rule_group(resource)

    def _write_rule_group(self, resource: Resource) -> None:
        namespace = resource.get_metadata(NAMESPACE_KEY)
        if not namespace:
            raise MissingMetadataError(self.kind, resource.name, NAMESPACE_KEY)

        spec = parse_rule_group_spec(resource.spec, resource.name)
        group = PrometheusRuleGroup(
            name=resource.name,
            rules=[self._translate_rule(resource.name, rule) for rule in spec.rules],
        )
        grouping = PrometheusRuleGrouping(
            namespace=namespace,
            groups=[group],
        )
        self._client.create_rules(grouping)

    @staticmethod
    def _translate_rule(group_name: str, rule: Dict[str, Any]) -> Dict[str, Any]:
        """Rename generic rule fields to the ones the ruler expects."""
        translated = dict(rule)
        rule_type = translated.get("type")

        if rule_type == RuleType.RECORDING:
            translated["record"] = translated.pop("name", None)
        elif rule_type == RuleType.ALERTING:
            translated["alert"] = translated.pop("name", None)
        else:
            logger.warning(
                "rule_type_unrecognized",
                group=group_name,
                rule=translated.get("name"),
                type=rule_type,
            )

        if translated.get("query") is not None:
            translated["expr"] = translated.pop("query")

        return translated
