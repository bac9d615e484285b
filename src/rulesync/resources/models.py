"""
Resource model

Generic, kind-agnostic representation of a managed object. Handlers read
resources, build new ones from remote payloads, and never depend on the
on-disk layout beyond what is exposed here.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from rulesync.core.errors import InvalidSpecError


@dataclass
class Resource:
    """A managed object: kind, name, metadata and an arbitrary spec payload."""

    api_version: str
    kind: str
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)
    spec: Dict[str, Any] = field(default_factory=dict)

    def get_metadata(self, key: str) -> str:
        return self.metadata.get(key, "")

    def set_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def has_metadata(self, key: str) -> bool:
        return key in self.metadata

    def get_spec_string(self, key: str) -> Tuple[str, bool]:
        """
        Look up a string value in the spec.

        Returns:
            (value, exists). Non-string values count as absent.
        """
        value = self.spec.get(key)
        if isinstance(value, str):
            return value, True
        return "", False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document layout used on disk."""
        metadata: Dict[str, Any] = {"name": self.name}
        metadata.update({k: v for k, v in self.metadata.items() if k != "name"})
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": copy.deepcopy(self.spec),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        """
        Parse a resource document.

        Example input:
            {
                "apiVersion": "rulesync/v1alpha1",
                "kind": "PrometheusRuleGroup",
                "metadata": {"name": "latency", "namespace": "team-a"},
                "spec": {"rules": [...]}
            }
        """
        if not isinstance(data, dict):
            raise InvalidSpecError("resource document must be a mapping")

        kind = data.get("kind")
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise InvalidSpecError("resource metadata must be a mapping")
        name = metadata.get("name")
        if not kind or not name:
            raise InvalidSpecError(
                "resource document requires kind and metadata.name",
                details={"kind": kind, "name": name},
            )

        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise InvalidSpecError(f"spec of {kind} {name} must be a mapping")

        return cls(
            api_version=data.get("apiVersion", ""),
            kind=kind,
            name=str(name),
            metadata={k: str(v) for k, v in metadata.items() if k != "name" and v is not None},
            spec=spec,
        )


def new_resource(api_version: str, kind: str, name: str, spec: Dict[str, Any]) -> Resource:
    """Construct a resource, rejecting an empty kind or name."""
    if not kind:
        raise InvalidSpecError("resource kind must not be empty")
    if not name:
        raise InvalidSpecError(f"{kind} resource name must not be empty")
    return Resource(api_version=api_version, kind=kind, name=name, spec=spec)
