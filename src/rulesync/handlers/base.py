"""Resource handler protocol and registry."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from rulesync.core.errors import UnsupportedOperationError
from rulesync.resources.models import Resource, new_resource

API_VERSION = "rulesync/v1alpha1"


@runtime_checkable
class Handler(Protocol):
    """Protocol for handlers that sync one resource kind with a remote system."""

    @property
    def kind(self) -> str:
        """Resource kind this handler manages (e.g. 'PrometheusRuleGroup')."""
        ...

    @property
    def api_version(self) -> str:
        ...

    def resource_file_path(self, resource: Resource, filetype: str) -> str:
        """Relative path where the resource is persisted locally."""
        ...

    def validate(self, resource: Resource) -> None:
        ...

    def get_uid(self, resource: Resource) -> str:
        ...

    def get_spec_uid(self, resource: Resource) -> str:
        ...

    def get_by_uid(self, uid: str) -> Resource:
        ...

    def get_remote(self, resource: Resource) -> Resource:
        ...

    def list_remote(self) -> List[str]:
        ...

    def add(self, resource: Resource) -> None:
        ...

    def update(self, existing: Resource, resource: Resource) -> None:
        ...


class BaseHandler:
    """Shared identity of a handler: its kind and API version."""

    def __init__(self, kind: str, api_version: str = API_VERSION) -> None:
        self._kind = kind
        self._api_version = api_version

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def api_version(self) -> str:
        return self._api_version

    def new_resource(self, name: str, spec: Dict[str, Any]) -> Resource:
        return new_resource(self._api_version, self._kind, name, spec)


class HandlerRegistry:
    """In-memory registry of handlers keyed by resource kind."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, handler: Handler) -> None:
        """Register a handler by its kind, replacing any previous one."""
        self._handlers[handler.kind] = handler

    def get(self, kind: str) -> Handler:
        """Get the handler for a resource kind."""
        handler = self._handlers.get(kind)
        if handler is None:
            raise UnsupportedOperationError(
                f"no handler registered for kind '{kind}'", details={"kind": kind}
            )
        return handler

    def for_resource(self, resource: Resource) -> Handler:
        return self.get(resource.kind)

    def list(self) -> List[str]:
        """List all registered kinds."""
        return list(self._handlers.keys())
