"""CLI commands that push local resources: apply and validate."""

from __future__ import annotations

from typing import Optional

import structlog

from rulesync.cli.registry import default_registry
from rulesync.cli.ux import error, info, success
from rulesync.core.errors import ExitCode, NotFoundError, ValidationError, main_with_error_handling
from rulesync.handlers import HandlerRegistry
from rulesync.handlers.base import Handler
from rulesync.resources.io import load_resources
from rulesync.resources.models import Resource

logger = structlog.get_logger()


def _check(handler: Handler, resource: Resource) -> str:
    handler.validate(resource)
    return handler.get_uid(resource)


@main_with_error_handling()
def validate_command(
    path: str,
    registry: Optional[HandlerRegistry] = None,
) -> int:
    """Validate local resources without contacting the remote system.

    Returns:
        Exit code (0 if all resources are valid, 12 otherwise)
    """
    registry = registry or default_registry()
    resources = load_resources(path)

    failures = 0
    for resource in resources:
        try:
            uid = _check(registry.for_resource(resource), resource)
        except ValidationError as e:
            failures += 1
            error(f"{resource.kind} {resource.name}: {e.message}")
            continue
        success(f"{resource.kind} {uid}")

    if failures:
        return ExitCode.VALIDATION_ERROR
    info(f"{len(resources)} resource(s) valid")
    return ExitCode.SUCCESS


@main_with_error_handling()
def apply_command(
    path: str,
    dry_run: bool = False,
    registry: Optional[HandlerRegistry] = None,
) -> int:
    """Create or update every resource found under path.

    Stops at the first failure; resources applied before it stay applied.

    Returns:
        Exit code (0 for success)
    """
    registry = registry or default_registry()
    resources = load_resources(path)

    for resource in resources:
        handler = registry.for_resource(resource)
        uid = _check(handler, resource)

        try:
            existing = handler.get_remote(resource)
        except NotFoundError:
            existing = None

        action = "add" if existing is None else "update"
        if dry_run:
            info(f"would {action} {resource.kind} {uid}")
            continue

        if existing is None:
            handler.add(resource)
        else:
            handler.update(existing, resource)
        logger.info("resource_applied", kind=resource.kind, uid=uid, action=action)
        success(f"{resource.kind} {uid} {'added' if existing is None else 'updated'}")

    return ExitCode.SUCCESS
