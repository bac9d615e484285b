"""CLI commands that read resources from the remote system: list, get, pull."""

from __future__ import annotations

import json
from typing import Optional

import structlog

from rulesync.cli.registry import default_registry
from rulesync.cli.ux import console, emit, print_table, success
from rulesync.core.errors import ExitCode, main_with_error_handling
from rulesync.handlers import PROMETHEUS_RULE_GROUP_KIND, HandlerRegistry
from rulesync.resources.io import dump_resource, write_resource

logger = structlog.get_logger()


@main_with_error_handling()
def list_command(
    output_format: str = "text",
    registry: Optional[HandlerRegistry] = None,
) -> int:
    """List the uids of every remote resource, for every registered kind.

    Returns:
        Exit code (0 for success)
    """
    registry = registry or default_registry()

    rows: list[list[str]] = []
    for kind in registry.list():
        for uid in registry.get(kind).list_remote():
            rows.append([kind, uid])
    rows.sort()

    if output_format == "json":
        emit(json.dumps([{"kind": kind, "uid": uid} for kind, uid in rows], indent=2))
    elif rows:
        print_table("Remote resources", ["Kind", "UID"], rows)
    else:
        console.print("[muted]No remote resources found[/muted]")
    return ExitCode.SUCCESS


@main_with_error_handling()
def get_command(
    uid: str,
    kind: str = PROMETHEUS_RULE_GROUP_KIND,
    output_format: str = "yaml",
    registry: Optional[HandlerRegistry] = None,
) -> int:
    """Print one remote resource.

    Returns:
        Exit code (0 for success, 14 if the resource does not exist)
    """
    registry = registry or default_registry()
    resource = registry.get(kind).get_by_uid(uid)
    emit(dump_resource(resource, output_format))
    return ExitCode.SUCCESS


@main_with_error_handling()
def pull_command(
    directory: str,
    filetype: str = "yaml",
    registry: Optional[HandlerRegistry] = None,
) -> int:
    """Download every remote resource into directory.

    Each resource lands at the path its handler chooses, e.g.
    prometheus/rules-<name>.yaml for rule groups.

    Returns:
        Exit code (0 for success)
    """
    registry = registry or default_registry()

    written = 0
    for kind in registry.list():
        handler = registry.get(kind)
        for uid in handler.list_remote():
            resource = handler.get_by_uid(uid)
            path = write_resource(resource, handler, directory, filetype)
            logger.info("resource_pulled", kind=kind, uid=uid, path=str(path))
            written += 1

    success(f"Pulled {written} resource(s) into {directory}")
    return ExitCode.SUCCESS
