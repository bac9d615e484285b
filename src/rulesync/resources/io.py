"""
Resource file I/O

Reads resource documents from YAML/JSON files and writes resources back to
the per-kind locations chosen by their handlers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List

import structlog
import yaml

from rulesync.core.errors import InvalidArgumentError, InvalidSpecError
from rulesync.resources.models import Resource

if TYPE_CHECKING:
    from rulesync.handlers.base import Handler

logger = structlog.get_logger()

RESOURCE_SUFFIXES = (".yaml", ".yml", ".json")
FILETYPES = ("yaml", "json")


def _iter_files(path: Path) -> Iterator[Path]:
    if path.is_dir():
        for child in sorted(path.rglob("*")):
            if child.is_file() and child.suffix in RESOURCE_SUFFIXES:
                yield child
    elif path.is_file():
        yield path
    else:
        raise InvalidArgumentError(f"no such file or directory: {path}", details={"path": str(path)})


def load_resources(path: str | Path) -> List[Resource]:
    """
    Load every resource document under a file or directory.

    YAML files may hold several documents separated by '---'; empty
    documents are skipped.

    Raises:
        InvalidSpecError: If a file cannot be parsed or a document is malformed
    """
    resources: List[Resource] = []
    for file_path in _iter_files(Path(path)):
        text = file_path.read_text(encoding="utf-8")
        try:
            if file_path.suffix == ".json":
                documents = [json.loads(text)]
            else:
                documents = list(yaml.safe_load_all(text))
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise InvalidSpecError(f"failed to parse {file_path}: {e}", details={"path": str(file_path)}) from e

        for document in documents:
            if document is None:
                continue
            resources.append(Resource.from_dict(document))

        logger.debug("resources_loaded", path=str(file_path), count=len(documents))
    return resources


def dump_resource(resource: Resource, filetype: str = "yaml") -> str:
    """Render a resource as YAML or JSON text."""
    data = resource.to_dict()
    if filetype == "json":
        return json.dumps(data, indent=2) + "\n"
    if filetype == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    raise InvalidArgumentError(f"unsupported file type '{filetype}'", details={"filetype": filetype})


def write_resource(
    resource: Resource,
    handler: "Handler",
    directory: str | Path,
    filetype: str = "yaml",
) -> Path:
    """Write a resource below directory at the path its handler chooses."""
    content = dump_resource(resource, filetype)
    target = Path(directory) / handler.resource_file_path(resource, filetype)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target
