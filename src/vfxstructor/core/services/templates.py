from __future__ import annotations

"""
Project Template Service.

Reads and writes the JSON layout templates consumed by the structure
builder. Schema: name, description, directories [str], baseFiles
[{source, destination}]. The 'base_files' spelling is accepted on read.
"""

import json
import logging
import os
from typing import Any, Dict, List

from vfxstructor.domain.constants import (
    DEFAULT_PROJECT_DIRECTORIES,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_NAME,
)
from vfxstructor.domain.errors import StructorIOError, TemplateParseError
from vfxstructor.domain.project_models import BaseFile, ProjectTemplate

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_template(path: str) -> ProjectTemplate:
    """
    Load a project template from a JSON file.

    Args:
        path: Template file path.

    Returns:
        ProjectTemplate: The parsed template.

    Raises:
        StructorIOError: The file cannot be read.
        TemplateParseError: The content is not valid JSON or violates the schema.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise StructorIOError(
            f"Failed to read template file: {e}", path=path, reason=str(e)
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise TemplateParseError(f"Failed to parse template JSON: {e}") from e

    template = template_from_dict(data)
    logger.debug(
        f"Template '{template.name}' loaded from {path}: "
        f"{len(template.directories)} directories, {len(template.base_files)} base files"
    )
    return template


def write_template(template: ProjectTemplate, path: str) -> None:
    """
    Persist a template as JSON using the canonical schema keys.

    Raises:
        StructorIOError: The file cannot be written.
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(template.to_dict(), f, ensure_ascii=False, indent=4)
    except OSError as e:
        raise StructorIOError(
            f"Failed to write template file: {e}", path=path, reason=str(e)
        ) from e
    logger.info(f"Template '{template.name}' saved to {path}")


def default_template() -> ProjectTemplate:
    """Return the built-in production layout expressed as a template."""
    return ProjectTemplate(
        name=DEFAULT_TEMPLATE_NAME,
        description=DEFAULT_TEMPLATE_DESCRIPTION,
        directories=DEFAULT_PROJECT_DIRECTORIES,
    )


def template_from_dict(data: Any) -> ProjectTemplate:
    """
    Validate a decoded JSON document and build the template model.

    Raises:
        TemplateParseError: On any schema violation.
    """
    if not isinstance(data, dict):
        raise TemplateParseError(
            f"Failed to parse template JSON: expected an object, got {type(data).__name__}"
        )

    name = _require_str(data, "name")
    description = _require_str(data, "description")

    directories = data.get("directories")
    if not isinstance(directories, list) or not all(isinstance(d, str) for d in directories):
        raise TemplateParseError("Failed to parse template JSON: 'directories' must be a list of strings")

    raw_files = data.get("baseFiles", data.get("base_files", []))
    if not isinstance(raw_files, list):
        raise TemplateParseError("Failed to parse template JSON: 'baseFiles' must be a list")

    return ProjectTemplate(
        name=name,
        description=description,
        directories=tuple(directories),
        base_files=tuple(_parse_base_files(raw_files)),
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise TemplateParseError(f"Failed to parse template JSON: missing or invalid field '{key}'")
    return value


def _parse_base_files(raw_files: List[Any]) -> List[BaseFile]:
    files: List[BaseFile] = []
    for idx, item in enumerate(raw_files):
        if not isinstance(item, dict):
            raise TemplateParseError(f"Failed to parse template JSON: baseFiles[{idx}] must be an object")
        source = item.get("source")
        destination = item.get("destination")
        if not isinstance(source, str) or not isinstance(destination, str):
            raise TemplateParseError(
                f"Failed to parse template JSON: baseFiles[{idx}] needs string 'source' and 'destination'"
            )
        files.append(BaseFile(source=source, destination=destination))
    return files
