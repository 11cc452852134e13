from __future__ import annotations

"""
Project Request Validation Service.

Gatekeeper between raw interface input and the structure builder: trims
fields, enforces the three-character reference codes that make up a project
root name, and upper-cases them.
"""

import logging
from typing import Any, Dict, List, Optional

from vfxstructor.domain.constants import REF_LENGTH
from vfxstructor.domain.errors import ValidationError
from vfxstructor.domain.project_models import ProjectConfig

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_project_config(raw: Dict[str, Any]) -> ProjectConfig:
    """
    Validate and normalize a raw project request.

    Args:
        raw: Mapping with 'project_ref', 'artist_ref', 'base_path' and an
             optional 'template_path'.

    Returns:
        ProjectConfig: Normalized request (reference codes upper-cased).

    Raises:
        ValidationError: Listing every invalid field.
    """
    errors: List[str] = []

    project_ref = _as_str(raw.get("project_ref")).upper()
    artist_ref = _as_str(raw.get("artist_ref")).upper()
    base_path = _as_str(raw.get("base_path"))
    template_path = _as_str(raw.get("template_path")) or None

    if len(project_ref) != REF_LENGTH:
        errors.append(f"Project reference must be exactly {REF_LENGTH} characters")
    if len(artist_ref) != REF_LENGTH:
        errors.append(f"Artist reference must be exactly {REF_LENGTH} characters")
    for label, ref in (("Project", project_ref), ("Artist", artist_ref)):
        if any(c in ref for c in "/\\_"):
            errors.append(f"{label} reference cannot contain path separators or '_'")
    if not base_path:
        errors.append("Base path is required")

    if errors:
        logger.debug(f"Project request rejected: {errors}")
        raise ValidationError("; ".join(errors))

    return ProjectConfig(
        project_ref=project_ref,
        artist_ref=artist_ref,
        base_path=base_path,
        template_path=template_path,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_str(value: Optional[Any]) -> str:
    if value is None:
        return ""
    return str(value).strip()
