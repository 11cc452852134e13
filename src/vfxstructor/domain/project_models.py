from __future__ import annotations

"""
Project Domain Data Models.

Defines the value objects exchanged between the interface layer and the
structure services: the project request and the optional layout template.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from vfxstructor.domain.constants import PROJECT_ROOT_SEPARATOR

# -----------------------------------------------------------------------------
# PROJECT REQUEST
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectConfig:
    """
    Input for the creation of a new project structure.

    Attributes:
        project_ref: Project identifier (e.g. 'XYZ').
        artist_ref: Artist identifier (e.g. 'ABC').
        base_path: Parent directory receiving the project root.
        template_path: Optional path to a JSON layout template.
    """
    project_ref: str
    artist_ref: str
    base_path: str
    template_path: Optional[str] = None

    @property
    def project_dir_name(self) -> str:
        """Folder name of the project root: '{artist_ref}_{project_ref}'."""
        return f"{self.artist_ref}{PROJECT_ROOT_SEPARATOR}{self.project_ref}"

# -----------------------------------------------------------------------------
# TEMPLATE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseFile:
    """A file seeded into a new project: absolute source, project-relative destination."""
    source: str
    destination: str


@dataclass(frozen=True)
class ProjectTemplate:
    """
    Custom project layout loaded from a JSON document.

    Attributes:
        name: Display name of the template.
        description: Free-form description.
        directories: Project-relative directories, created in order.
        base_files: Files copied after every directory exists.
    """
    name: str
    description: str
    directories: Tuple[str, ...] = field(default_factory=tuple)
    base_files: Tuple[BaseFile, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the canonical JSON schema keys."""
        return {
            "name": self.name,
            "description": self.description,
            "directories": list(self.directories),
            "baseFiles": [
                {"source": f.source, "destination": f.destination}
                for f in self.base_files
            ],
        }
