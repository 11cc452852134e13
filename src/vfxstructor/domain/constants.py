from __future__ import annotations

"""
Domain Constants and Static Layout Tables.

Provides centralized access to the production folder layouts, naming
convention parameters and configuration versioning.
"""

from typing import Dict, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# PROJECT ROOT NAMING CONVENTION
# -----------------------------------------------------------------------------

# Reference codes are three characters: "{ARTIST}_{PROJECT}" -> "ABC_XYZ"
REF_LENGTH = 3
PROJECT_ROOT_NAME_LENGTH = 7
PROJECT_ROOT_SEPARATOR = "_"
PROJECT_ROOT_SEPARATOR_INDEX = 3

# -----------------------------------------------------------------------------
# DEFAULT PROJECT LAYOUT
# -----------------------------------------------------------------------------

DEFAULT_PROJECT_DIRECTORIES: Tuple[str, ...] = (
    "adobe",
    "Deliveries",
    "houdini",
    "maya",
    "maya/assets",
    "maya/autosave",
    "maya/cache",
    "maya/clips",
    "maya/data",
    "maya/images",
    "maya/movies",
    "maya/renderData",
    "maya/sceneAssembly",
    "maya/scenes",
    "maya/scenes/global",
    "maya/scripts",
    "maya/scripts/global",
    "maya/sound",
    "maya/sourceImages",
    "maya/Time Editor",
    "nuke",
    "Plates",
    "Reference",
    "zbrush",
)

DEFAULT_TEMPLATE_NAME = "Default VFX Template"
DEFAULT_TEMPLATE_DESCRIPTION = "Standard VFX project structure with basic directories"

# -----------------------------------------------------------------------------
# ASSET FOLDER KITS
# -----------------------------------------------------------------------------

# "{name}" is replaced by the upper-cased asset, R&D or shot name
_MAYA_CACHE_KIT: Tuple[str, ...] = (
    "maya/cache/{name}/alembic",
    "maya/cache/{name}/fbx",
    "maya/cache/{name}/nCache",
    "maya/cache/{name}/obj",
    "maya/cache/{name}/particles",
    "maya/data/{name}/atom",
    "maya/data/{name}/skinCluster",
    "maya/images/{name}",
)

_MAYA_TEXTURE_KIT: Tuple[str, ...] = (
    "maya/sourceImages/{name}/substance",
    "maya/sourceImages/{name}/zbrush",
)

_HOUDINI_KIT: Tuple[str, ...] = (
    "houdini/{name}/abc",
    "houdini/{name}/audio",
    "houdini/{name}/comp",
    "houdini/{name}/desk",
    "houdini/{name}/flip",
    "houdini/{name}/geo/fbx",
    "houdini/{name}/geo/obj",
    "houdini/{name}/hda",
    "houdini/{name}/otls",
    "houdini/{name}/render",
    "houdini/{name}/scripts",
    "houdini/{name}/sim",
    "houdini/{name}/tex",
    "houdini/{name}/video",
)

_NUKE_KIT: Tuple[str, ...] = (
    "nuke/{name}/renders",
    "nuke/{name}/scripts",
)

ASSET_FOLDER_LAYOUTS: Dict[str, Tuple[str, ...]] = {
    "asset": (
        ("maya/assets/{name}",)
        + _MAYA_CACHE_KIT
        + ("maya/scripts/{name}",)
        + _MAYA_TEXTURE_KIT
        + _HOUDINI_KIT
        + _NUKE_KIT
    ),
    "rnd": (
        _MAYA_CACHE_KIT
        + ("maya/scenes/{name}", "maya/scripts/{name}")
        + _MAYA_TEXTURE_KIT
        + _HOUDINI_KIT
        + _NUKE_KIT
    ),
    "shot": (
        _MAYA_CACHE_KIT
        + ("maya/scenes/{name}", "maya/scripts/{name}")
        + _HOUDINI_KIT
        + _NUKE_KIT
    ),
}

DEFAULT_ASSET_KIND = "asset"
