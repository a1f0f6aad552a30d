"""Global mutable state for the loaded family tree dataset.

Only the server layer reads these; the layout passes take their inputs as
arguments.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .models import LayoutConfig

if TYPE_CHECKING:
    from .models import AuxiliaryEdge, Family, FamilyUnit, LayoutResult, ParentChildEdge, Person
    from .relationships import RelationshipIndex

# Configuration (set by configure() at startup)
TREE_FILE: Path | None = None
LAYOUT_CONFIG: LayoutConfig = LayoutConfig()

# Dataset (populated at startup by load_dataset)
people: dict[str, Person] = {}
families: list[Family] = []
hidden: set[str] = set()
units: list[FamilyUnit] = []
edges: list[ParentChildEdge] = []
auxiliary_edges: list[AuxiliaryEdge] = []
index: RelationshipIndex | None = None

# Most recent layout (computed lazily by core.get_current_layout)
layout: LayoutResult | None = None


def _resolve_tree_path() -> Path:
    """Get dataset path from FAMILY_TREE_FILE env var.

    Raises:
        FileNotFoundError: If FAMILY_TREE_FILE env var not set or file doesn't exist.
    """
    env_path = os.getenv("FAMILY_TREE_FILE")
    if not env_path:
        raise FileNotFoundError(
            "FAMILY_TREE_FILE environment variable not set.\n"
            "Set it to the path of your family tree (.json or .ged):\n"
            "  export FAMILY_TREE_FILE=/path/to/family_tree.json\n"
            "Or use the --tree-file CLI argument:\n"
            "  family-layout --tree-file /path/to/family_tree.json"
        )
    path = Path(env_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Family tree file not found: {path}")
    return path


def configure() -> None:
    """Initialize configuration from environment. Called at startup.

    Loads .env file if present, then reads FAMILY_TREE_FILE and the LAYOUT_*
    distances from the environment.
    """
    global TREE_FILE, LAYOUT_CONFIG
    load_dotenv()  # Load .env, won't override existing env vars
    TREE_FILE = _resolve_tree_path()
    LAYOUT_CONFIG = LayoutConfig.from_env()


def reset() -> None:
    """Clear the loaded dataset and cached layout."""
    global index, layout
    people.clear()
    families.clear()
    hidden.clear()
    units.clear()
    edges.clear()
    auxiliary_edges.clear()
    index = None
    layout = None
