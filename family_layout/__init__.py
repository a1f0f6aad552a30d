"""Family Tree Layout Server - left-to-right genealogy layout served over MCP.

The layout engine turns a forest of family units (couples or single people
with ordered child units) into box positions and routed connector lines.

Usage:
    family-layout --tree-file /path/to/family_tree.json
    FAMILY_TREE_FILE=/path/to/family_tree.json python -m family_layout
"""

from fastmcp import FastMCP

from .connections import build_connections, derive_edges
from .core import compute_layout
from .heights import calculate_heights
from .mcp_resources import register_resources
from .mcp_tools import register_tools
from .parsing import load_dataset
from .placement import place_units
from .relationships import RelationshipIndex, build_relationship_index
from .state import configure
from .telemetry import initialize_tracing
from .units import FamilyUnitError, derive_family_units, unit_from_dict, units_from_dicts

# Initialize tracing FIRST (before creating server)
initialize_tracing()

mcp = FastMCP("Family Tree Layout Server")

register_tools(mcp)
register_resources(mcp)

_initialized = False


def initialize():
    """Initialize the server: configure from env vars and load the dataset.

    Safe to call multiple times.
    """
    global _initialized
    if _initialized:
        return
    configure()
    load_dataset()
    _initialized = True


__all__ = [
    "FamilyUnitError",
    "RelationshipIndex",
    "build_connections",
    "build_relationship_index",
    "calculate_heights",
    "compute_layout",
    "derive_edges",
    "derive_family_units",
    "initialize",
    "mcp",
    "place_units",
    "unit_from_dict",
    "units_from_dicts",
]
