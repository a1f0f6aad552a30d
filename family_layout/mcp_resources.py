"""MCP resource definitions for the family tree layout server."""

import json

from .core import _get_family_units, _get_layout, _get_person_position


def register_resources(mcp):
    """Register all MCP resources with the server."""

    @mcp.resource("family-tree://layout")
    def resource_layout() -> str:
        """Get the full layout as JSON."""
        return json.dumps(_get_layout())

    @mcp.resource("family-tree://person/{id}")
    def resource_person(id: str) -> str:
        """Get one person's position."""
        pos = _get_person_position(id)
        if pos:
            return json.dumps(pos)
        return f"Person {id} not found"

    @mcp.resource("family-tree://units")
    def resource_units() -> str:
        """Get the family-unit forest as JSON."""
        return json.dumps(_get_family_units())
