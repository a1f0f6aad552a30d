"""MCP tool definitions for the family tree layout server."""

from .core import (
    _get_connections,
    _get_family_units,
    _get_layout,
    _get_person_position,
    _get_relationships,
    _get_statistics,
)


def register_tools(mcp):
    """Register all MCP tools with the server."""

    # ============== LAYOUT TOOLS (3) ==============

    @mcp.tool()
    def get_layout() -> dict:
        """
        Get the complete computed layout of the family tree.

        Generations run left to right (oldest on the left); siblings are
        stacked top to bottom. Coordinates are the top-left corner of each
        person's box.

        Returns:
            Dictionary with canvas width/height, positions keyed by person ID,
            routed connections and the layout distances used
        """
        return _get_layout()

    @mcp.tool()
    def get_person_position(person_id: str) -> dict | None:
        """
        Get where one person is drawn.

        Args:
            person_id: The person's ID as it appears in the dataset

        Returns:
            Position (x, y, unit_id) with box size and display labels, or None
            if the person is hidden or unknown
        """
        return _get_person_position(person_id)

    @mcp.tool()
    def get_connections(with_path_data: bool = True) -> list[dict]:
        """
        Get the routed parent-child and auxiliary connection lines.

        Args:
            with_path_data: Include ready-to-use SVG path strings (default: True)

        Returns:
            List of connections with kind, style, resolved endpoints and polylines
        """
        return _get_connections(with_path_data)

    # ============== STRUCTURE TOOLS (3) ==============

    @mcp.tool()
    def get_family_units() -> list[dict]:
        """
        Get the family-unit forest the layout is computed from.

        Returns:
            Nested units (couple or single plus child units) with their heights
        """
        return _get_family_units()

    @mcp.tool()
    def get_relationships(person_id: str) -> dict | None:
        """
        Get a person's parents, spouses and children from the family records.

        Args:
            person_id: The person's ID

        Returns:
            The family the person is a child in, the families they are a
            partner in, and resolved parent/spouse/child IDs
        """
        return _get_relationships(person_id)

    @mcp.tool()
    def get_statistics() -> dict:
        """
        Get counts and canvas size for the loaded tree.

        Returns:
            Dictionary with people, family, unit, generation and connection counts
        """
        return _get_statistics()
