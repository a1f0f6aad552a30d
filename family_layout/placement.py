"""Top-down placement pass: generations left to right, siblings top to bottom."""

import logging
from collections.abc import Container

from .models import FamilyUnit, LayoutConfig, Position

logger = logging.getLogger(__name__)


def place_unit(
    unit: FamilyUnit,
    x: float,
    y: float,
    depth: int,
    people: Container[str],
    config: LayoutConfig,
    positions: dict[str, Position],
) -> None:
    """Place one unit inside its allocated span starting at (x, y), then its children.

    The unit's box is centred on the middle of its total_height span. People
    not in `people` are skipped without error.
    """
    if unit.total_height is None or unit.self_height is None or unit.children_height is None:
        raise ValueError(f"Heights not calculated for family unit {unit.id!r}")

    center_y = y + unit.total_height / 2
    unit_y = center_y - unit.self_height / 2

    visible = [pid for pid in unit.members if pid in people]
    if len(visible) < len(unit.members):
        logger.debug(f"Unit {unit.id}: skipping hidden or unknown member(s) at depth {depth}")

    if len(visible) >= 2:
        positions[visible[0]] = Position(visible[0], x, unit_y, unit.id)
        second_x = x + config.person_width + config.couple_gap
        positions[visible[1]] = Position(visible[1], second_x, unit_y, unit.id)
    elif visible:
        positions[visible[0]] = Position(visible[0], x, unit_y, unit.id)

    if not unit.child_units:
        return

    # Couple width for every parent keeps each generation in one column
    child_x = x + config.couple_width + config.generation_gap
    child_y = center_y - unit.children_height / 2
    for i, child in enumerate(unit.child_units):
        if i > 0:
            child_y += config.sibling_gap
        place_unit(child, child_x, child_y, depth + 1, people, config, positions)
        child_y += child.total_height


def place_units(
    roots: list[FamilyUnit],
    people: Container[str],
    config: LayoutConfig,
) -> dict[str, Position]:
    """Assign a top-left position to every visible person in the forest.

    Requires calculate_heights() to have run on the same forest.

    Args:
        roots: Root family units, stacked top to bottom with family_gap between.
        people: Visible person ids (a dict of Person works).
        config: Layout distances.

    Returns:
        Mapping of person id to Position.
    """
    positions: dict[str, Position] = {}
    x = config.padding
    y = config.padding

    for i, root in enumerate(roots):
        if i > 0:
            y += config.family_gap
        place_unit(root, x, y, 0, people, config, positions)
        y += root.total_height

    return positions
