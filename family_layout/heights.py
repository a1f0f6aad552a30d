"""Bottom-up sizing pass over the family-unit forest."""

from .models import FamilyUnit, LayoutConfig


def calculate_unit_height(unit: FamilyUnit, config: LayoutConfig) -> float:
    """Annotate a unit and all its descendants with their heights.

    Couples sit side by side, so a unit's own box is always one person tall.
    Children are stacked with sibling_gap between them.
    """
    self_height = config.person_height

    children_height = 0.0
    for i, child in enumerate(unit.child_units):
        children_height += calculate_unit_height(child, config)
        if i > 0:
            children_height += config.sibling_gap

    unit.self_height = self_height
    unit.children_height = children_height
    unit.total_height = max(self_height, children_height)
    return unit.total_height


def calculate_heights(roots: list[FamilyUnit], config: LayoutConfig) -> list[FamilyUnit]:
    for root in roots:
        calculate_unit_height(root, config)
    return roots
