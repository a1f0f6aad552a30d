"""Layout orchestration and query functions over the loaded dataset."""

import logging
from collections.abc import Container, Iterable

from . import state
from .connections import build_connections
from .heights import calculate_heights
from .helpers import canvas_size, display_name, path_data
from .models import AuxiliaryEdge, FamilyUnit, LayoutConfig, LayoutResult, ParentChildEdge
from .placement import place_units
from .telemetry import get_tracer
from .units import validate_forest, walk_units

logger = logging.getLogger(__name__)


def compute_layout(
    people: Container[str],
    units: list[FamilyUnit],
    edges: Iterable[ParentChildEdge] = (),
    auxiliary_edges: Iterable[AuxiliaryEdge] = (),
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Run a full layout: heights, placement, then connections.

    Annotates `units` with heights in place; everything else is returned.
    Running it twice on the same inputs gives identical results.

    Raises:
        FamilyUnitError: If `units` is not a forest, e.g. a unit is its own
            ancestor or has no members.
    """
    validate_forest(units)
    config = config or LayoutConfig()
    tracer = get_tracer()

    with tracer.start_as_current_span("layout.run"):
        with tracer.start_as_current_span("layout.heights"):
            calculate_heights(units, config)
        with tracer.start_as_current_span("layout.placement"):
            positions = place_units(units, people, config)
        with tracer.start_as_current_span("layout.connections"):
            connections = build_connections(positions, edges, auxiliary_edges, config)

    width, height = canvas_size(positions.values(), config)
    logger.debug(f"Layout placed {len(positions)} people with {len(connections)} connections")
    return LayoutResult(positions=positions, connections=connections, width=width, height=height)


def get_current_layout(refresh: bool = False) -> LayoutResult:
    """Layout of the loaded dataset, computed on first use."""
    if state.layout is None or refresh:
        state.layout = compute_layout(
            state.people,
            state.units,
            state.edges,
            state.auxiliary_edges,
            state.LAYOUT_CONFIG,
        )
    return state.layout


def _get_layout() -> dict:
    result = get_current_layout().to_dict()
    result["config"] = state.LAYOUT_CONFIG.to_dict()
    return result


def _get_person_position(person_id: str) -> dict | None:
    person = state.people.get(person_id)
    pos = get_current_layout().positions.get(person_id)
    if person is None or pos is None:
        return None

    result = pos.to_dict()
    result["name"] = person.name
    result["display_name"] = display_name(person)
    result["aka"] = person.aka
    result["in_photo"] = person.in_photo
    result["width"] = state.LAYOUT_CONFIG.person_width
    result["height"] = state.LAYOUT_CONFIG.person_height
    return result


def _get_connections(with_path_data: bool = True) -> list[dict]:
    results = []
    for conn in get_current_layout().connections:
        item = conn.to_dict()
        if with_path_data:
            item["path_data"] = [path_data(path) for path in conn.paths]
        results.append(item)
    return results


def _get_family_units() -> list[dict]:
    get_current_layout()  # ensures height annotations
    return [unit.to_dict() for unit in state.units]


def _get_relationships(person_id: str) -> dict | None:
    if state.index is None or person_id not in state.people:
        return None

    child_family = state.index.child_of.get(person_id)
    return {
        "id": person_id,
        "child_of": child_family.to_dict() if child_family else None,
        "parent_in": [fam.to_dict() for fam in state.index.parent_in.get(person_id, [])],
        "parents": state.index.parents_of(person_id),
        "spouses": state.index.spouses_of(person_id),
        "children": state.index.children_of(person_id),
    }


def _get_statistics() -> dict:
    layout = get_current_layout()
    depths = [depth for _, depth in walk_units(state.units)]
    return {
        "visible_people": len(state.people),
        "hidden_people": len(state.hidden),
        "families": len(state.families),
        "root_units": len(state.units),
        "total_units": len(depths),
        "generations": max(depths) + 1 if depths else 0,
        "positioned_people": len(layout.positions),
        "connections": len(layout.connections),
        "width": layout.width,
        "height": layout.height,
    }
