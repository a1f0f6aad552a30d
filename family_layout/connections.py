"""Connection building and routing between positioned people.

Parent-child edges are routed left to right: a short stub from the parents'
anchor, then a vertical bus halfway to the children. A single child gets an
elbow; several children share one vertical bar with a branch per child.
"""

from collections.abc import Iterable

from .constants import (
    EDGE_STYLES,
    KIND_AUXILIARY,
    KIND_PARENT_CHILD,
    STYLE_AUXILIARY,
    STYLE_DASHED,
    STYLE_NORMAL,
)
from .models import (
    AuxiliaryEdge,
    Connection,
    Family,
    FamilyUnit,
    LayoutConfig,
    ParentChildEdge,
    Point,
    Position,
)


def _resolve(ids: Iterable[str], positions: dict[str, Position]) -> list[Position]:
    return [positions[pid] for pid in ids if pid in positions]


def parent_anchor(parents: list[Position], config: LayoutConfig) -> Point:
    """Right edge of the rightmost parent box, at the parents' mean centre height."""
    right_x = max(p.x for p in parents) + config.person_width
    center_y = sum(p.y for p in parents) / len(parents) + config.person_height / 2
    return Point(right_x, center_y)


def route_parent_child(
    parents: list[Position],
    children: list[Position],
    config: LayoutConfig,
) -> tuple[list[list[Point]], float]:
    """Return (paths, bus_x) for resolved parents and children."""
    anchor = parent_anchor(parents, config)
    stub_end = Point(anchor.x + config.stub_length, anchor.y)
    child_left_x = min(c.x for c in children)
    bus_x = stub_end.x + (child_left_x - stub_end.x) / 2
    half = config.person_height / 2

    paths = [[anchor, stub_end]]
    if len(children) == 1:
        child_y = children[0].y + half
        paths.append(
            [
                stub_end,
                Point(bus_x, anchor.y),
                Point(bus_x, child_y),
                Point(children[0].x, child_y),
            ]
        )
        return paths, bus_x

    child_ys = [c.y + half for c in children]
    paths.append([stub_end, Point(bus_x, anchor.y)])
    paths.append([Point(bus_x, min(child_ys)), Point(bus_x, max(child_ys))])
    for child, child_y in zip(children, child_ys):
        paths.append([Point(bus_x, child_y), Point(child.x, child_y)])
    return paths, bus_x


def route_auxiliary(source: Position, target: Position, config: LayoutConfig) -> list[Point]:
    """Fixed 4-point elbow from the source's right edge to the target's left edge."""
    from_x = source.x + config.person_width
    from_y = source.y + config.person_height / 2
    to_x = target.x
    to_y = target.y + config.person_height / 2
    mid_x = from_x + (to_x - from_x) / 2
    return [
        Point(from_x, from_y),
        Point(mid_x, from_y),
        Point(mid_x, to_y),
        Point(to_x, to_y),
    ]


def build_connections(
    positions: dict[str, Position],
    edges: Iterable[ParentChildEdge],
    auxiliary_edges: Iterable[AuxiliaryEdge] = (),
    config: LayoutConfig | None = None,
) -> list[Connection]:
    """Resolve edges against positions and route them.

    Ids without a position are dropped. An edge left with no parents or no
    children is skipped entirely, as is an auxiliary edge missing either end.
    """
    config = config or LayoutConfig()
    connections = []

    for edge in edges:
        parents = _resolve(edge.parents, positions)
        children = _resolve(edge.children, positions)
        if not parents or not children:
            continue
        paths, bus_x = route_parent_child(parents, children, config)
        connections.append(
            Connection(
                kind=KIND_PARENT_CHILD,
                style=edge.style if edge.style in EDGE_STYLES else STYLE_NORMAL,
                parents=parents,
                children=children,
                paths=paths,
                bus_x=bus_x,
            )
        )

    for aux in auxiliary_edges:
        source = positions.get(aux.source)
        target = positions.get(aux.target)
        if source is None or target is None:
            continue
        connections.append(
            Connection(
                kind=KIND_AUXILIARY,
                style=STYLE_AUXILIARY,
                parents=[source],
                children=[target],
                paths=[route_auxiliary(source, target, config)],
            )
        )

    return connections


def derive_edges(
    families: Iterable[Family],
    units: list[FamilyUnit] | None = None,
) -> tuple[list[ParentChildEdge], list[AuxiliaryEdge]]:
    """Derive parent-child and auxiliary edges from family records and unit flags.

    A family's edge is dashed when any of its children sits in a unit flagged
    dashed. Each unit flagged auxiliary gets a line from its parent unit's last
    member to its own first member.
    """
    dashed_people: set[str] = set()
    auxiliary_edges: list[AuxiliaryEdge] = []

    def collect(parent: FamilyUnit | None, unit: FamilyUnit) -> None:
        if unit.dashed:
            dashed_people.update(unit.members)
        if unit.auxiliary and parent is not None and parent.members and unit.members:
            auxiliary_edges.append(AuxiliaryEdge(source=parent.members[-1], target=unit.members[0]))
        for child in unit.child_units:
            collect(unit, child)

    for root in units or []:
        collect(None, root)

    edges = []
    for fam in families:
        if not fam.partners or not fam.children:
            continue
        style = STYLE_DASHED if any(c in dashed_people for c in fam.children) else STYLE_NORMAL
        edges.append(ParentChildEdge(parents=list(fam.partners), children=list(fam.children), style=style))

    return edges, auxiliary_edges
