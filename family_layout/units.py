"""Construction and validation of the family-unit presentation tree."""

import logging
from collections.abc import Iterable, Iterator

from .models import Family, FamilyUnit, FamilyUnitError
from .relationships import RelationshipIndex

logger = logging.getLogger(__name__)


def _unit_id(members: list[str]) -> str:
    return "+".join(members)


def unit_from_dict(data: dict, _path: frozenset[int] = frozenset()) -> FamilyUnit:
    """Build a FamilyUnit (recursively) from its nested dict form.

    Accepts `partners` or `single`, children under `childUnits` or `children`,
    and the `dashed` / `auxiliary` (alias `nephew`) style flags.

    Raises:
        FamilyUnitError: If the unit has no members, more than two partners,
            or contains itself.
    """
    if id(data) in _path:
        raise FamilyUnitError(f"Family unit {data.get('id')!r} contains itself")

    partners = [str(p) for p in data.get("partners") or []]
    single = data.get("single")
    if not partners and not single:
        raise FamilyUnitError(f"Family unit {data.get('id')!r} has neither single nor partners")
    if len(partners) > 2:
        raise FamilyUnitError(f"Family unit {data.get('id')!r} has more than two partners")

    members = partners or [str(single)]
    children = data.get("childUnits")
    if children is None:
        children = data.get("children") or []

    path = _path | {id(data)}
    return FamilyUnit(
        id=str(data.get("id") or _unit_id(members)),
        partners=partners,
        single=None if partners else str(single),
        child_units=[unit_from_dict(child, path) for child in children],
        dashed=bool(data.get("dashed", False)),
        auxiliary=bool(data.get("auxiliary") or data.get("nephew") or data.get("isNephew")),
    )


def units_from_dicts(items: Iterable[dict]) -> list[FamilyUnit]:
    roots = [unit_from_dict(item) for item in items]
    validate_forest(roots)
    return roots


def walk_units(roots: Iterable[FamilyUnit], depth: int = 0) -> Iterator[tuple[FamilyUnit, int]]:
    """Yield (unit, depth) pairs in pre-order."""
    for unit in roots:
        yield unit, depth
        yield from walk_units(unit.child_units, depth + 1)


def validate_forest(roots: list[FamilyUnit]) -> None:
    """Check that the units form a forest.

    Raises:
        FamilyUnitError: If a unit is its own ancestor, appears under more than
            one parent, or has no members.
    """
    seen: set[int] = set()
    members_seen: set[str] = set()

    def visit(unit: FamilyUnit, path: set[int]) -> None:
        key = id(unit)
        if key in path:
            raise FamilyUnitError(f"Family unit {unit.id!r} is its own ancestor")
        if key in seen:
            raise FamilyUnitError(f"Family unit {unit.id!r} appears under more than one parent")
        if not unit.members:
            raise FamilyUnitError(f"Family unit {unit.id!r} has neither single nor partners")
        seen.add(key)

        for member in unit.members:
            if member in members_seen:
                logger.warning(f"Person {member} appears in more than one family unit")
            members_seen.add(member)

        path.add(key)
        for child in unit.child_units:
            visit(child, path)
        path.discard(key)

    for root in roots:
        visit(root, set())


def _check_ancestry(index: RelationshipIndex) -> None:
    """Raise FamilyUnitError if any visible person is their own ancestor."""
    done: set[str] = set()

    def visit(person_id: str, path: list[str]) -> None:
        if person_id in done:
            return
        if person_id in path:
            cycle = " -> ".join(path[path.index(person_id) :] + [person_id])
            raise FamilyUnitError(f"Family records form a cycle: {cycle}")
        path.append(person_id)
        for parent_id in index.parents_of(person_id):
            visit(parent_id, path)
        path.pop()
        done.add(person_id)

    for person_id in index.people:
        visit(person_id, [])


def derive_family_units(index: RelationshipIndex) -> list[FamilyUnit]:
    """Derive a presentation forest from relational family records.

    Root families are those whose visible partners have no visible parents.
    Each family becomes a couple or single unit. A child who is a partner in
    families of their own is represented by their first such family; children
    of any later families are merged into that unit and the later spouses are
    left out. Visible people in no family become root singles.

    Raises:
        FamilyUnitError: If the family records contain an ancestry cycle.
    """
    _check_ancestry(index)

    placed_families: set[int] = set()
    placed_people: set[str] = set()

    def has_parents(person_id: str) -> bool:
        return bool(index.parents_of(person_id))

    def attach_children(unit: FamilyUnit, fam: Family) -> None:
        for child_id in index.visible_children(fam):
            if child_id in placed_people:
                logger.debug(f"Skipping {child_id}: already placed in another unit")
                continue
            own = [f for f in index.parent_in.get(child_id, []) if id(f) not in placed_families]
            if own:
                unit.child_units.append(family_unit(own[0]))
            else:
                placed_people.add(child_id)
                unit.child_units.append(FamilyUnit(id=child_id, single=child_id))

    def family_unit(fam: Family) -> FamilyUnit:
        partners = [p for p in index.visible_partners(fam) if p not in placed_people]
        placed_families.add(id(fam))
        placed_people.update(partners)

        if len(partners) >= 2:
            unit = FamilyUnit(id=_unit_id(partners[:2]), partners=partners[:2])
        else:
            unit = FamilyUnit(id=partners[0], single=partners[0])
        attach_children(unit, fam)

        # Remarriages: fold later families of the same person into this unit
        for member in unit.members:
            for extra in index.parent_in.get(member, []):
                if id(extra) in placed_families:
                    continue
                placed_families.add(id(extra))
                omitted = [p for p in index.visible_partners(extra) if p not in unit.members]
                if omitted:
                    logger.info(f"Unit {unit.id}: omitting additional spouse(s) {', '.join(omitted)}")
                attach_children(unit, extra)
        return unit

    roots: list[FamilyUnit] = []
    for fam in index.families:
        partners = index.visible_partners(fam)
        if not partners or id(fam) in placed_families:
            continue
        if any(has_parents(p) for p in partners):
            continue
        if all(p in placed_people for p in partners):
            continue
        roots.append(family_unit(fam))

    # Families not reachable from a root (e.g. every partner already placed as a child elsewhere)
    for fam in index.families:
        if id(fam) in placed_families:
            continue
        partners = [p for p in index.visible_partners(fam) if p not in placed_people]
        if partners:
            roots.append(family_unit(fam))

    for person_id in index.people:
        if person_id not in placed_people:
            placed_people.add(person_id)
            roots.append(FamilyUnit(id=person_id, single=person_id))

    logger.debug(f"Derived {len(roots)} root family units")
    return roots
