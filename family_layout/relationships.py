"""Relationship lookups built from flat person and family records."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import Family, Person


@dataclass
class RelationshipIndex:
    """Visible people plus child/partner lookups over family records.

    Hidden ids never appear in any of the mappings.
    """

    people: dict[str, Person] = field(default_factory=dict)
    families: list[Family] = field(default_factory=list)
    hidden: set[str] = field(default_factory=set)
    child_of: dict[str, Family] = field(default_factory=dict)
    parent_in: dict[str, list[Family]] = field(default_factory=dict)

    def is_visible(self, person_id: str | None) -> bool:
        return person_id is not None and person_id in self.people

    def visible_partners(self, family: Family) -> list[str]:
        return [pid for pid in family.partners if pid in self.people]

    def visible_children(self, family: Family) -> list[str]:
        return [pid for pid in family.children if pid in self.people]

    def parents_of(self, person_id: str) -> list[str]:
        fam = self.child_of.get(person_id)
        if fam is None:
            return []
        return self.visible_partners(fam)

    def children_of(self, person_id: str) -> list[str]:
        children = []
        seen = set()
        for fam in self.parent_in.get(person_id, []):
            for child_id in self.visible_children(fam):
                if child_id not in seen:
                    seen.add(child_id)
                    children.append(child_id)
        return children

    def spouses_of(self, person_id: str) -> list[str]:
        spouses = []
        for fam in self.parent_in.get(person_id, []):
            for partner_id in self.visible_partners(fam):
                if partner_id != person_id and partner_id not in spouses:
                    spouses.append(partner_id)
        return spouses

    def is_root(self, family: Family) -> bool:
        """A family is a root when none of its visible partners has parents."""
        return not any(pid in self.child_of for pid in self.visible_partners(family))


def build_relationship_index(
    people: Iterable[Person],
    families: Iterable[Family],
    hidden: Iterable[str] = (),
) -> RelationshipIndex:
    """Index people by id and record which families each person belongs to.

    Hidden ids are checked before indexing. References to ids that are not in
    the person list are not indexed.
    """
    hidden_set = set(hidden)
    index = RelationshipIndex(hidden=hidden_set)

    for person in people:
        if person.id not in hidden_set:
            index.people[person.id] = person

    for fam in families:
        index.families.append(fam)
        for child_id in fam.children:
            if child_id in index.people:
                index.child_of[child_id] = fam
        for partner_id in fam.partners:
            if partner_id in index.people:
                index.parent_in.setdefault(partner_id, []).append(fam)

    return index
