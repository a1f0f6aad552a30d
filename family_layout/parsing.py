"""Family tree dataset loading (JSON and GEDCOM)."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ged4py import GedcomReader

from . import state
from .connections import derive_edges
from .constants import GEDCOM_SUFFIXES, JSON_SUFFIXES, STYLE_NORMAL
from .helpers import normalize_ids
from .models import AuxiliaryEdge, Family, ParentChildEdge, Person
from .relationships import build_relationship_index
from .units import derive_family_units, units_from_dicts

logger = logging.getLogger(__name__)


@dataclass
class Dataset:
    people: list[Person] = field(default_factory=list)
    families: list[Family] = field(default_factory=list)
    hidden: set[str] = field(default_factory=set)
    units: list[dict] | None = None  # Hand-authored unit forest, if any
    edges: list[ParentChildEdge] | None = None
    auxiliary_edges: list[AuxiliaryEdge] | None = None


def parse_person(data: dict) -> Person:
    return Person(
        id=str(data["id"]),
        name=data.get("name") or "",
        gender=data.get("gender"),
        aka=data.get("aka"),
        native_name=data.get("native_name") or data.get("chinese"),
        in_photo=data.get("inPhoto", data.get("in_photo", True)) is not False,
    )


def parse_family(data: dict) -> Family:
    return Family(
        partners=[str(p) for p in data.get("partners") or []],
        children=[str(c) for c in data.get("children") or []],
        note=data.get("note"),
        id=data.get("id"),
    )


def parse_edge(data: dict) -> ParentChildEdge:
    return ParentChildEdge(
        parents=[str(p) for p in data.get("parents") or []],
        children=[str(c) for c in data.get("children") or []],
        style=data.get("style") or data.get("type") or STYLE_NORMAL,
    )


def parse_auxiliary_edge(data: dict) -> AuxiliaryEdge:
    return AuxiliaryEdge(
        source=str(data.get("source") or data["from"]),
        target=str(data.get("target") or data["to"]),
    )


def parse_json_dataset(path: Path) -> Dataset:
    """Parse the JSON dataset format.

    Keys: people, families, hidden, and optionally units (or roots),
    connections and auxiliary.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    units = data.get("units")
    if units is None:
        units = data.get("roots")

    connections = data.get("connections")
    auxiliary = data.get("auxiliary")

    return Dataset(
        people=[parse_person(p) for p in data.get("people") or []],
        families=[parse_family(fam) for fam in data.get("families") or []],
        hidden={str(h) for h in data.get("hidden") or []},
        units=units,
        edges=[parse_edge(e) for e in connections] if connections is not None else None,
        auxiliary_edges=[parse_auxiliary_edge(a) for a in auxiliary] if auxiliary is not None else None,
    )


def normalize_xref(ref) -> str | None:
    """Normalize a GEDCOM reference to an xref id with @ symbols."""
    if ref is None:
        return None
    if hasattr(ref, "xref_id"):
        return ref.xref_id
    if isinstance(getattr(ref, "value", None), str):
        ref = ref.value  # unresolved ged4py Pointer
    stripped = str(ref).strip("@")
    return f"@{stripped}@" if stripped else None


def get_record_value(record, tag: str) -> str | None:
    """Get value from a ged4py record by tag."""
    try:
        sub = record.sub_tag(tag)
        if sub and sub.value:
            return str(sub.value)
    except (AttributeError, KeyError):
        pass
    return None


def parse_gedcom_name(record) -> str:
    """Full display name of a ged4py INDI record ("Given Surname")."""
    try:
        name = record.name
        if name is not None:
            formatted = name.format()
            if formatted:
                return " ".join(formatted.split())
    except AttributeError:
        pass
    raw = get_record_value(record, "NAME") or ""
    return " ".join(raw.replace("/", " ").split())


def parse_gedcom_dataset(path: Path) -> Dataset:
    """Parse people and families from a GEDCOM file."""
    dataset = Dataset()

    with GedcomReader(str(path)) as reader:
        for record in reader.records0("INDI"):
            dataset.people.append(
                Person(
                    id=record.xref_id,
                    name=parse_gedcom_name(record),
                    gender=get_record_value(record, "SEX"),
                )
            )

        for record in reader.records0("FAM"):
            partners = []
            children = []
            note = None
            for sub in record.sub_records:
                if sub.tag in ("HUSB", "WIFE") and sub.value:
                    partners.append(normalize_xref(sub.value))
                elif sub.tag == "CHIL" and sub.value:
                    children.append(normalize_xref(sub.value))
                elif sub.tag == "NOTE" and sub.value:
                    note = str(sub.value)
            dataset.families.append(
                Family(
                    partners=[p for p in partners if p],
                    children=[c for c in children if c],
                    note=note,
                    id=record.xref_id,
                )
            )

    return dataset


def load_tree_file(path: Path) -> Dataset:
    """Load a dataset, choosing the parser by file suffix.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return parse_json_dataset(path)
    if suffix in GEDCOM_SUFFIXES:
        return parse_gedcom_dataset(path)
    raise ValueError(f"Unsupported family tree format: {path.name}")


def load_dataset():
    """Load the configured dataset and build the layout inputs.

    Requires configure() to be called first to set state.TREE_FILE.
    """
    if state.TREE_FILE is None:
        raise RuntimeError("configure() must be called before load_dataset()")
    if not state.TREE_FILE.exists():
        raise FileNotFoundError(f"Family tree file not found: {state.TREE_FILE}")

    dataset = load_tree_file(state.TREE_FILE)

    extra_hidden = normalize_ids(os.getenv("FAMILY_TREE_HIDDEN"))
    if state.TREE_FILE.suffix.lower() in GEDCOM_SUFFIXES:
        extra_hidden = {normalize_xref(h) for h in extra_hidden}

    state.reset()
    state.hidden.update(dataset.hidden | extra_hidden)
    state.index = build_relationship_index(dataset.people, dataset.families, state.hidden)
    state.people.update(state.index.people)
    state.families.extend(dataset.families)

    if dataset.units is not None:
        state.units.extend(units_from_dicts(dataset.units))
    else:
        state.units.extend(derive_family_units(state.index))

    derived_edges, derived_auxiliary = derive_edges(state.families, state.units)
    state.edges.extend(dataset.edges if dataset.edges is not None else derived_edges)
    state.auxiliary_edges.extend(
        dataset.auxiliary_edges if dataset.auxiliary_edges is not None else derived_auxiliary
    )

    logger.info(
        f"Loaded {len(state.people)} visible people ({len(state.hidden)} hidden), "
        f"{len(state.families)} families, {len(state.units)} root units from {state.TREE_FILE.name}"
    )
