"""Data models for people, families, layout units and computed geometry."""

import os
from dataclasses import dataclass, field, fields

from .constants import (
    COUPLE_GAP,
    FAMILY_GAP,
    GENERATION_GAP,
    KIND_PARENT_CHILD,
    LAYOUT_ENV_VARS,
    PADDING,
    PERSON_HEIGHT,
    PERSON_WIDTH,
    SIBLING_GAP,
    STUB_LENGTH,
    STYLE_AUXILIARY,
    STYLE_NORMAL,
)


class FamilyUnitError(ValueError):
    """Raised for structurally malformed family-unit input."""


@dataclass(frozen=True)
class Person:
    id: str
    name: str = ""
    gender: str | None = None
    aka: str | None = None  # Alternate name shown in parentheses
    native_name: str | None = None
    in_photo: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "aka": self.aka,
            "native_name": self.native_name,
            "in_photo": self.in_photo,
        }


@dataclass
class Family:
    partners: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    note: str | None = None
    id: str | None = None  # GEDCOM xref; JSON families have none

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "partners": self.partners,
            "children": self.children,
            "note": self.note,
        }


@dataclass(eq=False)
class FamilyUnit:
    """A node of the presentation tree: a couple or a single person.

    Height fields are filled in by calculate_heights().
    """

    id: str
    partners: list[str] = field(default_factory=list)
    single: str | None = None
    child_units: list["FamilyUnit"] = field(default_factory=list)
    dashed: bool = False
    auxiliary: bool = False
    self_height: float | None = None
    children_height: float | None = None
    total_height: float | None = None

    def __post_init__(self):
        if not self.members:
            raise FamilyUnitError(f"Family unit {self.id!r} has neither single nor partners")

    @property
    def members(self) -> list[str]:
        """Declared member ids, partners first."""
        if self.partners:
            return list(self.partners)
        return [self.single] if self.single else []

    def to_dict(self) -> dict:
        result: dict = {"id": self.id}
        if self.partners:
            result["partners"] = self.partners
        else:
            result["single"] = self.single
        result["childUnits"] = [child.to_dict() for child in self.child_units]
        if self.dashed:
            result["dashed"] = True
        if self.auxiliary:
            result["auxiliary"] = True
        if self.total_height is not None:
            result["selfHeight"] = self.self_height
            result["childrenHeight"] = self.children_height
            result["totalHeight"] = self.total_height
        return result


@dataclass(frozen=True)
class Position:
    person_id: str
    x: float
    y: float
    unit_id: str

    def to_dict(self) -> dict:
        return {
            "id": self.person_id,
            "x": self.x,
            "y": self.y,
            "unit_id": self.unit_id,
        }


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass
class ParentChildEdge:
    parents: list[str]
    children: list[str]
    style: str = STYLE_NORMAL

    def to_dict(self) -> dict:
        return {"parents": self.parents, "children": self.children, "style": self.style}


@dataclass
class AuxiliaryEdge:
    """A non parent-child relationship line, e.g. aunt to nephew."""

    source: str
    target: str
    style: str = STYLE_AUXILIARY

    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target, "style": self.style}


@dataclass
class Connection:
    kind: str = KIND_PARENT_CHILD
    style: str = STYLE_NORMAL
    parents: list[Position] = field(default_factory=list)
    children: list[Position] = field(default_factory=list)
    paths: list[list[Point]] = field(default_factory=list)
    bus_x: float | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "style": self.style,
            "parents": [p.to_dict() for p in self.parents],
            "children": [c.to_dict() for c in self.children],
            "paths": [[pt.to_dict() for pt in path] for path in self.paths],
            "bus_x": self.bus_x,
        }


@dataclass(frozen=True)
class LayoutConfig:
    """Layout distances. couple_gap may be negative (overlapping partners)."""

    person_width: float = PERSON_WIDTH
    person_height: float = PERSON_HEIGHT
    couple_gap: float = COUPLE_GAP
    sibling_gap: float = SIBLING_GAP
    family_gap: float = FAMILY_GAP
    generation_gap: float = GENERATION_GAP
    padding: float = PADDING
    stub_length: float = STUB_LENGTH

    @property
    def couple_width(self) -> float:
        return self.person_width * 2 + self.couple_gap

    @classmethod
    def from_env(cls) -> "LayoutConfig":
        """Build a config from LAYOUT_* environment variables.

        Raises:
            ValueError: If a variable is set but not numeric.
        """
        overrides = {}
        for env_var, field_name in LAYOUT_ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[field_name] = float(raw)
            except ValueError:
                raise ValueError(f"{env_var} must be a number, got {raw!r}") from None
        return cls(**overrides)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class LayoutResult:
    positions: dict[str, Position] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)
    width: float = 0
    height: float = 0

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "positions": {pid: pos.to_dict() for pid, pos in self.positions.items()},
            "connections": [c.to_dict() for c in self.connections],
        }
