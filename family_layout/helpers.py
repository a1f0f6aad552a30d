"""Utility functions shared by the layout engine and its renderers."""

from collections.abc import Iterable

from .constants import NAME_TITLES, SHORT_NAME_LENGTH
from .models import LayoutConfig, Person, Point, Position


def display_name(person: Person) -> str:
    """Label shown under a person's box.

    First name only, except for titled names ("Aunt May") and names that are
    already short.
    """
    name = person.name.strip()
    if not name:
        return person.id
    first = name.split()[0]
    if first in NAME_TITLES or len(name) <= SHORT_NAME_LENGTH:
        return name
    return first


def _fmt(value: float) -> str:
    return f"{value:g}"


def path_data(points: list[Point]) -> str:
    """SVG path data ("M x y L x y ...") for a polyline. Empty for < 2 points."""
    if len(points) < 2:
        return ""
    parts = [f"M {_fmt(points[0].x)} {_fmt(points[0].y)}"]
    parts.extend(f"L {_fmt(p.x)} {_fmt(p.y)}" for p in points[1:])
    return " ".join(parts)


def canvas_size(positions: Iterable[Position], config: LayoutConfig) -> tuple[float, float]:
    """Width and height needed to show every box plus outer padding."""
    max_x = 0.0
    max_y = 0.0
    for pos in positions:
        max_x = max(max_x, pos.x + config.person_width)
        max_y = max(max_y, pos.y + config.person_height)
    return max_x + config.padding, max_y + config.padding


def normalize_ids(raw: str | None) -> set[str]:
    """Parse a comma-separated id list (e.g. from FAMILY_TREE_HIDDEN)."""
    if not raw:
        return set()
    return {part.strip() for part in raw.split(",") if part.strip()}
