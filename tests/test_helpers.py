"""Tests for helper functions."""

from family_layout.helpers import canvas_size, display_name, normalize_ids, path_data
from family_layout.models import LayoutConfig, Person, Point, Position


class TestDisplayName:
    """Tests for the display_name function."""

    def test_long_name_uses_first_name(self):
        """Long names are shortened to the first name."""
        assert display_name(Person(id="1", name="Beatrice Lee")) == "Beatrice"

    def test_short_name_kept_whole(self):
        """Names of 8 characters or fewer are shown in full."""
        assert display_name(Person(id="1", name="Si Ah")) == "Si Ah"
        assert display_name(Person(id="1", name="Jo Smith")) == "Jo Smith"

    def test_titles_kept_whole(self):
        """Names starting with Aunt or Uncle are never shortened."""
        assert display_name(Person(id="1", name="Aunt May Chan")) == "Aunt May Chan"
        assert display_name(Person(id="1", name="Uncle Robert")) == "Uncle Robert"

    def test_empty_name_falls_back_to_id(self):
        """A nameless person is shown by id."""
        assert display_name(Person(id="P9")) == "P9"


class TestPathData:
    """Tests for SVG path data."""

    def test_polyline(self):
        """Points become an M/L path with compact numbers."""
        points = [Point(0, 0), Point(10.5, 0), Point(10.5, 20)]
        assert path_data(points) == "M 0 0 L 10.5 0 L 10.5 20"

    def test_too_few_points(self):
        """Fewer than two points draw nothing."""
        assert path_data([]) == ""
        assert path_data([Point(1, 1)]) == ""


class TestCanvasSize:
    """Tests for canvas_size."""

    def test_includes_box_and_padding(self):
        """Canvas covers the furthest box plus padding."""
        config = LayoutConfig()
        positions = [Position("A", 12, 12, "a"), Position("B", 184, 96, "b")]
        assert canvas_size(positions, config) == (184 + 58 + 12, 96 + 78 + 12)

    def test_empty(self):
        """An empty layout is just the padding."""
        assert canvas_size([], LayoutConfig(padding=5)) == (5, 5)


class TestNormalizeIds:
    """Tests for comma-separated id parsing."""

    def test_splits_and_strips(self):
        """Ids are split on commas and stripped."""
        assert normalize_ids(" P1, P2 ,,P3") == {"P1", "P2", "P3"}

    def test_empty(self):
        """Empty or missing input gives no ids."""
        assert normalize_ids("") == set()
        assert normalize_ids(None) == set()
