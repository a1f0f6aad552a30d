"""Tests for layout orchestration and server query functions on the sample dataset."""

import json

import pytest

from family_layout import mcp, state
from family_layout.core import (
    _get_connections,
    _get_family_units,
    _get_layout,
    _get_person_position,
    _get_relationships,
    _get_statistics,
    compute_layout,
    get_current_layout,
)
from family_layout.models import FamilyUnit, FamilyUnitError, ParentChildEdge


class TestComputeLayout:
    """Tests for compute_layout."""

    def test_scenario_positions(self, config, couple_with_child, people_abcd):
        """A couple with one child lands on the expected coordinates."""
        result = compute_layout(people_abcd, couple_with_child, [ParentChildEdge(["A", "B"], ["C"])], config=config)
        assert [(p.x, p.y) for p in result.positions.values()] == [(12, 12), (56, 12), (184, 12)]
        assert len(result.connections) == 1

    def test_annotates_units(self, config, couple_with_child, people_abcd):
        """Heights are written back onto the units."""
        compute_layout(people_abcd, couple_with_child, config=config)
        assert couple_with_child[0].total_height == 78

    def test_repeatable(self, config, people_abcd):
        """Two runs over equal forests serialize identically."""
        def forest():
            return [
                FamilyUnit(
                    id="ab",
                    partners=["A", "B"],
                    child_units=[FamilyUnit(id="c", single="C"), FamilyUnit(id="d", single="D")],
                )
            ]

        edges = [ParentChildEdge(["A", "B"], ["C", "D"])]
        first = compute_layout(people_abcd, forest(), edges, config=config)
        second = compute_layout(people_abcd, forest(), edges, config=config)
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_empty_forest(self, config):
        """An empty forest yields no positions and no connections."""
        result = compute_layout({}, [], config=config)
        assert result.positions == {}
        assert result.connections == []

    def test_cyclic_forest_rejected(self, config):
        """A unit nested under its own descendant fails before any pass runs."""
        a = FamilyUnit(id="a", single="A")
        b = FamilyUnit(id="b", single="B", child_units=[a])
        a.child_units.append(b)
        with pytest.raises(FamilyUnitError, match="own ancestor"):
            compute_layout({"A", "B"}, [a], config=config)
        assert a.total_height is None

    def test_memberless_unit_rejected(self, config):
        """A unit emptied after construction is not laid out."""
        child = FamilyUnit(id="c", single="C")
        empty = FamilyUnit(id="empty", single="E", child_units=[child])
        empty.single = None
        with pytest.raises(FamilyUnitError, match="neither single nor partners"):
            compute_layout({"C"}, [empty], config=config)


class TestSampleDatasetLayout:
    """Tests that the derived sample dataset lays out as expected."""

    def test_derived_roots(self):
        """Root families are the couples without parents, in input order."""
        assert [u.id for u in state.units] == ["P1+P2", "P7+P8"]

    def test_positions(self):
        """People land on the hand-computed coordinates."""
        positions = get_current_layout().positions
        assert (positions["P1"].x, positions["P1"].y) == (12, 54)
        assert (positions["P3"].x, positions["P3"].y) == (228, 12)
        assert (positions["P5"].x, positions["P5"].y) == (356, 12)
        assert (positions["P6"].x, positions["P6"].y) == (184, 96)
        assert (positions["P9"].x, positions["P9"].y) == (184, 186)

    def test_hidden_person_absent(self):
        """Hidden people get no position."""
        assert "P10" not in get_current_layout().positions

    def test_connections(self):
        """One connection per family with visible children."""
        connections = get_current_layout().connections
        assert len(connections) == 3
        first = connections[0]
        assert first.bus_x == 156.5
        assert [c.person_id for c in connections[2].children] == ["P9"]


class TestServerQueries:
    """Tests for the functions behind the MCP tools and resources."""

    def test_get_layout(self):
        """The layout payload carries canvas size, config and positions."""
        result = _get_layout()
        assert result["width"] == 426
        assert result["height"] == 276
        assert result["config"]["person_width"] == 58
        assert "P1" in result["positions"]

    def test_get_person_position(self):
        """Position lookup includes the display name and alternate name."""
        result = _get_person_position("P2")
        assert result["x"] == 56
        assert result["display_name"] == "Beatrice"
        assert result["aka"] == "Bea"

    def test_get_person_position_hidden(self):
        """Hidden and unknown people have no position."""
        assert _get_person_position("P10") is None
        assert _get_person_position("NOPE") is None

    def test_get_connections_with_path_data(self):
        """Connections include SVG path data by default."""
        result = _get_connections()
        assert result[0]["path_data"][0] == "M 114 93 L 129 93"

    def test_get_connections_without_path_data(self):
        """Path data can be left out."""
        assert "path_data" not in _get_connections(with_path_data=False)[0]

    def test_get_family_units(self):
        """Units are serialized with their computed heights."""
        units = _get_family_units()
        assert units[0]["partners"] == ["P1", "P2"]
        assert units[0]["totalHeight"] == 162

    def test_get_relationships(self):
        """Relationships list parents, spouses, children and family notes."""
        result = _get_relationships("P3")
        assert result["parents"] == ["P1", "P2"]
        assert result["spouses"] == ["P4"]
        assert result["children"] == ["P5"]
        assert result["parent_in"][0]["note"] == "Married 1990"

    def test_get_relationships_hidden(self):
        """Hidden people have no relationships."""
        assert _get_relationships("P10") is None

    def test_get_statistics(self):
        """Statistics count visible, hidden and positioned people."""
        stats = _get_statistics()
        assert stats["visible_people"] == 9
        assert stats["hidden_people"] == 1
        assert stats["generations"] == 3
        assert stats["positioned_people"] == 9
        assert stats["connections"] == 3


class TestServer:
    """Tests for the MCP server object."""

    def test_server_name(self):
        """The server is registered under its display name."""
        assert mcp.name == "Family Tree Layout Server"

    @pytest.mark.parametrize("refresh", [False, True])
    def test_layout_cached(self, refresh):
        """The layout is cached unless a refresh is requested."""
        layout = get_current_layout()
        again = get_current_layout(refresh=refresh)
        assert (again is layout) is not refresh
