"""Shared fixtures for family tree layout tests."""

import os
from pathlib import Path

import pytest

# Set env vars BEFORE importing any family_layout modules
# Set explicit test values so .env doesn't override them (load_dotenv won't override existing)
FIXTURES = Path(__file__).parent / "fixtures"
_TEST_TREE = FIXTURES / "sample_tree.json"
os.environ["FAMILY_TREE_FILE"] = str(_TEST_TREE)
os.environ["FAMILY_TREE_HIDDEN"] = ""
os.environ["LAYOUT_TRACING_ENABLED"] = "false"

from family_layout import initialize  # noqa: E402

initialize()

from family_layout import state  # noqa: E402
from family_layout.models import FamilyUnit, LayoutConfig, Person  # noqa: E402
from family_layout.parsing import load_dataset  # noqa: E402


@pytest.fixture
def config():
    """Default layout distances (box 58x78, couple gap -14, generation gap 70)."""
    return LayoutConfig()


@pytest.fixture
def couple_with_child():
    """Root couple (A, B) with one single child C."""
    return [FamilyUnit(id="ab", partners=["A", "B"], child_units=[FamilyUnit(id="c", single="C")])]


@pytest.fixture
def couple_with_two_children():
    """Root couple (A, B) with two single children C and D."""
    return [
        FamilyUnit(
            id="ab",
            partners=["A", "B"],
            child_units=[FamilyUnit(id="c", single="C"), FamilyUnit(id="d", single="D")],
        )
    ]


@pytest.fixture
def people_abcd():
    """Visible people A-D."""
    return {pid: Person(id=pid, name=f"Person {pid}") for pid in "ABCD"}


@pytest.fixture
def sample_tree_path():
    """Dataset without authored units: the forest and edges are derived."""
    return _TEST_TREE


@pytest.fixture
def authored_tree_path():
    """Dataset with a hand-authored unit forest, edges and an auxiliary edge."""
    return FIXTURES / "authored_tree.json"


@pytest.fixture
def gedcom_path():
    """Small GEDCOM file: one couple with two children."""
    return FIXTURES / "sample.ged"


@pytest.fixture
def reload_default_dataset():
    """Restore the sample dataset after a test loads a different file."""
    yield
    state.TREE_FILE = _TEST_TREE.resolve()
    load_dataset()
