"""Constants for family tree layout and connection routing."""

# Default layout distances, all in the same unit (pixels for the web renderer)
PERSON_WIDTH = 58
PERSON_HEIGHT = 78
COUPLE_GAP = -14  # Negative = partner boxes overlap
SIBLING_GAP = 6
FAMILY_GAP = 12
GENERATION_GAP = 70
PADDING = 12
STUB_LENGTH = 15  # Horizontal extension from the parent anchor

# Environment variable -> LayoutConfig field
LAYOUT_ENV_VARS = {
    "LAYOUT_PERSON_WIDTH": "person_width",
    "LAYOUT_PERSON_HEIGHT": "person_height",
    "LAYOUT_COUPLE_GAP": "couple_gap",
    "LAYOUT_SIBLING_GAP": "sibling_gap",
    "LAYOUT_FAMILY_GAP": "family_gap",
    "LAYOUT_GENERATION_GAP": "generation_gap",
    "LAYOUT_PADDING": "padding",
    "LAYOUT_STUB_LENGTH": "stub_length",
}

# Connection kinds and styles
KIND_PARENT_CHILD = "parent-child"
KIND_AUXILIARY = "auxiliary"

STYLE_NORMAL = "normal"
STYLE_DASHED = "dashed"
STYLE_AUXILIARY = "auxiliary"

EDGE_STYLES = {STYLE_NORMAL, STYLE_DASHED}

# Display names
NAME_TITLES = {"Aunt", "Uncle"}
SHORT_NAME_LENGTH = 8

# Supported dataset file suffixes
JSON_SUFFIXES = {".json"}
GEDCOM_SUFFIXES = {".ged", ".gedcom"}
