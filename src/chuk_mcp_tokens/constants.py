"""
Constants and enums for the token system.

No magic strings - use enums and lookup tables for constrained values.
"""

from enum import Enum
from typing import Final


class TokenType(str, Enum):
    """Well-known ``$type`` values found in token documents."""

    COLOR = "color"
    DIMENSION = "dimension"
    NUMBER = "number"
    STRING = "string"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    ELEVATION = "elevation"
    TYPOGRAPHY_GROUP = "typography-group"  # Synthetic, emitted by the introspector


class VariantAxis(str, Enum):
    """Canonical variant axis names."""

    COLOR = "color"
    SIZE = "size"
    STYLE = "style"
    STYLE_SECONDARY = "style-secondary"
    LAYOUT = "layout"
    STATES = "states"
    TYPES = "types"
    ORIENTATION = "orientation"
    FILL_WIDTH = "fill-width"


class PropertyCategory(str, Enum):
    """Categories assigned to property descriptors."""

    COLORS = "colors"
    SIZE = "size"
    ROOT = "root"


# Theme polarity used when no mode is given
DEFAULT_MODE: Final = "light"

# Prefix of every canonical variable name: --{namespace}-...
VARIABLE_NAMESPACE: Final = "ds"

# Fixed segment that introduces the mode in mode-dependent names
MODE_MARKER: Final = "themes"

# Document roots whose variables depend on the active mode
MODE_SCOPED_ROOTS: Final = frozenset({"ui-kit", "brand"})

# Where components live inside a document
COMPONENTS_PATH: Final = ("ui-kit", "components")

# Reference chains longer than this resolve to nothing
MAX_REFERENCE_DEPTH: Final = 10

# Keys starting with this prefix are metadata ($type, $value, $description...)
METADATA_PREFIX: Final = "$"

VARIANTS_KEY: Final = "variants"
PROPERTIES_KEY: Final = "properties"
COLORS_MARKER: Final = "colors"
SIZE_MARKERS: Final = frozenset({"size", "sizes"})
LAYER_PREFIX: Final = "layer-"

# Named category containers and the axis each one introduces
CATEGORY_AXES: Final[dict[str, VariantAxis]] = {
    "sizes": VariantAxis.SIZE,
    "styles": VariantAxis.STYLE,
    "layouts": VariantAxis.LAYOUT,
    "states": VariantAxis.STATES,
    "types": VariantAxis.TYPES,
    "orientation": VariantAxis.ORIENTATION,
    "fill-width": VariantAxis.FILL_WIDTH,
}

# Components whose unnamed primary axis is a visual style rather than a color
STYLE_PRIMARY_COMPONENTS: Final = frozenset({"avatar"})

# Containers that group typography attributes of one text element
TEXT_GROUP_NAMES: Final = frozenset(
    {
        "text",
        "label-text",
        "value-text",
        "placeholder-text",
        "header-text",
        "content-text",
        "optional-text",
        "title-text",
        "description-text",
        "helper-text",
    }
)
TEXT_GROUP_SUFFIX: Final = "-text"

TYPOGRAPHY_PROPERTIES: Final = frozenset(
    {
        "font-family",
        "font-size",
        "font-weight",
        "font-style",
        "letter-spacing",
        "line-height",
        "text-decoration",
        "text-transform",
    }
)

# Reference root aliases accepted in {dotted.path} references
REFERENCE_ROOT_ALIASES: Final[dict[str, str]] = {
    "token": "tokens",
    "tokens": "tokens",
    "theme": "brand",
    "brand": "brand",
    "uikit": "ui-kit",
    "ui-kit": "ui-kit",
}

# Supported token document file extensions
DOCUMENT_EXTENSIONS: Final = (".json", ".yaml", ".yml")


class ErrorMessages:
    """Standardized error messages."""

    DOCUMENT_NOT_FOUND = "Token document '{name}' not found."
    NO_DOCUMENT = "No token document loaded. Load one first."
    COMPONENT_NOT_FOUND = "Component '{component}' not found in document."
    VARIABLE_NOT_FOUND = "Variable '{name}' has no value."
    INVALID_MODE = "Invalid mode: '{mode}'. Expected lowercase letters and digits."
    EMPTY_PATH = "No valid path segments in {segments!r}."
    REJECTED_VALUE = "Variable '{name}' rejected value '{value}'."


class SuccessMessages:
    """Standardized success messages."""

    DOCUMENT_LOADED = "Loaded token document '{name}' ({mode})."
    MODE_SWITCHED = "Switched to mode '{mode}'."
    VARIABLE_SET = "Set '{name}' to '{value}'."
    VARIABLE_REMOVED = "Removed override for '{name}'."
    VARIABLES_RESET = "Cleared {count} overrides."
