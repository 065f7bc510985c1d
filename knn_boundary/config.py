"""
Configuration defaults for the KNN boundary visualization.

Values are module-level globals with getter/setter functions so the driver
script can override them from command line flags.
"""

PENGUINS_CSV_URL = 'https://raw.githubusercontent.com/allisonhorst/palmerpenguins/master/inst/extdata/penguins.csv'

# Dataset columns mapped onto (x, y, label)
X_COLUMN = 'bill_length_mm'
Y_COLUMN = 'bill_depth_mm'
LABEL_COLUMN = 'species'

# Interactive range for both k and the truncation count
K_MIN = 1
K_MAX = 100

# Hexagon circumradius in data units (mm). The original view used a 10 px
# radius on an ~740 px wide plot spanning ~48 mm of bill length.
DEFAULT_HEX_RADIUS = 0.65

# Padding added around the data min/max when building the grid extent
DEFAULT_EXTENT_MARGIN = 5.0

_hex_radius = DEFAULT_HEX_RADIUS
_extent_margin = DEFAULT_EXTENT_MARGIN


def set_hex_radius(value: float):
    """Set the global hexagon radius.

    Args:
        value: Positive circumradius in data units
    """
    global _hex_radius
    if value <= 0:
        raise ValueError(f"Hex radius must be positive, got {value}")
    _hex_radius = float(value)


def get_hex_radius() -> float:
    """Get the current global hexagon radius."""
    return _hex_radius


def set_extent_margin(value: float):
    """Set the padding added around the data when computing the grid extent."""
    global _extent_margin
    if value < 0:
        raise ValueError(f"Extent margin must be non-negative, got {value}")
    _extent_margin = float(value)


def get_extent_margin() -> float:
    return _extent_margin


def validate_k(value, clamp=False) -> int:
    """Validate an interactive k / truncation value.

    Args:
        value: Requested integer value
        clamp: If True, values outside [K_MIN, K_MAX] are clamped instead of rejected

    Returns:
        The validated integer
    """
    value = int(value)
    if K_MIN <= value <= K_MAX:
        return value
    if clamp:
        return max(K_MIN, min(value, K_MAX))
    raise ValueError(f"Value {value} outside the interactive range [{K_MIN}, {K_MAX}]")
