"""Display colors for detection labels."""

from types import MappingProxyType
from typing import Mapping, Tuple

Color = Tuple[int, int, int]

DEFAULT_LABEL_COLORS: Mapping[str, Color] = MappingProxyType(
    {
        "license_plate": (255, 0, 0),
        "id_card": (0, 0, 255),
        "screen": (0, 255, 0),
    }
)

FALLBACK_COLOR: Color = (255, 255, 0)


def color_for_label(
    label: str,
    table: Mapping[str, Color] = DEFAULT_LABEL_COLORS,
    fallback: Color = FALLBACK_COLOR,
) -> Color:
    """Look up the display color for a label.

    Args:
        label: Class label name.
        table: Label to RGB color mapping.
        fallback: Color for labels missing from the table.

    Returns:
        RGB color tuple.
    """
    return table.get(label, fallback)
