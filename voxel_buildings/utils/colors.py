"""
Colour helpers for Voxel Buildings Generator.

Parses the free-text colour values found in OSM tags
(building:colour, roof:colour) and measures RGB distance.
"""

from typing import Optional, Tuple
import logging
import re

logger = logging.getLogger(__name__)

RGBTuple = Tuple[int, int, int]

_HEX_PATTERN = re.compile(r'[0-9a-f]{6}')

# Named colours commonly used in OSM colour tags
NAMED_COLORS = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'gray': (128, 128, 128),
    'grey': (128, 128, 128),
    'silver': (192, 192, 192),
    'lightgray': (211, 211, 211),
    'lightgrey': (211, 211, 211),
    'darkgray': (169, 169, 169),
    'darkgrey': (169, 169, 169),
    'red': (255, 0, 0),
    'maroon': (128, 0, 0),
    'darkred': (139, 0, 0),
    'brown': (165, 42, 42),
    'sienna': (160, 82, 45),
    'tan': (210, 180, 140),
    'beige': (245, 245, 220),
    'wheat': (245, 222, 179),
    'ivory': (255, 255, 240),
    'cream': (255, 253, 208),
    'orange': (255, 165, 0),
    'yellow': (255, 255, 0),
    'gold': (255, 215, 0),
    'olive': (128, 128, 0),
    'green': (0, 128, 0),
    'darkgreen': (0, 100, 0),
    'lime': (0, 255, 0),
    'teal': (0, 128, 128),
    'cyan': (0, 255, 255),
    'blue': (0, 0, 255),
    'navy': (0, 0, 128),
    'lightblue': (173, 216, 230),
    'purple': (128, 0, 128),
    'pink': (255, 192, 203),
    'salmon': (250, 128, 114),
}


def color_text_to_rgb_tuple(text: str) -> Optional[RGBTuple]:
    """
    Parse a colour tag value.

    Accepts '#rrggbb', '#rgb' (the '#' is optional) and the names in
    NAMED_COLORS, case-insensitive. Spaces, underscores and dashes in
    names are ignored ('light grey' == 'lightgrey').

    Args:
        text: Raw tag value

    Returns:
        (r, g, b) tuple, or None if the text is not a recognised colour
    """
    if not text:
        return None

    value = text.strip().lower()

    named = NAMED_COLORS.get(
        value.replace(' ', '').replace('_', '').replace('-', '')
    )
    if named is not None:
        return named

    hex_str = value[1:] if value.startswith('#') else value

    if len(hex_str) == 3:
        hex_str = ''.join(c * 2 for c in hex_str)

    if not _HEX_PATTERN.fullmatch(hex_str):
        logger.debug(f"Unrecognised colour value: {text!r}")
        return None

    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


def rgb_distance(a: RGBTuple, b: RGBTuple) -> int:
    """Squared Euclidean distance between two RGB colours."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db
