"""
Bridge generator for Voxel Buildings Generator.

Bridges follow the terrain instead of sitting on a single base
elevation: every node and every interior column computes its own
deck elevation from the ground under it, raised by the level tag.
"""

from typing import Dict, Optional
import logging

from ..models.blocks import STONE, STONE_BRICKS
from ..models.element import ProcessedWay
from ..models.geometry import XZPoint
from ..models.terrain import Ground
from ..models.world import WorldEditor
from ..processing.building_parameters import parse_int_tag
from ..utils.bresenham import bresenham_line
from ..utils.floodfill import flood_fill_area
from ..config import BRIDGE_LEVEL_STEP, BRIDGE_LEVEL_OFFSET

logger = logging.getLogger(__name__)

FLOOR_BLOCK = STONE
RAILING_BLOCK = STONE_BRICKS


def bridge_level_offset(tags: Dict[str, str]) -> int:
    """
    Elevation offset declared by the level tag.

    Returns:
        level * 3 + 1 when level is an integer, otherwise 0
    """
    level = parse_int_tag(tags, 'level')
    if level is None:
        return 0
    return level * BRIDGE_LEVEL_STEP + BRIDGE_LEVEL_OFFSET


def bridge_elevation(ground: Ground, point: XZPoint, offset: int) -> int:
    """Deck elevation over one column."""
    return ground.level(point) + offset


def generate_bridge(
    editor: WorldEditor,
    way: ProcessedWay,
    ground: Ground,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate a bridge deck with railings.

    Each boundary segment is rasterized at the elevation of its end
    node and gets a two block railing. Interior columns get a floor
    block at their own terrain-following elevation.

    Args:
        editor: World to write into
        way: Bridge footprint
        ground: Ground elevation oracle
        floodfill_timeout: Time budget for the interior fill
    """
    offset = bridge_level_offset(way.tags)

    previous = None
    for node in way.nodes:
        deck_y = bridge_elevation(ground, node.xz(), offset)

        if previous is not None:
            for bx, by, bz in bresenham_line(previous.x, deck_y, previous.z, node.x, deck_y, node.z):
                editor.set_block(RAILING_BLOCK, bx, by + 1, bz)
                editor.set_block(RAILING_BLOCK, bx, by, bz)

        previous = node

    deck_area = flood_fill_area(way.polygon_coords(), floodfill_timeout)
    for x, z in deck_area:
        deck_y = bridge_elevation(ground, XZPoint(x, z), offset)
        editor.set_block(FLOOR_BLOCK, x, deck_y, z)

    logger.debug(f"Bridge {way.id}: offset={offset}, {len(deck_area)} deck columns")
