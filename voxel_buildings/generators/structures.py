"""
Specialized structure generators for Voxel Buildings Generator.

Open structures that do not use the generic wall/window envelope:
- Shelters (fence posts under a slab roof)
- Covered bicycle sheds (plank floor, posts, slab roof)
- Multi-storey parking (per-story posts, floors and railing outline)
- Freestanding roofs (slab roof on wall posts)

All of them sit on the base elevation of the footprint; building:min_level
does not apply.
"""

from typing import List, Optional, Tuple
import logging

from ..models.blocks import (
    Block,
    COBBLESTONE,
    COBBLESTONE_WALL,
    OAK_FENCE,
    OAK_PLANKS,
    SMOOTH_STONE,
    SMOOTH_STONE_SLAB,
    STONE_BRICKS,
    STONE_BRICK_SLAB,
)
from ..models.building import BuildingParameters, HeightSource
from ..models.element import ProcessedWay
from ..models.world import WorldEditor
from ..utils.bresenham import trace_polyline
from ..utils.floodfill import flood_fill_area
from ..config import (
    BLOCKS_PER_LEVEL,
    PARKING_MIN_HEIGHT,
    POST_HEIGHT,
    ROOF_OFFSET,
)

logger = logging.getLogger(__name__)


def _interior(way: ProcessedWay, timeout: Optional[float]) -> List[Tuple[int, int]]:
    """Interior columns of a footprint."""
    return flood_fill_area(way.polygon_coords(), timeout)


def _place_posts(
    editor: WorldEditor,
    way: ProcessedWay,
    base_y: int,
    post_block: Block,
    cap_block: Block
) -> None:
    """Place a POST_HEIGHT post under a cap block at every node."""
    for node in way.nodes:
        for dy in range(1, POST_HEIGHT + 1):
            editor.set_block(post_block, node.x, base_y + dy, node.z)
        editor.set_block(cap_block, node.x, base_y + POST_HEIGHT + 1, node.z)


def generate_shelter(
    editor: WorldEditor,
    way: ProcessedWay,
    params: BuildingParameters,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate a shelter: fence posts at the nodes and a slab roof.

    No walls or windows are placed.
    """
    roof_area = _interior(way, floodfill_timeout)
    roof_y = params.base_y + POST_HEIGHT + 1

    _place_posts(editor, way, params.base_y, OAK_FENCE, STONE_BRICK_SLAB)

    for x, z in roof_area:
        editor.set_block(STONE_BRICK_SLAB, x, roof_y, z)

    logger.debug(f"Shelter {way.id}: {len(way.nodes)} posts, {len(roof_area)} roof columns")


def generate_bicycle_shed(
    editor: WorldEditor,
    way: ProcessedWay,
    params: BuildingParameters,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate a covered bicycle shed.

    Plank floor over the interior at ground level, fence posts at the
    nodes and a smooth stone slab roof over the interior.
    """
    floor_area = _interior(way, floodfill_timeout)
    base_y = params.base_y
    roof_y = base_y + POST_HEIGHT + 1

    for x, z in floor_area:
        editor.set_block(OAK_PLANKS, x, base_y, z)

    _place_posts(editor, way, base_y, OAK_FENCE, SMOOTH_STONE_SLAB)

    for x, z in floor_area:
        editor.set_block(SMOOTH_STONE_SLAB, x, roof_y, z)

    logger.debug(f"Bicycle shed {way.id}: {len(floor_area)} floor columns")


def generate_parking(
    editor: WorldEditor,
    way: ProcessedWay,
    params: BuildingParameters,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate a multi-storey parking structure.

    Stories are BLOCKS_PER_LEVEL apart, from level 0 up to and including
    height // 4. The height is raised to PARKING_MIN_HEIGHT first.

    Pass 1, per story: stone brick posts at every node, floor over the
    interior (smooth stone on the ground story, cobblestone above).

    Pass 2, per story: the outline is traced with smooth stone at floor
    level (only replacing cobblestone or cobblestone walls), a slab
    railing two blocks up and a wall accent on even x in between.
    """
    if params.height < PARKING_MIN_HEIGHT:
        params.height = PARKING_MIN_HEIGHT
        params.height_source = HeightSource.KIND_OVERRIDE

    floor_area = _interior(way, floodfill_timeout)
    columns = way.polygon_coords()
    story_count = params.height // BLOCKS_PER_LEVEL + 1

    for level in range(story_count):
        floor_y = params.base_y + level * BLOCKS_PER_LEVEL

        for node in way.nodes:
            for y in range(floor_y + 1, floor_y + BLOCKS_PER_LEVEL + 1):
                editor.set_block(STONE_BRICKS, node.x, y, node.z)

        floor_block = SMOOTH_STONE if level == 0 else COBBLESTONE
        for x, z in floor_area:
            editor.set_block(floor_block, x, floor_y, z)

    for level in range(story_count):
        floor_y = params.base_y + level * BLOCKS_PER_LEVEL

        for bx, _, bz in trace_polyline(columns, floor_y):
            editor.set_block(
                SMOOTH_STONE, bx, floor_y, bz,
                override_whitelist=[COBBLESTONE, COBBLESTONE_WALL],
            )
            editor.set_block(STONE_BRICK_SLAB, bx, floor_y + 2, bz)
            if bx % 2 == 0:
                editor.set_block(COBBLESTONE_WALL, bx, floor_y + 1, bz)

    logger.debug(
        f"Parking {way.id}: height={params.height}, {story_count} stories, "
        f"{len(floor_area)} floor columns"
    )


def generate_roof(
    editor: WorldEditor,
    way: ProcessedWay,
    params: BuildingParameters,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate a freestanding roof.

    Slab roof ROOF_OFFSET above the ground, traced along the edges and
    filled over the interior, carried by cobblestone wall posts under
    every node.
    """
    base_y = params.base_y
    roof_y = base_y + ROOF_OFFSET
    columns = way.polygon_coords()

    for bx, _, bz in trace_polyline(columns, roof_y):
        editor.set_block(STONE_BRICK_SLAB, bx, roof_y, bz)

    for node in way.nodes:
        for y in range(base_y + 1, roof_y):
            editor.set_block(COBBLESTONE_WALL, node.x, y, node.z)

    roof_area = _interior(way, floodfill_timeout)
    for x, z in roof_area:
        editor.set_block(STONE_BRICK_SLAB, x, roof_y, z)

    logger.debug(f"Roof {way.id}: roof at y={roof_y}, {len(roof_area)} interior columns")
