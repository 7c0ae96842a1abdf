"""
Building generator orchestrator for Voxel Buildings Generator.

Derives the parameters and palette of a footprint, dispatches on the
building kind, and runs the generic wall/floor synthesis for everything
that is not an open structure.

Generic synthesis runs in two passes:
1. Boundary pass: every edge is rasterized at the start elevation and
   each touched column gets a wall run (corner, window or wall block),
   a cobblestone cap and, in winter, a snow layer.
2. Interior pass: every interior column gets a floor, intermediate
   story ceilings with periodic lights, and a ceiling cap.

Both entry points return nothing; all output goes to the WorldEditor.
"""

from typing import Optional, Set, Tuple
import logging
import random

from ..models.blocks import COBBLESTONE, GLOWSTONE, SNOW_LAYER
from ..models.building import BuildingKind, BuildingParameters, HeightSource
from ..models.element import ProcessedWay, ProcessedRelation
from ..models.terrain import Ground
from ..models.world import WorldEditor
from ..processing.building_parameters import derive_parameters, parse_int_tag, scaled_height
from ..processing.palette import resolve_palette
from ..utils.bresenham import trace_polyline
from ..utils.floodfill import flood_fill_area
from .structures import generate_shelter, generate_bicycle_shed, generate_parking, generate_roof
from .bridge import generate_bridge
from ..config import (
    GenerationConfig,
    DEFAULT_CONFIG,
    BLOCKS_PER_LEVEL,
    DEFAULT_RELATION_LEVELS,
    GARAGE_HEIGHT,
    APARTMENTS_HEIGHT,
    HOSPITAL_HEIGHT,
    WINDOW_PERIOD,
    WINDOW_WIDTH,
    LIGHT_GRID,
    FIRST_CEILING_OFFSET,
)

logger = logging.getLogger(__name__)


def generate_buildings(
    editor: WorldEditor,
    way: ProcessedWay,
    ground: Ground,
    config: Optional[GenerationConfig] = None,
    relation_levels: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> None:
    """
    Synthesize one building footprint.

    Nothing is written when the ground cannot be resolved under the
    footprint or when it is tagged with a negative layer or level.

    Args:
        editor: World to write into
        way: Projected footprint with tags
        ground: Ground elevation oracle
        config: Generation config (scale, winter, fill timeout)
        relation_levels: Level count from an enclosing relation
        rng: Random source for the palette (a fresh one when None)
    """
    if config is None:
        config = DEFAULT_CONFIG

    params = derive_parameters(way, ground, config.scale, relation_levels)
    if params is None:
        return

    params.palette = resolve_palette(way.tags, rng)
    kind = BuildingKind.from_tags(way.tags)
    timeout = config.floodfill_timeout

    logger.debug(f"Way {way.id}: kind={kind.value}")

    if kind == BuildingKind.SHELTER:
        generate_shelter(editor, way, params, timeout)
        return
    elif kind == BuildingKind.BICYCLE_SHED:
        generate_bicycle_shed(editor, way, params, timeout)
        return
    elif kind == BuildingKind.PARKING:
        generate_parking(editor, way, params, timeout)
        return
    elif kind == BuildingKind.ROOF:
        generate_roof(editor, way, params, timeout)
        return
    elif kind == BuildingKind.BRIDGE:
        generate_bridge(editor, way, ground, timeout)
        return

    apply_kind_height(params, kind, config.scale)
    generate_generic_building(editor, way, params, config.winter, timeout)


def apply_kind_height(params: BuildingParameters, kind: BuildingKind, scale: float) -> None:
    """
    Apply the height overrides of garages, apartments and hospitals.

    Garages and plain sheds always get the garage height. Apartments and
    hospitals only replace a height that nothing declared.
    """
    if kind == BuildingKind.GARAGE:
        params.height = scaled_height(GARAGE_HEIGHT, scale)
        params.height_source = HeightSource.KIND_OVERRIDE
    elif kind == BuildingKind.APARTMENTS:
        if params.height_source == HeightSource.DEFAULT:
            params.height = scaled_height(APARTMENTS_HEIGHT, scale)
            params.height_source = HeightSource.KIND_OVERRIDE
    elif kind == BuildingKind.HOSPITAL:
        if params.height_source == HeightSource.DEFAULT:
            params.height = scaled_height(HOSPITAL_HEIGHT, scale)
            params.height_source = HeightSource.KIND_OVERRIDE


def is_window(x: int, z: int, h: int, start_level: int) -> bool:
    """
    Check if a wall voxel is glazed.

    Windows skip the first block above the floor and every story
    boundary (h divisible by 4), and repeat along the facade in runs
    of WINDOW_WIDTH every WINDOW_PERIOD columns.
    """
    return (
        h > start_level + 1 and
        h % BLOCKS_PER_LEVEL != 0 and
        (x + z) % WINDOW_PERIOD < WINDOW_WIDTH
    )


def is_light_column(x: int, z: int) -> bool:
    """Check if a column carries ceiling lights."""
    return x % LIGHT_GRID == 0 and z % LIGHT_GRID == 0


def generate_generic_building(
    editor: WorldEditor,
    way: ProcessedWay,
    params: BuildingParameters,
    winter: bool = False,
    floodfill_timeout: Optional[float] = None
) -> None:
    """
    Generate walls, windows, floors and ceilings of a regular building.

    Args:
        editor: World to write into
        way: Building footprint
        params: Derived parameters, palette included
        winter: Add snow layers on top
        floodfill_timeout: Time budget for the interior fill
    """
    palette = params.palette
    start = params.start_level
    top = start + params.height
    polygon = way.polygon_coords()
    node_columns = set(polygon)

    processed: Set[Tuple[int, int]] = set()

    # Boundary pass
    for bx, _, bz in trace_polyline(polygon, start):
        for h in range(start + 1, top + 1):
            if (bx, bz) in node_columns:
                editor.set_block(palette.corner, bx, h, bz)
            elif is_window(bx, bz, h, start):
                editor.set_block(palette.window, bx, h, bz)
            else:
                editor.set_block(palette.wall, bx, h, bz)

        editor.set_block(COBBLESTONE, bx, top + 1, bz)
        if winter:
            editor.set_block(SNOW_LAYER, bx, top + 2, bz)

        processed.add((bx, bz))

    if not processed:
        logger.debug(f"Way {way.id}: no boundary columns, skipping interior")
        return

    # Interior pass
    interior = flood_fill_area(polygon, floodfill_timeout)
    for x, z in interior:
        if (x, z) in processed:
            continue
        processed.add((x, z))

        editor.set_block(palette.floor, x, start, z)

        if params.height > BLOCKS_PER_LEVEL:
            for h in range(start + FIRST_CEILING_OFFSET, top, BLOCKS_PER_LEVEL):
                if is_light_column(x, z):
                    editor.set_block(GLOWSTONE, x, h, z)
                else:
                    editor.set_block(palette.floor, x, h, z)
        elif is_light_column(x, z):
            editor.set_block(GLOWSTONE, x, top, z)

        editor.set_block(palette.floor, x, top + 1, z)
        if winter:
            editor.set_block(SNOW_LAYER, x, top + 2, z)

    logger.debug(
        f"Way {way.id}: start={start}, height={params.height}, "
        f"{len(processed)} columns ({len(interior)} interior)"
    )


def generate_building_from_relation(
    editor: WorldEditor,
    relation: ProcessedRelation,
    ground: Ground,
    config: Optional[GenerationConfig] = None,
    rng: Optional[random.Random] = None
) -> None:
    """
    Synthesize a building relation.

    The relation's building:levels (default 2) is parsed once and passed
    to every outer member as its level count. Inner members are not
    subtracted.

    Args:
        editor: World to write into
        relation: Projected building relation
        ground: Ground elevation oracle
        config: Generation config
        rng: Random source shared by all members (fresh ones when None)
    """
    levels = parse_int_tag(relation.tags, 'building:levels')
    if levels is None:
        levels = DEFAULT_RELATION_LEVELS

    outer_ways = relation.outer_ways()
    logger.debug(
        f"Relation {relation.id}: {len(outer_ways)} outer members, levels={levels}"
    )

    for way in outer_ways:
        generate_buildings(editor, way, ground, config, relation_levels=levels, rng=rng)
