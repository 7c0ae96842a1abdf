"""
Block palette resolution for Voxel Buildings Generator.

Chooses the corner, wall, floor/roof and window blocks of a building
from its tags, falling back to random variations when no colour is
declared. Resolution is a pure function of the tags and the random
source, so an injected random.Random makes it deterministic.
"""

from typing import Dict, List, Optional, Sequence, Tuple
import random

from ..models.blocks import (
    Block,
    RGBTuple,
    BUILDING_CORNER_VARIATIONS,
    BUILDING_WALL_VARIATIONS,
    BUILDING_FLOOR_VARIATIONS,
    BUILDING_WALL_COLOR_MAP,
    BUILDING_FLOOR_COLOR_MAP,
    LIGHT_GRAY_CONCRETE,
    WHITE_STAINED_GLASS,
)
from ..models.building import BuildingPalette
from ..utils.colors import color_text_to_rgb_tuple, rgb_distance

# Building types that get a random floor/roof block instead of concrete
SINGLE_DWELLING_TYPES = {
    'yes', 'house', 'detached', 'static_caravan',
    'semidetached_house', 'bungalow', 'manor', 'villa',
}

DEFAULT_FLOOR_BLOCK = LIGHT_GRAY_CONCRETE
WINDOW_BLOCK = WHITE_STAINED_GLASS


def find_nearest_block_in_color_map(
    rgb: RGBTuple,
    color_map: Sequence[Tuple[RGBTuple, Block]]
) -> Optional[Block]:
    """
    Find the catalog block whose colour is closest to rgb.

    Linear scan; on equal distance the earlier catalog entry wins.

    Returns:
        Nearest block, or None for an empty catalog
    """
    best_block = None
    best_distance = None

    for entry_rgb, block in color_map:
        distance = rgb_distance(entry_rgb, rgb)
        if best_distance is None or distance < best_distance:
            best_distance = distance
            best_block = block

    return best_block


def _block_from_colour_tag(
    tags: Dict[str, str],
    key: str,
    color_map: Sequence[Tuple[RGBTuple, Block]]
) -> Optional[Block]:
    """Resolve a colour tag against a catalog (None if absent or unparsable)."""
    colour = tags.get(key)
    if colour is None:
        return None

    rgb = color_text_to_rgb_tuple(colour)
    if rgb is None:
        return None

    return find_nearest_block_in_color_map(rgb, color_map)


def is_single_dwelling(tags: Dict[str, str]) -> bool:
    """Check if building (or building:part) declares a house-like type."""
    building_type = tags.get('building')
    if building_type is None:
        building_type = tags.get('building:part')
    return building_type in SINGLE_DWELLING_TYPES


def resolve_palette(
    tags: Dict[str, str],
    rng: Optional[random.Random] = None,
    corner_variations: List[Block] = BUILDING_CORNER_VARIATIONS,
    wall_variations: List[Block] = BUILDING_WALL_VARIATIONS,
    floor_variations: List[Block] = BUILDING_FLOOR_VARIATIONS,
) -> BuildingPalette:
    """
    Choose the blocks for one building.

    Rules:
    - corner: random corner variation (tags are ignored)
    - wall: building:colour -> nearest wall catalog entry,
      else random wall variation
    - floor: roof:colour -> nearest floor catalog entry,
      else random floor variation for single dwellings,
      else light gray concrete
    - window: always white stained glass

    The three variation indices are drawn up front, in the order
    corner, wall, floor, whether or not they end up used.

    Args:
        tags: Tag mapping of the footprint
        rng: Random source (a fresh one when None)

    Returns:
        BuildingPalette
    """
    if rng is None:
        rng = random.Random()

    corner_index = rng.randrange(len(corner_variations))
    wall_index = rng.randrange(len(wall_variations))
    floor_index = rng.randrange(len(floor_variations))

    corner_block = corner_variations[corner_index]

    wall_block = _block_from_colour_tag(tags, 'building:colour', BUILDING_WALL_COLOR_MAP)
    if wall_block is None:
        wall_block = wall_variations[wall_index]

    floor_block = _block_from_colour_tag(tags, 'roof:colour', BUILDING_FLOOR_COLOR_MAP)
    if floor_block is None:
        if is_single_dwelling(tags):
            floor_block = floor_variations[floor_index]
        else:
            floor_block = DEFAULT_FLOOR_BLOCK

    return BuildingPalette(
        corner=corner_block,
        wall=wall_block,
        floor=floor_block,
        window=WINDOW_BLOCK,
    )
