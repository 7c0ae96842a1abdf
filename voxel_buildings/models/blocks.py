"""
Block catalog for Voxel Buildings Generator.

Defines the Block type, the block constants used by the generators,
the random variation lists and the colour catalogs that tag colours
are matched against.
"""

from dataclasses import dataclass
from typing import List, Tuple

RGBTuple = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class Block:
    """A block kind, identified by its block id."""
    name: str

    def __str__(self) -> str:
        return self.name


# =============================================================================
# BLOCK CONSTANTS
# =============================================================================

BLACKSTONE = Block("blackstone")
BLACK_CONCRETE = Block("black_concrete")
BLUE_TERRACOTTA = Block("blue_terracotta")
BRICK = Block("bricks")
BROWN_CONCRETE = Block("brown_concrete")
BROWN_TERRACOTTA = Block("brown_terracotta")
CHISELED_STONE_BRICKS = Block("chiseled_stone_bricks")
COBBLESTONE = Block("cobblestone")
COBBLESTONE_WALL = Block("cobblestone_wall")
CRACKED_STONE_BRICKS = Block("cracked_stone_bricks")
CYAN_TERRACOTTA = Block("cyan_terracotta")
DARK_OAK_DOOR = Block("dark_oak_door")
DARK_OAK_PLANKS = Block("dark_oak_planks")
DEEPSLATE_BRICKS = Block("deepslate_bricks")
DEEPSLATE_TILES = Block("deepslate_tiles")
DIORITE = Block("diorite")
END_STONE_BRICKS = Block("end_stone_bricks")
GLOWSTONE = Block("glowstone")
GRANITE = Block("granite")
GRAY_CONCRETE = Block("gray_concrete")
GRAY_TERRACOTTA = Block("gray_terracotta")
GREEN_TERRACOTTA = Block("green_terracotta")
LIGHT_BLUE_TERRACOTTA = Block("light_blue_terracotta")
LIGHT_GRAY_CONCRETE = Block("light_gray_concrete")
LIGHT_GRAY_TERRACOTTA = Block("light_gray_terracotta")
MOSSY_COBBLESTONE = Block("mossy_cobblestone")
MUD_BRICKS = Block("mud_bricks")
NETHER_BRICK = Block("nether_bricks")
OAK_FENCE = Block("oak_fence")
OAK_PLANKS = Block("oak_planks")
ORANGE_TERRACOTTA = Block("orange_terracotta")
POLISHED_ANDESITE = Block("polished_andesite")
POLISHED_BLACKSTONE = Block("polished_blackstone")
POLISHED_DEEPSLATE = Block("polished_deepslate")
POLISHED_GRANITE = Block("polished_granite")
PURPUR_BLOCK = Block("purpur_block")
QUARTZ_BLOCK = Block("quartz_block")
RED_NETHER_BRICK = Block("red_nether_bricks")
RED_TERRACOTTA = Block("red_terracotta")
SANDSTONE = Block("sandstone")
SMOOTH_SANDSTONE = Block("smooth_sandstone")
SMOOTH_STONE = Block("smooth_stone")
SMOOTH_STONE_SLAB = Block("smooth_stone_slab")
SNOW_LAYER = Block("snow")
SPRUCE_PLANKS = Block("spruce_planks")
STONE = Block("stone")
STONE_BRICKS = Block("stone_bricks")
STONE_BRICK_SLAB = Block("stone_brick_slab")
TERRACOTTA = Block("terracotta")
WHITE_CONCRETE = Block("white_concrete")
WHITE_STAINED_GLASS = Block("white_stained_glass")
WHITE_TERRACOTTA = Block("white_terracotta")
YELLOW_TERRACOTTA = Block("yellow_terracotta")


# =============================================================================
# RANDOM VARIATIONS
# =============================================================================

BUILDING_CORNER_VARIATIONS: List[Block] = [
    STONE_BRICKS,
    COBBLESTONE,
    BRICK,
    MOSSY_COBBLESTONE,
    SANDSTONE,
    RED_NETHER_BRICK,
    BLACKSTONE,
    SMOOTH_STONE,
    CHISELED_STONE_BRICKS,
    POLISHED_DEEPSLATE,
]

BUILDING_WALL_VARIATIONS: List[Block] = [
    WHITE_TERRACOTTA,
    GRAY_TERRACOTTA,
    BRICK,
    SMOOTH_SANDSTONE,
    RED_TERRACOTTA,
    POLISHED_ANDESITE,
    STONE_BRICKS,
    LIGHT_GRAY_TERRACOTTA,
    MUD_BRICKS,
    QUARTZ_BLOCK,
]

BUILDING_FLOOR_VARIATIONS: List[Block] = [
    OAK_PLANKS,
    SPRUCE_PLANKS,
    DARK_OAK_PLANKS,
    POLISHED_GRANITE,
    STONE_BRICKS,
    SMOOTH_STONE,
    POLISHED_BLACKSTONE,
    DEEPSLATE_TILES,
]


# =============================================================================
# COLOUR CATALOGS
# =============================================================================

# Ordered: the first entry wins on equal distance
BUILDING_WALL_COLOR_MAP: List[Tuple[RGBTuple, Block]] = [
    ((233, 107, 57), BRICK),
    ((18, 12, 13), CRACKED_STONE_BRICKS),
    ((76, 127, 153), CYAN_TERRACOTTA),
    ((0, 0, 0), DEEPSLATE_BRICKS),
    ((186, 195, 142), END_STONE_BRICKS),
    ((57, 41, 35), GRAY_TERRACOTTA),
    ((112, 108, 138), LIGHT_BLUE_TERRACOTTA),
    ((122, 92, 66), MUD_BRICKS),
    ((24, 13, 14), NETHER_BRICK),
    ((159, 82, 36), ORANGE_TERRACOTTA),
    ((128, 128, 128), POLISHED_ANDESITE),
    ((174, 173, 174), DIORITE),
    ((141, 101, 142), PURPUR_BLOCK),
    ((142, 60, 46), RED_TERRACOTTA),
    ((153, 83, 28), GRANITE),
    ((224, 216, 175), SMOOTH_SANDSTONE),
    ((188, 182, 179), SMOOTH_STONE),
    ((35, 86, 85), POLISHED_BLACKSTONE),
    ((255, 255, 255), WHITE_CONCRETE),
    ((209, 177, 161), WHITE_TERRACOTTA),
    ((191, 147, 42), YELLOW_TERRACOTTA),
]

BUILDING_FLOOR_COLOR_MAP: List[Tuple[RGBTuple, Block]] = [
    ((181, 101, 59), ORANGE_TERRACOTTA),
    ((22, 15, 16), BLACK_CONCRETE),
    ((104, 51, 74), BROWN_TERRACOTTA),
    ((82, 55, 36), BROWN_CONCRETE),
    ((74, 59, 91), BLUE_TERRACOTTA),
    ((76, 83, 42), GREEN_TERRACOTTA),
    ((54, 57, 61), GRAY_CONCRETE),
    ((125, 125, 115), LIGHT_GRAY_CONCRETE),
    ((143, 61, 47), RED_TERRACOTTA),
    ((152, 94, 67), TERRACOTTA),
    ((207, 213, 214), WHITE_CONCRETE),
]
