"""
Configuration constants for Voxel Buildings Generator.

Contains all tunable parameters for building synthesis, including
story sizes, default heights, world limits and runtime settings.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# STORY AND HEIGHT DEFAULTS
# =============================================================================

# Voxel units per building story
BLOCKS_PER_LEVEL = 4

# Extra units added on top of the stories (ceiling + roof cap)
LEVEL_HEIGHT_PADDING = 2

# Minimum height of any building (voxel units)
MIN_BUILDING_HEIGHT = 3

# Default height when no tag says otherwise (before scaling)
DEFAULT_BUILDING_HEIGHT = 6.0

# Level count assumed for relations without building:levels
DEFAULT_RELATION_LEVELS = 2

# Height for garages and sheds (before scaling)
GARAGE_HEIGHT = 2.0

# Untouched-default replacements (before scaling)
APARTMENTS_HEIGHT = 15.0
HOSPITAL_HEIGHT = 23.0

# Multi-storey parking is never lower than this
PARKING_MIN_HEIGHT = 16

# =============================================================================
# STRUCTURE OFFSETS
# =============================================================================

# Shelter / covered bicycle shed: posts are 4 high, slab sits one above
POST_HEIGHT = 4

# Freestanding roof sits this far above the ground
ROOF_OFFSET = 5

# Bridge elevation: level tag * BRIDGE_LEVEL_STEP + BRIDGE_LEVEL_OFFSET
BRIDGE_LEVEL_STEP = 3
BRIDGE_LEVEL_OFFSET = 1

# =============================================================================
# FACADE PATTERN
# =============================================================================

# Windows where (x + z) % WINDOW_PERIOD < WINDOW_WIDTH
WINDOW_PERIOD = 6
WINDOW_WIDTH = 3

# Light fixtures on a LIGHT_GRID x LIGHT_GRID lattice
LIGHT_GRID = 6

# Story boundary offset for the first intermediate ceiling
FIRST_CEILING_OFFSET = 6

# =============================================================================
# WORLD LIMITS
# =============================================================================

# Vertical range accepted by the world editor
WORLD_MIN_Y = -64
WORLD_MAX_Y = 319

# Ground elevation used when no terrain is loaded
DEFAULT_GROUND_LEVEL = -62

# =============================================================================
# FLOOD FILL
# =============================================================================

# Default time budget for a single interior fill (seconds, None = no limit)
FLOODFILL_TIMEOUT = 30.0

# =============================================================================
# REPORT SETTINGS
# =============================================================================

# Number of most used blocks to include in the report
REPORT_TOP_BLOCKS = 15


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class GenerationConfig:
    """
    Runtime configuration for building synthesis and the pipeline.

    This class holds all configurable parameters that can be
    adjusted per-run via CLI arguments or programmatically.
    """

    # Inputs / outputs
    osm_path: str = ""
    terrain_path: Optional[str] = None
    output_dir: str = "./output"

    # Synthesis
    scale: float = 1.0
    winter: bool = False
    floodfill_timeout: Optional[float] = FLOODFILL_TIMEOUT

    # Ground
    ground_level: int = DEFAULT_GROUND_LEVEL
    terrain_vertical_scale: float = 1.0

    # World limits
    min_y: int = WORLD_MIN_Y
    max_y: int = WORLD_MAX_Y

    # Optional seed for reproducible palettes (None = fresh randomness per building)
    seed: Optional[int] = None

    # Debug/report
    verbose: bool = False
    report_top_n: int = REPORT_TOP_BLOCKS

    def __post_init__(self):
        """Validate configuration values."""
        if self.scale <= 0:
            raise ValueError("scale must be positive")

        if self.floodfill_timeout is not None and self.floodfill_timeout <= 0:
            raise ValueError("floodfill_timeout must be positive or None")

        if self.terrain_vertical_scale <= 0:
            raise ValueError("terrain_vertical_scale must be positive")

        if self.min_y >= self.max_y:
            raise ValueError(
                f"min_y ({self.min_y}) must be below max_y ({self.max_y})"
            )


# Default configuration instance
DEFAULT_CONFIG = GenerationConfig()
