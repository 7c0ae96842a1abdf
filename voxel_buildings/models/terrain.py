"""
Terrain data model for Voxel Buildings Generator.

Provides the Heightmap grid and the Ground oracle that answers
"how high is the surface here" for single columns and for whole
footprints.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .geometry import XZPoint, BBox
from ..config import DEFAULT_GROUND_LEVEL


@dataclass
class Heightmap:
    """
    Regular grid of surface elevations in block units.

    Row index is z, column index is x, both relative to the origin.

    Attributes:
        heights: Elevation rows (heights[z][x])
        origin_x: World x of column 0
        origin_z: World z of row 0
    """
    heights: List[List[int]]
    origin_x: int = 0
    origin_z: int = 0
    _bbox: Optional[BBox] = field(default=None, repr=False)

    def __post_init__(self):
        """Validate grid shape."""
        if not self.heights or not self.heights[0]:
            raise ValueError("Heightmap must have at least one cell")

        width = len(self.heights[0])
        for row in self.heights:
            if len(row) != width:
                raise ValueError("Heightmap rows must all have the same length")

    @property
    def width(self) -> int:
        """Number of columns (x extent)."""
        return len(self.heights[0])

    @property
    def depth(self) -> int:
        """Number of rows (z extent)."""
        return len(self.heights)

    @property
    def bbox(self) -> BBox:
        """World-space extent of the grid."""
        if self._bbox is None:
            self._bbox = BBox(
                self.origin_x,
                self.origin_z,
                self.origin_x + self.width - 1,
                self.origin_z + self.depth - 1,
            )
        return self._bbox

    def height_at(self, x: int, z: int) -> int:
        """
        Elevation at a world column.

        Columns outside the grid are clamped to the nearest edge cell.
        """
        col = min(max(x - self.origin_x, 0), self.width - 1)
        row = min(max(z - self.origin_z, 0), self.depth - 1)
        return self.heights[row][col]

    @property
    def z_min(self) -> int:
        """Lowest elevation in the grid."""
        return min(min(row) for row in self.heights)

    @property
    def z_max(self) -> int:
        """Highest elevation in the grid."""
        return max(max(row) for row in self.heights)


class Ground:
    """
    Ground elevation oracle.

    Without a heightmap the surface is flat at ground_level.
    """

    def __init__(
        self,
        ground_level: int = DEFAULT_GROUND_LEVEL,
        heightmap: Optional[Heightmap] = None
    ):
        """
        Initialize ground.

        Args:
            ground_level: Surface elevation of flat ground
            heightmap: Optional terrain grid (overrides ground_level)
        """
        self.ground_level = ground_level
        self.heightmap = heightmap

    @property
    def elevation_enabled(self) -> bool:
        """True if terrain elevation is available."""
        return self.heightmap is not None

    def level(self, point: XZPoint) -> int:
        """Surface elevation at a column."""
        if self.heightmap is None:
            return self.ground_level
        return self.heightmap.height_at(point.x, point.z)

    def min_level(self, points: Iterable[XZPoint]) -> Optional[int]:
        """
        Lowest surface elevation over a set of columns.

        Returns:
            Minimum elevation, or None if no columns were given
            (the footprint cannot be placed)
        """
        levels = [self.level(p) for p in points]
        if not levels:
            return None
        return min(levels)
