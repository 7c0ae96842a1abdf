"""
Core geometry types for Voxel Buildings Generator.

Provides XZPoint and BBox, the integer grid types used throughout
the pipeline for footprints and terrain extents.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class XZPoint:
    """A voxel column in the horizontal plane (x grows east, z grows south)."""
    x: int
    z: int


@dataclass(slots=True)
class BBox:
    """Axis-aligned integer bounding box in the XZ plane (inclusive)."""
    min_x: int
    min_z: int
    max_x: int
    max_z: int

    def contains_point(self, p: XZPoint) -> bool:
        """Check if point is inside bbox (inclusive)."""
        return (
            self.min_x <= p.x <= self.max_x and
            self.min_z <= p.z <= self.max_z
        )

    @property
    def width(self) -> int:
        """Number of columns in X direction."""
        return self.max_x - self.min_x + 1

    @property
    def depth(self) -> int:
        """Number of columns in Z direction."""
        return self.max_z - self.min_z + 1

    @staticmethod
    def from_points(points: Iterable[XZPoint]) -> 'BBox':
        """Create bbox from XZ points."""
        points = list(points)
        if not points:
            raise ValueError("Cannot create BBox from empty point list")

        xs = [p.x for p in points]
        zs = [p.z for p in points]
        return BBox(min(xs), min(zs), max(xs), max(zs))
