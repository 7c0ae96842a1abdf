"""
Bounding box projection for Voxel Buildings Generator.

Maps WGS84 lat/lon inside a bounding box linearly onto integer block
columns. The extent of the box in metres is measured with the haversine
formula along its southern and western edges, so one block covers
roughly one metre at scale 1.0.

Axes follow the block world: x grows east, z grows south, and the
north-west corner of the box is column (0, 0).
"""

import math
from typing import Tuple


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in metres
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = (
        math.sin(dphi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return BBoxProjector.EARTH_RADIUS * c


class BBoxProjector:
    """
    Equirectangular projection of a lat/lon box onto block columns.

    Attributes:
        min_lat, min_lon, max_lat, max_lon: Geographic extent (degrees)
        scale: Blocks per metre
        width_blocks: Extent along x in blocks
        depth_blocks: Extent along z in blocks
    """

    # Mean Earth radius
    EARTH_RADIUS = 6371000.0  # meters

    def __init__(
        self,
        min_lat: float,
        min_lon: float,
        max_lat: float,
        max_lon: float,
        scale: float = 1.0
    ):
        """
        Initialize projector for a bounding box.

        Raises:
            ValueError: If the box is empty or scale is not positive
        """
        if max_lat <= min_lat or max_lon <= min_lon:
            raise ValueError(
                f"Invalid bounding box: ({min_lat}, {min_lon}) - ({max_lat}, {max_lon})"
            )
        if scale <= 0:
            raise ValueError("scale must be positive")

        self.min_lat = min_lat
        self.min_lon = min_lon
        self.max_lat = max_lat
        self.max_lon = max_lon
        self.scale = scale

        self.width_blocks = haversine_distance(min_lat, min_lon, min_lat, max_lon) * scale
        self.depth_blocks = haversine_distance(min_lat, min_lon, max_lat, min_lon) * scale

    def project(self, lat: float, lon: float) -> Tuple[int, int]:
        """
        Project lat/lon to a block column.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            (x, z) integer column
        """
        rel_x = (lon - self.min_lon) / (self.max_lon - self.min_lon)
        rel_z = 1.0 - (lat - self.min_lat) / (self.max_lat - self.min_lat)

        x = int(round(rel_x * self.width_blocks))
        z = int(round(rel_z * self.depth_blocks))
        return (x, z)

    def unproject(self, x: float, z: float) -> Tuple[float, float]:
        """
        Convert a block column back to lat/lon.

        Args:
            x: Column x
            z: Column z

        Returns:
            (lat, lon) tuple in degrees
        """
        rel_x = x / self.width_blocks if self.width_blocks else 0.0
        rel_z = z / self.depth_blocks if self.depth_blocks else 0.0

        lon = self.min_lon + rel_x * (self.max_lon - self.min_lon)
        lat = self.min_lat + (1.0 - rel_z) * (self.max_lat - self.min_lat)
        return (lat, lon)

    def __repr__(self) -> str:
        return (
            f"BBoxProjector(({self.min_lat}, {self.min_lon}) - "
            f"({self.max_lat}, {self.max_lon}), scale={self.scale})"
        )
