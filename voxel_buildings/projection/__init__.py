"""
Projection module for Voxel Buildings Generator.

Provides a pluggable projection interface and the bounding box
projector that maps geographic (lat/lon) coordinates to block columns.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from .bbox_projector import BBoxProjector, haversine_distance


class IProjector(ABC):
    """
    Abstract interface for coordinate projection.

    Implementations convert between WGS84 lat/lon and integer
    block columns.
    """

    @abstractmethod
    def project(self, lat: float, lon: float) -> Tuple[int, int]:
        """
        Project geographic coordinates to a block column.

        Args:
            lat: Latitude in degrees (WGS84)
            lon: Longitude in degrees (WGS84)

        Returns:
            (x, z) tuple of block coordinates
        """
        pass

    @abstractmethod
    def unproject(self, x: float, z: float) -> Tuple[float, float]:
        """
        Convert block coordinates back to geographic.

        Args:
            x: Block X coordinate
            z: Block Z coordinate

        Returns:
            (lat, lon) tuple in degrees (WGS84)
        """
        pass


IProjector.register(BBoxProjector)


def create_projector(
    bbox: Tuple[float, float, float, float],
    scale: float = 1.0
) -> IProjector:
    """
    Factory function to create the default projector.

    Args:
        bbox: (min_lat, min_lon, max_lat, max_lon) in degrees
        scale: Blocks per metre

    Returns:
        IProjector implementation
    """
    min_lat, min_lon, max_lat, max_lon = bbox
    return BBoxProjector(min_lat, min_lon, max_lat, max_lon, scale=scale)


__all__ = [
    'IProjector',
    'BBoxProjector',
    'haversine_distance',
    'create_projector',
]
