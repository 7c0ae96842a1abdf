"""
Building data model for Voxel Buildings Generator.

Provides the BuildingParameters record derived once per footprint and
the enums that classify building kinds, height sources and skip reasons.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .blocks import Block
from ..config import BLOCKS_PER_LEVEL


class BuildingKind(Enum):
    """
    Synthesis branch selected from a footprint's tags.

    SHELTER, BICYCLE_SHED, PARKING, ROOF and BRIDGE produce their own
    structures; GARAGE, APARTMENTS and HOSPITAL only adjust the height
    before the generic branch; GENERIC is everything else.
    """
    SHELTER = "shelter"
    BICYCLE_SHED = "bicycle_shed"
    GARAGE = "garage"
    PARKING = "parking"
    ROOF = "roof"
    APARTMENTS = "apartments"
    HOSPITAL = "hospital"
    BRIDGE = "bridge"
    GENERIC = "generic"

    @classmethod
    def from_tags(cls, tags: Dict[str, str]) -> 'BuildingKind':
        """
        Resolve the synthesis branch from amenity/building/parking tags.

        Tests are applied in a fixed order; the first match wins.

        Args:
            tags: Tag mapping of the footprint

        Returns:
            Appropriate BuildingKind enum value
        """
        if tags.get('amenity') == 'shelter':
            return cls.SHELTER

        building_type = tags.get('building')

        if building_type == 'shed':
            if 'bicycle_parking' in tags and tags.get('covered') == 'yes':
                return cls.BICYCLE_SHED
            return cls.GARAGE
        elif building_type == 'garage':
            return cls.GARAGE
        elif building_type == 'parking' or tags.get('parking') == 'multi-storey':
            return cls.PARKING
        elif building_type == 'roof':
            return cls.ROOF
        elif building_type == 'apartments':
            return cls.APARTMENTS
        elif building_type == 'hospital':
            return cls.HOSPITAL
        elif building_type == 'bridge':
            return cls.BRIDGE
        else:
            return cls.GENERIC


class HeightSource(Enum):
    """Source of a building's final height."""
    DEFAULT = "default"
    LEVELS = "building_levels_tag"
    HEIGHT_TAG = "height_tag"
    RELATION = "relation_levels"
    KIND_OVERRIDE = "kind_override"


class SkipReason(Enum):
    """
    Reason why a footprint produced no voxels.

    Skips are silent outcomes, not errors: they are logged at debug
    level and never raised.
    """
    NO_GROUND = "no_ground_elevation"
    NEGATIVE_LAYER = "negative_layer"
    NEGATIVE_LEVEL = "negative_level"


@dataclass(frozen=True)
class BuildingPalette:
    """Blocks chosen for one building."""
    corner: Block
    wall: Block
    floor: Block
    window: Block


@dataclass
class BuildingParameters:
    """
    Numeric parameters derived for one footprint.

    Attributes:
        base_y: Lowest ground elevation under the footprint
        min_level: Declared building:min_level (0 when absent)
        height: Wall height in voxel units (always >= 3)
        height_source: Which input decided the height
        palette: Blocks chosen for this building (None until resolved)

    Created fresh per footprint and discarded after synthesis.
    """
    base_y: int
    min_level: int = 0
    height: int = 6
    height_source: HeightSource = HeightSource.DEFAULT
    palette: Optional[BuildingPalette] = None

    @property
    def start_level(self) -> int:
        """Elevation of the ground floor (base + 4 per min_level)."""
        return self.base_y + self.min_level * BLOCKS_PER_LEVEL
