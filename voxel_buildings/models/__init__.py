"""
Data models for Voxel Buildings Generator.
"""

from .geometry import XZPoint, BBox
from .element import (
    MemberRole,
    ProcessedNode,
    ProcessedWay,
    ProcessedMember,
    ProcessedRelation,
)
from .blocks import Block
from .building import (
    BuildingKind,
    HeightSource,
    SkipReason,
    BuildingPalette,
    BuildingParameters,
)
from .terrain import Heightmap, Ground
from .world import WorldEditor, PlacedBlock, WorldStats

__all__ = [
    'XZPoint', 'BBox',
    'MemberRole', 'ProcessedNode', 'ProcessedWay', 'ProcessedMember', 'ProcessedRelation',
    'Block',
    'BuildingKind', 'HeightSource', 'SkipReason', 'BuildingPalette', 'BuildingParameters',
    'Heightmap', 'Ground',
    'WorldEditor', 'PlacedBlock', 'WorldStats',
]
