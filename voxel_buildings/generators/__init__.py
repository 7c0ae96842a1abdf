"""
Voxel generators for Voxel Buildings Generator.

Contains the building orchestrator, the open structure generators
(shelter, bicycle shed, parking, roof), bridges and doors.
"""

from .building_generator import (
    generate_buildings,
    generate_building_from_relation,
    generate_generic_building,
    apply_kind_height,
)
from .structures import (
    generate_shelter,
    generate_bicycle_shed,
    generate_parking,
    generate_roof,
)
from .bridge import generate_bridge
from .doors import generate_doors

__all__ = [
    'generate_buildings',
    'generate_building_from_relation',
    'generate_generic_building',
    'apply_kind_height',
    'generate_shelter',
    'generate_bicycle_shed',
    'generate_parking',
    'generate_roof',
    'generate_bridge',
    'generate_doors',
]
