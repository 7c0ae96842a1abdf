"""
Processing modules for Voxel Buildings Generator.

Contains parameter derivation, palette resolution and element routing.
"""

from .building_parameters import (
    derive_parameters,
    resolve_height,
    check_skip_reason,
    parse_min_level,
    parse_height_tag,
    parse_int_tag,
    scaled_height,
    levels_to_height,
)
from .palette import (
    resolve_palette,
    find_nearest_block_in_color_map,
    is_single_dwelling,
)
from .element_filter import (
    RouteReason,
    RoutedElements,
    route_elements,
    is_building_tags,
    is_building_relation,
    is_door_node,
)

__all__ = [
    'derive_parameters',
    'resolve_height',
    'check_skip_reason',
    'parse_min_level',
    'parse_height_tag',
    'parse_int_tag',
    'scaled_height',
    'levels_to_height',
    'resolve_palette',
    'find_nearest_block_in_color_map',
    'is_single_dwelling',
    'RouteReason',
    'RoutedElements',
    'route_elements',
    'is_building_tags',
    'is_building_relation',
    'is_door_node',
]
