"""
Input modules for Voxel Buildings Generator.
"""

from .terrain_loader import load_terrain, get_terrain_stats, TerrainLoadError
from .osm_parser import (
    OSMNode,
    OSMWay,
    OSMRelation,
    ParseResult,
    parse_osm_file,
)

__all__ = [
    # Terrain
    'load_terrain',
    'get_terrain_stats',
    'TerrainLoadError',
    # OSM parsing
    'OSMNode',
    'OSMWay',
    'OSMRelation',
    'ParseResult',
    'parse_osm_file',
]
