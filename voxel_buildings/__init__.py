"""
Voxel Buildings Generator

A standalone Python pipeline that turns OSM building footprints into
voxel structures placed into a block world.

Can be used as:
- CLI tool: python -m voxel_buildings.main
- Library: generate_buildings() / generate_building_from_relation()
  against any WorldEditor and Ground
"""

__version__ = "0.3.0"
__author__ = "Voxel Buildings Team"
