"""
Terrain grid loader for Voxel Buildings Generator.

Loads elevation grids in ESRI ASCII format (.asc) and converts them to
a Heightmap in block units:

    ncols         4
    nrows         3
    xllcorner     0.0      (optional)
    yllcorner     0.0      (optional)
    cellsize      1.0      (optional)
    NODATA_value  -9999    (optional)
    <nrows lines of ncols values, northernmost row first>

One grid cell maps to one block column, row 0 to z = 0, whatever the
cellsize says. The corner and cellsize keys are validated as header
lines but not used for placement; only NODATA_value affects the result.
Elevations are shifted so the lowest cell sits at the configured ground
level.
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from ..models.terrain import Heightmap
from ..config import DEFAULT_GROUND_LEVEL

logger = logging.getLogger(__name__)

REQUIRED_HEADER_KEYS = ('ncols', 'nrows')
OPTIONAL_HEADER_KEYS = ('xllcorner', 'yllcorner', 'xllcenter', 'yllcenter', 'cellsize', 'nodata_value')


class TerrainLoadError(Exception):
    """Raised when terrain loading fails."""
    pass


def load_terrain(
    filepath: str,
    ground_level: int = DEFAULT_GROUND_LEVEL,
    vertical_scale: float = 1.0
) -> Heightmap:
    """
    Load a terrain grid from an ESRI ASCII file.

    Elevation in blocks = ground_level + round((value - min) * vertical_scale).
    NODATA cells take the minimum elevation.

    Args:
        filepath: Path to .asc grid file
        ground_level: Block elevation of the lowest cell
        vertical_scale: Blocks per elevation unit

    Returns:
        Heightmap in block units

    Raises:
        FileNotFoundError: If file doesn't exist
        TerrainLoadError: If file format is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Terrain file not found: {filepath}")

    logger.info(f"Loading terrain from {filepath}")

    header: Dict[str, float] = {}
    rows: List[List[Optional[float]]] = []

    with open(filepath, 'r') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            parts = line.split()
            key = parts[0].lower()

            if not rows and (key in REQUIRED_HEADER_KEYS or key in OPTIONAL_HEADER_KEYS):
                if len(parts) != 2:
                    raise TerrainLoadError(f"Invalid header at line {line_num}: {line}")
                try:
                    header[key] = float(parts[1])
                except ValueError:
                    raise TerrainLoadError(f"Invalid header value at line {line_num}: {line}")
                continue

            try:
                rows.append([float(v) for v in parts])
            except ValueError:
                raise TerrainLoadError(f"Invalid elevation row at line {line_num}")

    for key in REQUIRED_HEADER_KEYS:
        if key not in header:
            raise TerrainLoadError(f"Missing '{key}' in terrain header: {filepath}")

    ncols = int(header['ncols'])
    nrows = int(header['nrows'])
    nodata = header.get('nodata_value')

    if ncols <= 0 or nrows <= 0:
        raise TerrainLoadError(f"Empty terrain grid ({ncols}x{nrows}): {filepath}")

    if len(rows) != nrows:
        raise TerrainLoadError(f"Expected {nrows} rows, found {len(rows)}: {filepath}")

    for i, row in enumerate(rows):
        if len(row) != ncols:
            raise TerrainLoadError(
                f"Row {i} has {len(row)} values, expected {ncols}: {filepath}"
            )

    if nodata is not None:
        rows = [[None if v == nodata else v for v in row] for row in rows]

    valid = [v for row in rows for v in row if v is not None]
    if not valid:
        raise TerrainLoadError(f"Terrain grid has no valid cells: {filepath}")

    z_min = min(valid)
    nodata_count = sum(1 for row in rows for v in row if v is None)

    heights = [
        [
            ground_level + int(round(((v if v is not None else z_min) - z_min) * vertical_scale))
            for v in row
        ]
        for row in rows
    ]

    heightmap = Heightmap(heights)

    logger.info(
        f"Loaded {ncols}x{nrows} terrain grid, "
        f"elevation range [{heightmap.z_min}, {heightmap.z_max}] blocks"
        + (f", {nodata_count} NODATA cells" if nodata_count else "")
    )

    return heightmap


def get_terrain_stats(heightmap: Heightmap) -> dict:
    """
    Get statistics about a heightmap.

    Args:
        heightmap: Heightmap to analyze

    Returns:
        Dictionary with terrain statistics
    """
    return {
        'width': heightmap.width,
        'depth': heightmap.depth,
        'elevation': {
            'min': heightmap.z_min,
            'max': heightmap.z_max,
            'range': heightmap.z_max - heightmap.z_min,
        },
    }
