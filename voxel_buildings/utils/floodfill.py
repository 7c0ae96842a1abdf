"""
Interior fill for building footprints.

Computes the voxel columns strictly inside a closed polygon using a
scanline pass. Boundary columns (vertices, and any column lying on an
edge) are never part of the result; the generators trace those
separately with the line rasterizer.

The fill is bounded by an optional time budget. When the budget runs
out the columns found so far are returned.
"""

from typing import List, Optional, Sequence, Tuple
import logging
import math
import time

from .polygon_utils import normalize_ring, is_degenerate

logger = logging.getLogger(__name__)

Column = Tuple[int, int]


def flood_fill_area(
    polygon_coords: Sequence[Column],
    timeout: Optional[float] = None
) -> List[Column]:
    """
    Collect the columns strictly enclosed by a polygon.

    The ring is closed implicitly (last vertex connects to the first).

    Args:
        polygon_coords: Polygon vertices as (x, z) tuples
        timeout: Time budget in seconds (None = unbounded)

    Returns:
        Interior columns in row-major order (z, then x). Empty for
        degenerate polygons; partial if the budget ran out.
    """
    ring = normalize_ring(polygon_coords)

    if is_degenerate(ring):
        return []

    deadline = time.monotonic() + timeout if timeout is not None else None

    min_z = min(p[1] for p in ring)
    max_z = max(p[1] for p in ring)
    n = len(ring)

    area: List[Column] = []

    # Rows on min_z / max_z can only touch the boundary
    for z in range(min_z + 1, max_z):
        if deadline is not None and time.monotonic() > deadline:
            logger.warning(
                f"Flood fill timed out after {timeout}s at row {z} "
                f"({len(area)} columns filled, rows {min_z}..{max_z})"
            )
            break

        crossings: List[float] = []
        blocked: List[Tuple[int, int]] = []

        for i in range(n):
            xa, za = ring[i]
            xb, zb = ring[(i + 1) % n]

            if za == z:
                # Vertices on this row are boundary
                blocked.append((xa, xa))

            if za == zb:
                if za == z:
                    blocked.append((min(xa, xb), max(xa, xb)))
                continue

            # Half-open rule so shared vertices count once
            if (za > z) != (zb > z):
                crossings.append(xa + (z - za) * (xb - xa) / (zb - za))

        crossings.sort()

        for k in range(0, len(crossings) - 1, 2):
            left = crossings[k]
            right = crossings[k + 1]

            # Strictly between the two crossings
            start_x = math.floor(left) + 1
            end_x = math.ceil(right) - 1

            for x in range(start_x, end_x + 1):
                if any(lo <= x <= hi for lo, hi in blocked):
                    continue
                area.append((x, z))

    return area
