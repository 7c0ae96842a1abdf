"""
Polygon utilities for Voxel Buildings Generator.

Rings here are plain lists of integer (x, z) tuples, the form the
fill routine consumes.
"""

from typing import List, Sequence, Tuple

Column = Tuple[int, int]


def normalize_ring(ring: Sequence[Column]) -> List[Column]:
    """
    Drop repeated consecutive vertices and the closing vertex.

    Args:
        ring: Polygon vertices (closed or open)

    Returns:
        Open ring without consecutive duplicates
    """
    result: List[Column] = []
    for point in ring:
        point = (int(point[0]), int(point[1]))
        if not result or result[-1] != point:
            result.append(point)

    # Remove closing point
    if len(result) > 1 and result[0] == result[-1]:
        result.pop()

    return result


def polygon_signed_area(ring: Sequence[Column]) -> float:
    """
    Compute signed area using shoelace formula.

    Args:
        ring: List of polygon vertices

    Returns:
        Signed area (sign depends on winding)
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i][0] * ring[j][1]
        area -= ring[j][0] * ring[i][1]

    return area / 2.0


def polygon_area(ring: Sequence[Column]) -> float:
    """Compute unsigned area of polygon."""
    return abs(polygon_signed_area(ring))


def is_degenerate(ring: Sequence[Column]) -> bool:
    """
    Check if a ring encloses no area.

    True for fewer than 3 distinct vertices or all-collinear vertices.
    """
    if len(set(ring)) < 3:
        return True
    return polygon_area(ring) == 0.0
