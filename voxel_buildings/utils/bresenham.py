"""
3D Bresenham line rasterization.

Produces every voxel a straight segment passes through, endpoints
inclusive, stepping one unit along the dominant axis at a time.
"""

from typing import Iterator, List, Sequence, Tuple


def bresenham_line(
    x1: int, y1: int, z1: int,
    x2: int, y2: int, z2: int
) -> List[Tuple[int, int, int]]:
    """
    Rasterize the segment (x1, y1, z1) -> (x2, y2, z2).

    Args:
        x1, y1, z1: Start voxel
        x2, y2, z2: End voxel

    Returns:
        Ordered list of (x, y, z) voxels from start to end (inclusive)
    """
    points = [(x1, y1, z1)]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    dz = abs(z2 - z1)

    xs = 1 if x2 > x1 else -1
    ys = 1 if y2 > y1 else -1
    zs = 1 if z2 > z1 else -1

    x, y, z = x1, y1, z1

    if dx >= dy and dx >= dz:
        # X is the driving axis
        p1 = 2 * dy - dx
        p2 = 2 * dz - dx
        while x != x2:
            x += xs
            if p1 >= 0:
                y += ys
                p1 -= 2 * dx
            if p2 >= 0:
                z += zs
                p2 -= 2 * dx
            p1 += 2 * dy
            p2 += 2 * dz
            points.append((x, y, z))

    elif dy >= dx and dy >= dz:
        # Y is the driving axis
        p1 = 2 * dx - dy
        p2 = 2 * dz - dy
        while y != y2:
            y += ys
            if p1 >= 0:
                x += xs
                p1 -= 2 * dy
            if p2 >= 0:
                z += zs
                p2 -= 2 * dy
            p1 += 2 * dx
            p2 += 2 * dz
            points.append((x, y, z))

    else:
        # Z is the driving axis
        p1 = 2 * dy - dz
        p2 = 2 * dx - dz
        while z != z2:
            z += zs
            if p1 >= 0:
                y += ys
                p1 -= 2 * dz
            if p2 >= 0:
                x += xs
                p2 -= 2 * dz
            p1 += 2 * dy
            p2 += 2 * dx
            points.append((x, y, z))

    return points


def trace_polyline(
    points: Sequence[Tuple[int, int]],
    y: int
) -> Iterator[Tuple[int, int, int]]:
    """
    Rasterize consecutive segments of a polyline at a fixed elevation.

    The polyline is not closed: the last point is not joined back to
    the first. Shared endpoints are yielded once per segment.

    Args:
        points: Ordered (x, z) columns
        y: Elevation of every segment

    Yields:
        (x, y, z) voxels segment by segment
    """
    for (x1, z1), (x2, z2) in zip(points, points[1:]):
        yield from bresenham_line(x1, y, z1, x2, y, z2)
