"""
intersection.py

Exact ring-ring intersection on integer coordinates.

Two closed rings intersect when they share at least one point: a crossing
or touching pair of edges (shared vertices and collinear overlapping edges
included), or one ring lying wholly inside the other. All arithmetic is on
Python ints, so results do not depend on floating point rounding.
"""

from typing import Sequence, Tuple

from .records import Coordinate

Bounds = Tuple[int, int, int, int]


def orientation(p: Coordinate, q: Coordinate, r: Coordinate) -> int:
    """Turn direction of p -> q -> r.

    Returns:
        1: counter-clockwise
        -1: clockwise
        0: collinear
    """
    cross = (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])
    if cross > 0:
        return 1
    if cross < 0:
        return -1
    return 0


def on_segment(p: Coordinate, q: Coordinate, r: Coordinate) -> bool:
    """Check if q lies within the bounding box of segment p-r.

    Only meaningful when p, q and r are already known to be collinear.
    """
    return (
        min(p[0], r[0]) <= q[0] <= max(p[0], r[0])
        and min(p[1], r[1]) <= q[1] <= max(p[1], r[1])
    )


def segments_intersect(p1: Coordinate, q1: Coordinate,
                       p2: Coordinate, q2: Coordinate) -> bool:
    """Check if closed segments p1-q1 and p2-q2 share at least one point.

    Touching endpoints and collinear overlaps count. Zero-length segments
    are treated as points.
    """
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and on_segment(p1, p2, q1):
        return True
    if o2 == 0 and on_segment(p1, q2, q1):
        return True
    if o3 == 0 and on_segment(p2, p1, q2):
        return True
    if o4 == 0 and on_segment(p2, q1, q2):
        return True

    return False


def edges(ring: Sequence[Coordinate]):
    """Yield consecutive (start, end) pairs of a closed ring."""
    for i in range(len(ring) - 1):
        yield ring[i], ring[i + 1]


def ring_bounds(ring: Sequence[Coordinate]) -> Bounds:
    xs = [x for x, _ in ring]
    ys = [y for _, y in ring]
    return min(xs), min(ys), max(xs), max(ys)


def bounds_overlap(a: Bounds, b: Bounds) -> bool:
    return a[0] <= b[2] and b[0] <= a[2] and a[1] <= b[3] and b[1] <= a[3]


def point_on_boundary(point: Coordinate, ring: Sequence[Coordinate]) -> bool:
    for start, end in edges(ring):
        if orientation(start, end, point) == 0 and on_segment(start, point, end):
            return True
    return False


def point_in_ring(point: Coordinate, ring: Sequence[Coordinate]) -> bool:
    """Check if a point lies inside or on the boundary of a closed ring.

    Interior is decided with the even-odd rule by casting a ray towards +x.

    Args:
        point: (x, y) coordinates to test
        ring: Closed ring (first coordinate equal to the last)

    Returns:
        True if the point is inside the ring or on one of its edges
    """
    if len(ring) < 2:
        return bool(ring) and tuple(ring[0]) == tuple(point)

    if point_on_boundary(point, ring):
        return True

    px, py = point
    inside = False
    for (xi, yi), (xj, yj) in edges(ring):
        if (yi > py) == (yj > py):
            continue
        cross = (xj - xi) * (py - yi) - (px - xi) * (yj - yi)
        # Crossing lies to the right of the point when cross has the sign of (yj - yi)
        if (cross > 0) == (yj > yi):
            inside = not inside

    return inside


def rings_intersect(a: Sequence[Coordinate], b: Sequence[Coordinate]) -> bool:
    """Check if two closed rings share any point, boundary or interior.

    Args:
        a: First closed ring
        b: Second closed ring

    Returns:
        True if the rings touch, overlap or one contains the other
    """
    if not a or not b:
        return False

    if not bounds_overlap(ring_bounds(a), ring_bounds(b)):
        return False

    if len(a) == 1 or len(b) == 1:
        point, ring = (a[0], b) if len(a) == 1 else (b[0], a)
        return point_in_ring(point, ring)

    for p1, q1 in edges(a):
        for p2, q2 in edges(b):
            if segments_intersect(p1, q1, p2, q2):
                return True

    # No boundary contact left: either one ring is inside the other or they are apart
    return point_in_ring(a[0], b) or point_in_ring(b[0], a)
