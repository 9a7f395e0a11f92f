"""Shared utilities for building closed zone and parcel polygons."""

from dataclasses import dataclass
from functools import cached_property
from typing import List, Sequence, Tuple, Union

from shapely.geometry import Polygon

from .records import Coordinate, ParcelRecord, ZoneRecord
from .severity import FloodZone

# Shapely needs at least 4 coordinates to build a closed ring
MIN_RING_COORDS = 4
# Every integer up to this magnitude converts to a float64 exactly
FLOAT_EXACT_LIMIT = 2 ** 53


def is_ring_closed(coordinates: Sequence[Coordinate]) -> bool:
    """Check whether the first and last coordinate are equal.

    An empty sequence counts as closed.
    """
    if not coordinates:
        return True
    return tuple(coordinates[0]) == tuple(coordinates[-1])


def close_ring(coordinates: Sequence[Coordinate]) -> List[Coordinate]:
    """Return the coordinates as a closed ring.

    The first coordinate is appended when the ring is open; a ring that is
    already closed (or empty) comes back unchanged.

    Args:
        coordinates: Ordered ring coordinates

    Returns:
        New list of (x, y) tuples
    """
    ring = [tuple(coord) for coord in coordinates]

    if not is_ring_closed(ring):
        ring.append(ring[0])

    return ring


def fits_float(ring: Sequence[Coordinate]) -> bool:
    """Check if every coordinate converts to a float without rounding."""
    return all(
        abs(x) <= FLOAT_EXACT_LIMIT and abs(y) <= FLOAT_EXACT_LIMIT for x, y in ring
    )


def to_shape(ring: Sequence[Coordinate]) -> Polygon:
    """Build a shapely Polygon from a closed ring.

    Raises:
        ValueError: If a coordinate cannot be held exactly as a float
    """
    if not fits_float(ring):
        raise ValueError(f"Coordinates beyond {FLOAT_EXACT_LIMIT} need exact geometry")
    if len(ring) < MIN_RING_COORDS:
        return Polygon()
    return Polygon(ring)


class _LazyShape:
    """Shapely geometry built on first use, only by the shapely engine."""

    @cached_property
    def is_float_exact(self) -> bool:
        return fits_float(self.ring)

    @cached_property
    def shape(self) -> Polygon:
        return to_shape(self.ring)


@dataclass(frozen=True)
class ZonePolygon(_LazyShape):
    zone: FloodZone
    ring: Tuple[Coordinate, ...]

    kind = "zone"

    @property
    def name(self) -> str:
        return self.zone.value


@dataclass(frozen=True)
class ParcelPolygon(_LazyShape):
    name: str
    ring: Tuple[Coordinate, ...]

    kind = "parcel"


NamedPolygon = Union[ZonePolygon, ParcelPolygon]


def build_polygon(record: Union[ZoneRecord, ParcelRecord]) -> NamedPolygon:
    """Build a closed, named polygon from a validated record.

    Args:
        record: ZoneRecord or ParcelRecord

    Returns:
        ZonePolygon for zone records, ParcelPolygon for parcel records
    """
    ring = tuple(close_ring(record.coordinates))

    if isinstance(record, ZoneRecord):
        return ZonePolygon(zone=record.zone, ring=ring)
    return ParcelPolygon(name=record.name, ring=ring)


def build_polygons(records: Sequence[Union[ZoneRecord, ParcelRecord]]) -> List[NamedPolygon]:
    return [build_polygon(record) for record in records]
