"""Pairwise overlap detection between flood zone and parcel polygons."""

from typing import Callable, Dict, List, Sequence

from .intersection import rings_intersect
from .polygon_utils import ParcelPolygon, ZonePolygon
from .severity import Overlap

DEFAULT_ENGINE = "exact"


def shapely_intersects(zone: ZonePolygon, parcel: ParcelPolygon) -> bool:
    # Floats round above 2**53, so such rings go through the exact test
    if not (zone.is_float_exact and parcel.is_float_exact):
        return rings_intersect(zone.ring, parcel.ring)
    # intersects() is true for any shared point, boundary contact included
    return zone.shape.intersects(parcel.shape)


def exact_intersects(zone: ZonePolygon, parcel: ParcelPolygon) -> bool:
    return rings_intersect(zone.ring, parcel.ring)


ENGINES: Dict[str, Callable[[ZonePolygon, ParcelPolygon], bool]] = {
    "shapely": shapely_intersects,
    "exact": exact_intersects,
}


def find_overlaps(zones: Sequence[ZonePolygon], parcels: Sequence[ParcelPolygon],
                  engine: str = DEFAULT_ENGINE) -> List[Overlap]:
    """Test every zone against every parcel.

    Args:
        zones: Flood zone polygons
        parcels: Parcel polygons
        engine: Name of the intersection test, one of ENGINES

    Returns:
        One Overlap per intersecting (zone, parcel) pair, zones in the
        outer loop and parcels in the inner loop

    Raises:
        ValueError: If engine is not a known engine name
    """
    if engine not in ENGINES:
        raise ValueError(
            f"Unknown engine: {engine}. Must be one of {sorted(ENGINES)}"
        )
    intersects = ENGINES[engine]

    return [
        Overlap(parcel=parcel.name, zone=zone.zone)
        for zone in zones
        for parcel in parcels
        if intersects(zone, parcel)
    ]
