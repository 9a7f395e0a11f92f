"""Flood zone severity tiers and per-parcel resolution of overlaps."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple


class FloodZone(Enum):
    """Flood zone codes, declared from most to least severe."""

    VE = "VE"
    AE = "AE"
    X = "X"

    @property
    def severity(self) -> int:
        # 0 is the most severe tier
        return _SEVERITY_RANK[self]

    def is_more_severe_than(self, other: "FloodZone") -> bool:
        return self.severity < other.severity

    @classmethod
    def from_code(cls, code: str) -> Optional["FloodZone"]:
        """Look up a zone by its code, returning None for unknown codes."""
        try:
            return cls(code)
        except ValueError:
            return None


_SEVERITY_RANK = {zone: rank for rank, zone in enumerate(FloodZone)}

ZONE_CODES = tuple(zone.value for zone in FloodZone)


@dataclass(frozen=True)
class Overlap:
    parcel: str
    zone: FloodZone


@dataclass(frozen=True)
class Assignment:
    """The single zone governing a parcel's insurance requirement."""

    parcel: str
    zone: FloodZone

    def as_pair(self) -> Tuple[str, str]:
        return self.parcel, self.zone.value


def resolve_assignments(overlaps: Iterable[Overlap]) -> List[Assignment]:
    """Collapse overlaps into one assignment per parcel.

    Each parcel keeps the most severe zone among all the zones it overlaps.
    Parcels are returned in the order they are first seen in ``overlaps``;
    parcels that never appear get no assignment.

    Args:
        overlaps: Overlap pairs in detector emission order

    Returns:
        List of Assignment, one per distinct parcel name
    """
    best: Dict[str, FloodZone] = {}

    for overlap in overlaps:
        current = best.get(overlap.parcel)
        if current is None or overlap.zone.is_more_severe_than(current):
            best[overlap.parcel] = overlap.zone

    return [Assignment(parcel, zone) for parcel, zone in best.items()]
