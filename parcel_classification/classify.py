#!/usr/bin/env python3
"""
classify.py

Classifies land parcels against flood zones and reports, per parcel, the
most severe zone that should govern its insurance.

Usage:
  python -m parcel_classification.classify --file sample-data/parcel-1.txt
  parcel-classification -f sample-data/parcel-2.txt --engine exact
"""

import argparse
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from . import __version__
from .files import read_input_file
from .overlaps import DEFAULT_ENGINE, ENGINES, find_overlaps
from .polygon_utils import ParcelPolygon, ZonePolygon, build_polygons
from .records import ParsedBatch, ValidationError, parse_records, validate_text
from .severity import Assignment, Overlap, resolve_assignments


@dataclass
class Classification:
    """Result of running the pipeline over one input text.

    Exactly one of ``error`` and ``batch`` is set.
    """

    error: Optional[ValidationError] = None
    batch: Optional[ParsedBatch] = None
    zones: List[ZonePolygon] = field(default_factory=list)
    parcels: List[ParcelPolygon] = field(default_factory=list)
    overlaps: List[Overlap] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


def classify_text(text: str, engine: str = DEFAULT_ENGINE) -> Classification:
    """Validate, parse and classify a whole input batch.

    Nothing is built when any line fails validation.

    Args:
        text: Raw input file contents
        engine: Intersection engine name (see overlaps.ENGINES)

    Returns:
        Classification with either the validation error or the assignments
    """
    result = validate_text(text)
    if not result.is_valid:
        return Classification(error=result.error)

    batch = parse_records(result)
    zones = build_polygons(batch.zones)
    parcels = build_polygons(batch.parcels)
    overlaps = find_overlaps(zones, parcels, engine=engine)

    return Classification(
        batch=batch,
        zones=zones,
        parcels=parcels,
        overlaps=overlaps,
        assignments=resolve_assignments(overlaps),
    )


def format_assignment(assignment: Assignment) -> str:
    parcel, zone = assignment.as_pair()
    return f"Parcel {parcel} should be insured against a {zone} zone"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Classify land parcels against flood zones."
    )
    parser.add_argument("-f", "--file", required=True,
                        help="Path to the .txt input file")
    parser.add_argument("--engine", choices=sorted(ENGINES), default=DEFAULT_ENGINE,
                        help=f"Intersection engine (default: {DEFAULT_ENGINE})")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only print results and errors")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    def info(message):
        if not args.quiet:
            print(f"[INFO] {message}")

    try:
        text = read_input_file(args.file)
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    info(f"TXT file detected: {args.file}")
    info("File data read successfully")

    classification = classify_text(text, engine=args.engine)

    if not classification.ok:
        print(f"[ERROR] Data format validation failed - {classification.error.describe()}",
              file=sys.stderr)
        return 1

    info("Data format validation passed - all data is in correct format")
    info(f"Processing complete. Found {len(classification.zones)} floodzones "
         f"and {len(classification.parcels)} parcels.")

    if not classification.assignments:
        info("No parcels intersect any flood zone.")

    for assignment in classification.assignments:
        print(format_assignment(assignment))

    return 0


if __name__ == "__main__":
    sys.exit(main())
