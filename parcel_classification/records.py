"""
records.py

Reads the line-oriented flood zone / parcel text format:

  FLOODZONE <X|AE|VE> <x,y> <x,y> <x,y> <x,y>
  PARCEL <number> <x,y> <x,y> <x,y> <x,y>

Validation runs over the whole batch first and stops at the first bad
line. Records are only built from a batch that passed validation, so
building them cannot fail.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .severity import FloodZone

FLOODZONE_MARKER = "FLOODZONE"
PARCEL_MARKER = "PARCEL"
COORDINATES_PER_RECORD = 4
TOKENS_PER_RECORD = 2 + COORDINATES_PER_RECORD

COORDINATE_PATTERN = re.compile(r"\d+,\d+", re.ASCII)
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

LINE_BREAK = re.compile(r"\r?\n")

Coordinate = Tuple[int, int]


class ErrorKind(Enum):
    NO_DATA = "NO_DATA"
    FLOODZONE = "FLOODZONE"
    PARCEL = "PARCEL"
    UNKNOWN = "UNKNOWN"


ERROR_MESSAGES = {
    ErrorKind.NO_DATA: "File contains no valid data lines",
    ErrorKind.FLOODZONE: "Invalid floodzone data format",
    ErrorKind.PARCEL: "Invalid parcel data format",
    ErrorKind.UNKNOWN: "Invalid unknown data format",
}


@dataclass(frozen=True)
class ValidationError:
    kind: ErrorKind
    message: str
    line: Optional[str] = None
    line_number: Optional[int] = None

    def describe(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line_number}: {self.line!r})"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a whole batch.

    On success ``error`` is None and ``lines`` holds the token lists of
    every non-blank line, in input order.
    """

    error: Optional[ValidationError] = None
    lines: Tuple[Tuple[str, ...], ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ZoneRecord:
    zone: FloodZone
    coordinates: Tuple[Coordinate, ...]

    @property
    def name(self) -> str:
        return self.zone.value


@dataclass(frozen=True)
class ParcelRecord:
    name: str
    coordinates: Tuple[Coordinate, ...]


Record = Union[ZoneRecord, ParcelRecord]


@dataclass
class ParsedBatch:
    zones: List[ZoneRecord] = field(default_factory=list)
    parcels: List[ParcelRecord] = field(default_factory=list)


def split_lines(text: str) -> List[Tuple[int, str]]:
    """Split raw text into (line_number, line) pairs, dropping blank lines.

    Only LF ends a line, and a CR right before it is dropped, so other
    Unicode line separators stay inside the line and fail validation.
    Line numbers are 1-based and count blank lines too.
    """
    return [
        (number, line)
        for number, line in enumerate(LINE_BREAK.split(text), start=1)
        if line.strip()
    ]


def tokenize(line: str) -> Tuple[str, ...]:
    return tuple(line.split(" "))


def is_valid_coordinate(token: str) -> bool:
    return COORDINATE_PATTERN.fullmatch(token) is not None


def parse_parcel_number(token: str) -> Optional[Union[int, float]]:
    """Parse a parcel id token as a finite number, or return None."""
    if INTEGER_PATTERN.fullmatch(token):
        return int(token)
    if not NUMBER_PATTERN.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def parcel_name(token: str) -> str:
    """Render a validated parcel id token the way parcels are named."""
    value = parse_parcel_number(token)
    if value is None:
        raise ValueError(f"Not a parcel number: {token!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _has_valid_coordinates(tokens: Tuple[str, ...]) -> bool:
    coordinates = tokens[2:]
    return len(coordinates) == COORDINATES_PER_RECORD and all(
        is_valid_coordinate(token) for token in coordinates
    )


def is_valid_zone_line(tokens: Tuple[str, ...]) -> bool:
    return (
        len(tokens) == TOKENS_PER_RECORD
        and tokens[0] == FLOODZONE_MARKER
        and FloodZone.from_code(tokens[1]) is not None
        and _has_valid_coordinates(tokens)
    )


def is_valid_parcel_line(tokens: Tuple[str, ...]) -> bool:
    return (
        len(tokens) == TOKENS_PER_RECORD
        and tokens[0] == PARCEL_MARKER
        and parse_parcel_number(tokens[1]) is not None
        and _has_valid_coordinates(tokens)
    )


def _error(kind: ErrorKind, line: Optional[str] = None,
           line_number: Optional[int] = None) -> ValidationResult:
    return ValidationResult(
        error=ValidationError(kind, ERROR_MESSAGES[kind], line, line_number)
    )


def validate_text(text: str) -> ValidationResult:
    """Validate every non-blank line of ``text``, stopping at the first failure.

    Args:
        text: Raw input file contents

    Returns:
        ValidationResult holding either the first ValidationError or the
        tokenized lines of the accepted batch
    """
    lines = split_lines(text)
    if not lines:
        return _error(ErrorKind.NO_DATA)

    accepted = []
    for number, line in lines:
        tokens = tokenize(line)
        marker = tokens[0]

        if marker == FLOODZONE_MARKER:
            if not is_valid_zone_line(tokens):
                return _error(ErrorKind.FLOODZONE, line, number)
        elif marker == PARCEL_MARKER:
            if not is_valid_parcel_line(tokens):
                return _error(ErrorKind.PARCEL, line, number)
        else:
            return _error(ErrorKind.UNKNOWN, line, number)

        accepted.append(tokens)

    return ValidationResult(lines=tuple(accepted))


def parse_coordinate(token: str) -> Coordinate:
    x, y = token.split(",")
    return int(x), int(y)


def parse_record(tokens: Tuple[str, ...]) -> Record:
    marker, identifier, *coords = tokens
    coordinates = tuple(parse_coordinate(token) for token in coords)

    if marker == FLOODZONE_MARKER:
        return ZoneRecord(FloodZone(identifier), coordinates)
    return ParcelRecord(parcel_name(identifier), coordinates)


def parse_records(result: ValidationResult) -> ParsedBatch:
    """Build typed records from an accepted batch, keeping input order.

    Raises:
        ValueError: If ``result`` is a rejected batch
    """
    if not result.is_valid:
        raise ValueError(f"Cannot parse a rejected batch: {result.error.message}")

    batch = ParsedBatch()
    for tokens in result.lines:
        record = parse_record(tokens)
        if isinstance(record, ZoneRecord):
            batch.zones.append(record)
        else:
            batch.parcels.append(record)

    return batch
