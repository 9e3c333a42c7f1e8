# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every payload that comes back from
# transport.opendata.ch.  They carry no behavior beyond decoding themselves
# from the raw JSON dict.
#
# THE OPTIONAL-FIELD PROBLEM:
#   The upstream API omits or nulls fields inconsistently: a stationboard
#   stop may have no platform, a checkpoint may have no prognosis, a section
#   may carry a journey OR a walk.  So every field here is Optional and every
#   from_dict() reads with .get() — a missing key never raises, it just
#   becomes None.
#
# IMMUTABILITY:
#   All records are frozen.  A record belongs to the one response it was
#   decoded from and is never shared or mutated afterwards.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


# -----------------------------------------------------------------------------
# Coordinate / Location — a station, point of interest or address
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Coordinate:
    """An x/y pair plus the coordinate-system tag (usually "WGS84")."""

    type: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Coordinate"]:
        if not isinstance(data, dict):
            return None
        return cls(
            type=_optional_str(data.get("type")),
            x=_optional_float(data.get("x")),
            y=_optional_float(data.get("y")),
        )


@dataclass(frozen=True)
class Location:
    """A place returned by /locations, or embedded in a checkpoint.

    Search results always carry at least a name or an id, but each field is
    independently optional.
    """

    id: Optional[str] = None
    type: Optional[str] = None           # "station", "poi", "address"
    name: Optional[str] = None
    score: Optional[float] = None
    coordinate: Optional[Coordinate] = None
    distance: Optional[float] = None     # meters, only for coordinate searches

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Location"]:
        if not isinstance(data, dict):
            return None
        return cls(
            id=_optional_str(data.get("id")),
            type=_optional_str(data.get("type")),
            name=_optional_str(data.get("name")),
            score=_optional_float(data.get("score")),
            coordinate=Coordinate.from_dict(data.get("coordinate")),
            distance=_optional_float(data.get("distance")),
        )


# -----------------------------------------------------------------------------
# Prognosis / Checkpoint — a scheduled stop event with optional live data
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Prognosis:
    """Live overlay for a checkpoint.  None everywhere means "no live data"."""

    platform: Optional[str] = None
    arrival: Optional[str] = None
    departure: Optional[str] = None
    capacity1st: Optional[int] = None
    capacity2nd: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Prognosis"]:
        if not isinstance(data, dict):
            return None
        return cls(
            platform=_optional_str(data.get("platform")),
            arrival=_optional_str(data.get("arrival")),
            departure=_optional_str(data.get("departure")),
            capacity1st=_optional_int(data.get("capacity1st")),
            capacity2nd=_optional_int(data.get("capacity2nd")),
        )


@dataclass(frozen=True)
class Checkpoint:
    """A visit to one station.

    Origin checkpoints are read through `departure`, destination checkpoints
    through `arrival`.  Timestamps stay as the upstream strings, e.g.
    "2025-01-15T14:02:00+0100"; the *_timestamp fields are epoch seconds.
    """

    station: Optional[Location] = None
    arrival: Optional[str] = None
    arrival_timestamp: Optional[int] = None
    departure: Optional[str] = None
    departure_timestamp: Optional[int] = None
    platform: Optional[str] = None
    prognosis: Optional[Prognosis] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Checkpoint":
        data = _as_dict(data)
        return cls(
            station=Location.from_dict(data.get("station") or data.get("location")),
            arrival=_optional_str(data.get("arrival")),
            arrival_timestamp=_optional_int(data.get("arrivalTimestamp")),
            departure=_optional_str(data.get("departure")),
            departure_timestamp=_optional_int(data.get("departureTimestamp")),
            platform=_optional_str(data.get("platform")),
            prognosis=Prognosis.from_dict(data.get("prognosis")),
        )


# -----------------------------------------------------------------------------
# Journey / Walk / Section — one leg of a connection
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Journey:
    """A ride on one vehicle: "IC 1", "S 3", "T 11"..."""

    name: Optional[str] = None
    category: Optional[str] = None       # "IC", "S", "T", "B"...
    category_code: Optional[int] = None
    number: Optional[str] = None
    operator: Optional[str] = None
    to: Optional[str] = None             # destination label shown on the vehicle
    pass_list: list[Checkpoint] = field(default_factory=list)
    capacity1st: Optional[int] = None
    capacity2nd: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Journey"]:
        if not isinstance(data, dict):
            return None
        return cls(
            name=_optional_str(data.get("name")),
            category=_optional_str(data.get("category")),
            category_code=_optional_int(data.get("categoryCode")),
            number=_optional_str(data.get("number")),
            operator=_optional_str(data.get("operator")),
            to=_optional_str(data.get("to")),
            pass_list=[Checkpoint.from_dict(cp) for cp in _as_list(data.get("passList"))],
            capacity1st=_optional_int(data.get("capacity1st")),
            capacity2nd=_optional_int(data.get("capacity2nd")),
        )


@dataclass(frozen=True)
class Walk:
    duration: Optional[int] = None       # seconds

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Walk"]:
        if not isinstance(data, dict):
            return None
        return cls(duration=_optional_int(data.get("duration")))


@dataclass(frozen=True)
class Section:
    """One segment of a connection: exactly one of journey / walk is set."""

    journey: Optional[Journey] = None
    walk: Optional[Walk] = None
    departure: Checkpoint = field(default_factory=Checkpoint)
    arrival: Checkpoint = field(default_factory=Checkpoint)

    @classmethod
    def from_dict(cls, data: Any) -> "Section":
        data = _as_dict(data)
        return cls(
            journey=Journey.from_dict(data.get("journey")),
            walk=Walk.from_dict(data.get("walk")),
            departure=Checkpoint.from_dict(data.get("departure")),
            arrival=Checkpoint.from_dict(data.get("arrival")),
        )


# -----------------------------------------------------------------------------
# Connection — a complete itinerary from A to B
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Connection:
    from_: Checkpoint = field(default_factory=Checkpoint)   # "from" is a keyword
    to: Checkpoint = field(default_factory=Checkpoint)
    duration: Optional[str] = None       # upstream-formatted, e.g. "00d00:56:00"
    transfers: int = 0
    sections: list[Section] = field(default_factory=list)
    products: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Connection":
        data = _as_dict(data)
        transfers = _optional_int(data.get("transfers"))
        return cls(
            from_=Checkpoint.from_dict(data.get("from")),
            to=Checkpoint.from_dict(data.get("to")),
            duration=_optional_str(data.get("duration")),
            transfers=max(transfers or 0, 0),
            sections=[Section.from_dict(s) for s in _as_list(data.get("sections"))],
            products=[str(p) for p in _as_list(data.get("products")) if p is not None],
        )


# -----------------------------------------------------------------------------
# StationBoardEntry — one row of a departure/arrival board
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class StationBoardEntry:
    stop: Checkpoint = field(default_factory=Checkpoint)
    name: Optional[str] = None
    category: Optional[str] = None
    category_code: Optional[int] = None
    number: Optional[str] = None
    operator: Optional[str] = None
    to: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "StationBoardEntry":
        data = _as_dict(data)
        return cls(
            stop=Checkpoint.from_dict(data.get("stop")),
            name=_optional_str(data.get("name")),
            category=_optional_str(data.get("category")),
            category_code=_optional_int(data.get("categoryCode")),
            number=_optional_str(data.get("number")),
            operator=_optional_str(data.get("operator")),
            to=_optional_str(data.get("to")),
        )


# -----------------------------------------------------------------------------
# Container responses — one per endpoint
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LocationsResponse:
    stations: list[Location] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "LocationsResponse":
        data = _as_dict(data)
        stations = (Location.from_dict(s) for s in _as_list(data.get("stations")))
        return cls(stations=[s for s in stations if s is not None])


@dataclass(frozen=True)
class ConnectionsResponse:
    connections: list[Connection] = field(default_factory=list)
    from_: Optional[Location] = None     # resolved origin, echoed back
    to: Optional[Location] = None        # resolved destination, echoed back

    @classmethod
    def from_dict(cls, data: Any) -> "ConnectionsResponse":
        data = _as_dict(data)
        return cls(
            connections=[Connection.from_dict(c) for c in _as_list(data.get("connections"))],
            from_=Location.from_dict(data.get("from")),
            to=Location.from_dict(data.get("to")),
        )


@dataclass(frozen=True)
class StationBoardResponse:
    station: Optional[Location] = None
    stationboard: list[StationBoardEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "StationBoardResponse":
        data = _as_dict(data)
        return cls(
            station=Location.from_dict(data.get("station")),
            stationboard=[StationBoardEntry.from_dict(e) for e in _as_list(data.get("stationboard"))],
        )


# -----------------------------------------------------------------------------
# ToolResult — what every handler hands back to the MCP layer
# -----------------------------------------------------------------------------
# Transport-agnostic: one text block plus an explicit error flag.  This
# flag/message pair is the only error channel a tool caller ever sees.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=message, is_error=True)
