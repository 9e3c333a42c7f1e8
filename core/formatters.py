# =============================================================================
# core/formatters.py  —  Text Rendering for Tool Results
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns decoded models into deterministic, human-readable text that an LLM
#   can read at a glance.  Every function here is pure: same input, same
#   string, no I/O.
#
# NULL-HANDLING POLICY (defined once, here):
#   "Missing" means null, absent OR empty string; an empty name or platform
#   is treated exactly like an absent one.
#   - missing time           → "?"
#   - missing location name  → "Unknown"
#   - missing checkpoint station name → "?"
#   - missing destination    → "?" on boards, "" in sections
#   - missing optional lines/fields (platform, type, distance...) → omitted
#
# LAYOUT:
#   Entity formatters take a 1-based display index and return one block.
#   Locations and connections are joined with a blank line between blocks;
#   station-board rows are one line each, joined with a single newline.
# =============================================================================

import math
import re
from typing import Optional

from core.models import (
    Checkpoint,
    Connection,
    ConnectionsResponse,
    Location,
    LocationsResponse,
    Section,
    StationBoardEntry,
    StationBoardResponse,
)

_CLOCK_RE = re.compile(r"T(\d{2}:\d{2})")


def _number(value: float) -> str:
    """Render 120.0 as "120" and 47.378177 as "47.378177"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def format_time(datetime: Optional[str]) -> str:
    """Extract "HH:MM" from an ISO-like timestamp.

    "2025-01-15T14:02:00+0100" → "14:02".  None/empty gives "?", and anything
    that doesn't match is returned unchanged.
    """
    if not datetime:
        return "?"
    match = _CLOCK_RE.search(datetime)
    return match.group(1) if match else datetime


def _expected_time(checkpoint: Checkpoint) -> Optional[str]:
    prognosis = checkpoint.prognosis
    if prognosis is None:
        return None
    live = prognosis.departure or prognosis.arrival
    return format_time(live) if live else None


def format_location(location: Location, index: int) -> str:
    lines = []
    header = f"{index}. {location.name or 'Unknown'}"
    if location.id:
        header += f" (ID: {location.id})"
    lines.append(header)

    coordinate = location.coordinate
    if coordinate is not None and coordinate.x is not None and coordinate.y is not None:
        lines.append(f"   Coordinates: {_number(coordinate.x)}, {_number(coordinate.y)}")
    if location.type:
        lines.append(f"   Type: {location.type}")
    if location.distance is not None:
        lines.append(f"   Distance: {_number(location.distance)}m")
    return "\n".join(lines)


def format_checkpoint(checkpoint: Checkpoint, label: str) -> str:
    """One-line summary of a stop, e.g. "Depart: 14:02 Zürich HB (Platform 3)".

    Departure is preferred over arrival, both for the scheduled time and for
    the live "[expected: ...]" suffix.
    """
    time = format_time(checkpoint.departure or checkpoint.arrival)
    station = checkpoint.station.name if checkpoint.station and checkpoint.station.name else "?"
    text = f"{label}: {time} {station}"
    if checkpoint.platform:
        text += f" (Platform {checkpoint.platform})"
    expected = _expected_time(checkpoint)
    if expected:
        text += f" [expected: {expected}]"
    return text


def format_section(section: Section) -> str:
    if section.walk is not None:
        duration = section.walk.duration
        if duration:
            return f"   Walk ({math.ceil(duration / 60)} min)"
        return "   Walk"

    journey = section.journey
    if journey is None:
        return "   (unknown section)"
    name = (journey.name or "").strip()
    return f"   {name} → {journey.to or ''}"


def format_connection(connection: Connection, index: int) -> str:
    departure = format_time(connection.from_.departure)
    arrival = format_time(connection.to.arrival)
    duration = connection.duration or "?"

    lines = [
        f"{index}. Depart: {departure} → Arrive: {arrival} "
        f"({duration}, {_plural(connection.transfers, 'transfer')})"
    ]
    if connection.from_.platform:
        lines.append(f"   Departure platform: {connection.from_.platform}")
    lines.extend(format_section(section) for section in connection.sections)
    return "\n".join(lines)


def format_station_board_entry(entry: StationBoardEntry, index: int) -> str:
    stop = entry.stop
    time = format_time(stop.departure or stop.arrival)
    line = f"{entry.category or ''} {entry.number or ''}".strip()
    platform = f"Platform {stop.platform}" if stop.platform else ""
    expected = _expected_time(stop)

    parts = [
        f"{index}. {time}",
        line,
        f"→ {entry.to or '?'}",
        platform,
        f"[exp: {expected}]" if expected else "",
    ]
    return "  ".join(part for part in parts if part)


# -----------------------------------------------------------------------------
# Whole-result renderers (one per tool)
# -----------------------------------------------------------------------------
def render_locations(response: LocationsResponse) -> str:
    stations = response.stations
    if not stations:
        return "No locations found."
    body = "\n\n".join(format_location(loc, i) for i, loc in enumerate(stations, start=1))
    return f"Found {_plural(len(stations), 'location')}:\n\n{body}"


def render_connections(response: ConnectionsResponse, from_input: str, to_input: str) -> str:
    if not response.connections:
        return "No connections found."
    from_name = response.from_.name if response.from_ and response.from_.name else from_input
    to_name = response.to.name if response.to and response.to.name else to_input
    body = "\n\n".join(
        format_connection(conn, i) for i, conn in enumerate(response.connections, start=1)
    )
    return f"Connections from {from_name} to {to_name}:\n\n{body}"


def render_station_board(
    response: StationBoardResponse,
    station: Optional[str],
    station_id: Optional[str],
    board_type: str = "departure",
) -> str:
    resolved = response.station.name if response.station else None
    station_name = resolved or station or station_id or "Unknown"

    if not response.stationboard:
        return f"No {board_type}s found for {station_name}."

    title = "Arrivals" if board_type == "arrival" else "Departures"
    body = "\n".join(
        format_station_board_entry(entry, i)
        for i, entry in enumerate(response.stationboard, start=1)
    )
    return f"{title} at {station_name}:\n\n{body}"
