"""Display formatting - Pure functions.

This module projects EventRecords into display-ready rows and cells:
time and magnitude formatting, magnitude-based severity colours and
column layout. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo

from quakewatch.core.event import EventRecord


# Month/day/hour:minute:second/zone, e.g. "Mar/14/09:26:53/UTC"
TIME_FORMAT = "%b/%d/%H:%M:%S/%Z"

COLUMNS = ("Time", "Magnitude", "Location", "Coordinates", "Source IDs")

HEADER_COLOR = "yellow"
TIME_COLOR = "dark_cyan"

SEVERITY_DEFAULT = "default"
SEVERITY_ELEVATED = "elevated"
SEVERITY_HIGH = "high"
SEVERITY_CRITICAL = "critical"

SEVERITY_COLORS = {
    SEVERITY_DEFAULT: "green",
    SEVERITY_ELEVATED: "yellow",
    SEVERITY_HIGH: "dark_orange",
    SEVERITY_CRITICAL: "red",
}


@dataclass(frozen=True)
class DisplayRow:
    """Display-ready projection of an EventRecord.

    Attributes:
        event_id: Event ID, the row key
        time: Formatted occurrence time ("" if unknown)
        magnitude: Magnitude with two decimals ("" if unknown)
        place: Location description
        coordinates: "lon lat depth" ("" without a full geometry)
        ids: Comma-joined related source IDs
        time_ms: Occurrence time in epoch ms, 0 if unknown (ordering key)
        severity: Severity level derived from the magnitude
    """
    event_id: str
    time: str
    magnitude: str
    place: str
    coordinates: str
    ids: str
    time_ms: int = 0
    severity: str = SEVERITY_DEFAULT

    @property
    def texts(self) -> tuple[str, ...]:
        """Cell texts in column order."""
        return (self.time, self.magnitude, self.place, self.coordinates, self.ids)


@dataclass(frozen=True)
class Cell:
    """One rendered table cell."""
    text: str
    color: str
    align: str = "left"
    selectable: bool = True


def get_severity(magnitude: float | None) -> str:
    """Get the severity level for a magnitude.

    Pure function. Unknown magnitudes use the default level.
    """
    if magnitude is None:
        return SEVERITY_DEFAULT
    if magnitude >= 7.0:
        return SEVERITY_CRITICAL
    elif magnitude >= 6.0:
        return SEVERITY_HIGH
    elif magnitude >= 4.0:
        return SEVERITY_ELEVATED
    else:
        return SEVERITY_DEFAULT


def get_severity_color(magnitude: float | None) -> str:
    """Get the cell colour for a magnitude. Pure function."""
    return SEVERITY_COLORS[get_severity(magnitude)]


def format_time(time_ms: int | None, tz: tzinfo | None = None) -> str:
    """Format an epoch-millisecond timestamp for display.

    Sub-second precision is dropped.

    Args:
        time_ms: Epoch milliseconds, or None
        tz: Display timezone; None means the local zone

    Returns:
        Formatted time, or "" if time_ms is None or out of range
    """
    if time_ms is None:
        return ""

    seconds = time_ms // 1000
    try:
        if tz is None:
            moment = datetime.fromtimestamp(seconds).astimezone()
        else:
            moment = datetime.fromtimestamp(seconds, tz=tz)
    except (OverflowError, OSError, ValueError):
        return ""
    return moment.strftime(TIME_FORMAT)


def format_magnitude(magnitude: float | None) -> str:
    if magnitude is None:
        return ""
    return f"{magnitude:.2f}"


def format_coordinates(coordinates: tuple[float, ...]) -> str:
    """Format [lon, lat, depth] as "lon lat depth" with six decimals."""
    if len(coordinates) < 3:
        return ""
    lon, lat, depth = coordinates[:3]
    return f"{lon:f} {lat:f} {depth:f}"


def to_display_row(event: EventRecord, tz: tzinfo | None = None) -> DisplayRow:
    """Project an EventRecord into a DisplayRow.

    Pure function. The severity band follows the displayed (rounded)
    magnitude, so the colour always agrees with the text.

    Args:
        event: Event to project
        tz: Display timezone (None for local time)

    Returns:
        DisplayRow for the event
    """
    magnitude = format_magnitude(event.magnitude)
    return DisplayRow(
        event_id=event.id,
        time=format_time(event.time_ms, tz),
        magnitude=magnitude,
        place=event.place,
        coordinates=format_coordinates(event.coordinates),
        ids=event.ids,
        time_ms=event.time_ms or 0,
        severity=get_severity(float(magnitude) if magnitude else None),
    )


def build_header_cells() -> list[Cell]:
    """Build the fixed header row. Pure function."""
    return [
        Cell(text=title, color=HEADER_COLOR, align="center", selectable=False)
        for title in COLUMNS
    ]


def build_row_cells(row: DisplayRow) -> list[Cell]:
    """Build the cells of one data row.

    Pure function. The time column is set apart in its own colour and is
    not selectable; every other cell is left-aligned and coloured by
    severity.
    """
    color = SEVERITY_COLORS.get(row.severity, SEVERITY_COLORS[SEVERITY_DEFAULT])
    cells = []
    for column, text in enumerate(row.texts):
        if column == 0:
            cells.append(Cell(text=text, color=TIME_COLOR, selectable=False))
        else:
            cells.append(Cell(text=text, color=color))
    return cells
