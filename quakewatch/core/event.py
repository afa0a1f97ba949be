"""Seismic event models and feed parsing - Pure functions.

This module turns the USGS GeoJSON summary feed into typed records.
All functions are pure with no side effects.

Individual features are parsed leniently: absent or malformed optional
fields become ``None``/empty values instead of errors. Only a document
that is not a feature collection at all is rejected.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any


logger = logging.getLogger(__name__)


class FeedFormatError(ValueError):
    """The decoded document is not a GeoJSON feature collection."""


@dataclass(frozen=True)
class EventRecord:
    """Immutable seismic event as reported by the feed.

    Attributes:
        id: Stable USGS event ID (same across polls)
        time_ms: Occurrence time in epoch milliseconds (None if absent)
        magnitude: Event magnitude (None if absent)
        place: Human-readable location ("" if absent)
        ids: Comma-joined list of related source IDs ("" if absent)
        updated_ms: Last update time in epoch milliseconds
        url: USGS event page
        mag_type: Magnitude type (e.g. 'ml', 'md', 'mb')
        status: Review status ('automatic' or 'reviewed')
        alert: PAGER alert level (green/yellow/orange/red)
        tsunami: Whether the tsunami flag is set
        title: Feed-provided title
        coordinates: Raw [lon, lat, depth] geometry, possibly short
    """
    id: str
    time_ms: int | None = None
    magnitude: float | None = None
    place: str = ""
    ids: str = ""
    updated_ms: int | None = None
    url: str = ""
    mag_type: str = ""
    status: str = ""
    alert: str | None = None
    tsunami: bool = False
    title: str = ""
    coordinates: tuple[float, ...] = ()

    @property
    def depth_km(self) -> float | None:
        """Return depth in kilometres, or None without a full geometry."""
        if len(self.coordinates) < 3:
            return None
        return self.coordinates[2]


@dataclass(frozen=True)
class FeedMetadata:
    """Metadata block of a feed snapshot."""
    generated_ms: int | None = None
    url: str = ""
    title: str = ""
    api: str = ""
    count: int = 0
    status: int | None = None


@dataclass(frozen=True)
class FeedSnapshot:
    """One decoded response from the feed.

    Attributes:
        metadata: Feed metadata block
        events: Events in feed order (the feed lists newest first)
    """
    metadata: FeedMetadata
    events: tuple[EventRecord, ...] = ()


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_coordinates(geometry: Any) -> tuple[float, ...]:
    if not isinstance(geometry, dict):
        return ()
    raw = geometry.get("coordinates")
    if not isinstance(raw, list):
        return ()

    coords = []
    for value in raw:
        number = _as_float(value)
        if number is None:
            break
        coords.append(number)
    return tuple(coords)


def parse_event(feature: Any) -> EventRecord | None:
    """Parse a single GeoJSON feature into an EventRecord.

    Pure function. Returns None only when the feature cannot be tracked
    (not an object, or no event ID); every other gap is tolerated.

    Args:
        feature: GeoJSON feature dict from the USGS feed

    Returns:
        EventRecord or None if the feature has no usable ID
    """
    if not isinstance(feature, dict):
        return None

    event_id = feature.get("id")
    if not event_id:
        return None

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}

    return EventRecord(
        id=str(event_id),
        time_ms=_as_int(props.get("time")),
        magnitude=_as_float(props.get("mag")),
        place=_as_str(props.get("place")),
        ids=_as_str(props.get("ids")),
        updated_ms=_as_int(props.get("updated")),
        url=_as_str(props.get("url")),
        mag_type=_as_str(props.get("magType")),
        status=_as_str(props.get("status")),
        alert=props.get("alert") or None,
        tsunami=bool(_as_int(props.get("tsunami"))),
        title=_as_str(props.get("title")),
        coordinates=_parse_coordinates(feature.get("geometry")),
    )


def parse_metadata(data: Any) -> FeedMetadata:
    """Parse the feed metadata block. Pure function."""
    if not isinstance(data, dict):
        return FeedMetadata()

    return FeedMetadata(
        generated_ms=_as_int(data.get("generated")),
        url=_as_str(data.get("url")),
        title=_as_str(data.get("title")),
        api=_as_str(data.get("api")),
        count=_as_int(data.get("count")) or 0,
        status=_as_int(data.get("status")),
    )


def parse_snapshot(geojson: Any) -> FeedSnapshot:
    """Parse a decoded feed document into a FeedSnapshot.

    Pure function. Feature order is preserved.

    Args:
        geojson: Decoded GeoJSON FeatureCollection

    Returns:
        FeedSnapshot with all trackable events

    Raises:
        FeedFormatError: If the document is not a feature collection
    """
    if not isinstance(geojson, dict):
        raise FeedFormatError(
            f"Expected a JSON object, got {type(geojson).__name__}"
        )

    features = geojson.get("features", [])
    if not isinstance(features, list):
        raise FeedFormatError("'features' is not a list")

    events = []
    for index, feature in enumerate(features):
        event = parse_event(feature)
        if event is None:
            logger.warning("Skipping feature %d without an event ID", index)
            continue
        events.append(event)

    return FeedSnapshot(
        metadata=parse_metadata(geojson.get("metadata")),
        events=tuple(events),
    )
