"""quakewatch - live terminal table of recent USGS earthquakes."""

__version__ = "0.1.0"
