"""Tag history over Timebase: point lookups and aligned tables."""

__version__ = "1.0.0"
