"""NO2 air-quality readings: growable integer buffer plus batch statistics.

Readings are loaded from a delimited export (one value per line, in a fixed
column) into an IntBuffer, then summarized as average, maximum, minimum and
the subset of critical values above a configurable threshold.
"""

__all__ = [
    "config",
    "core",
    "data",
    "report",
    "utils",
]
__version__ = "0.1.0"
