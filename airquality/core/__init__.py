"""Core primitives: the growable integer buffer and statistics over it.

IntBuffer owns a contiguous int64 store and doubles its capacity on demand.
The statistics are read-only scans of a populated buffer; critical-value
extraction produces a second, independently owned buffer.
"""

from .buffer import IntBuffer
from .errors import AllocationError, IntBufferError, OutOfBounds
from .stats import average, extract_above_threshold, maximum, minimum

__all__ = [
    "IntBuffer",
    "IntBufferError",
    "AllocationError",
    "OutOfBounds",
    "average",
    "maximum",
    "minimum",
    "extract_above_threshold",
]
