from __future__ import annotations

from typing import Optional

from .buffer import IntBuffer


DEFAULT_CRITICAL_THRESHOLD = 20
DEFAULT_MIN_CEILING = 30.0
DEFAULT_MAX_FLOOR = 0.0


def average(buffer: IntBuffer) -> float:
    """Arithmetic mean of the buffer contents, 0.0 for an empty buffer."""
    values = buffer._view()  # noqa: SLF001
    if values.size == 0:
        return 0.0
    return float(values.sum(dtype="float64")) / values.size


def maximum(buffer: IntBuffer, floor: Optional[float] = DEFAULT_MAX_FLOOR) -> float:
    """Largest value, scanning from a running maximum that starts at ``floor``.

    With the default floor of 0.0 a buffer holding only negative readings
    reports 0.0 rather than its true maximum. Pass ``floor=None`` to start from
    the first element instead. An empty buffer always yields 0.0.
    """
    values = buffer._view()  # noqa: SLF001
    if values.size == 0:
        return 0.0
    top = float(values.max())
    if floor is None:
        return top
    return max(float(floor), top)


def minimum(buffer: IntBuffer, ceiling: Optional[float] = DEFAULT_MIN_CEILING) -> float:
    """Smallest value, scanning from a running minimum that starts at ``ceiling``.

    ``ceiling`` is the expected maximum plausible reading; a buffer whose values
    all lie above it reports the ceiling itself. Pass ``ceiling=None`` to start
    from the first element instead. An empty buffer always yields 0.0.
    """
    values = buffer._view()  # noqa: SLF001
    if values.size == 0:
        return 0.0
    low = float(values.min())
    if ceiling is None:
        return low
    return min(float(ceiling), low)


def extract_above_threshold(buffer: IntBuffer, threshold: int = DEFAULT_CRITICAL_THRESHOLD) -> IntBuffer:
    """Return a new buffer with every value strictly above ``threshold``.

    Relative order is preserved. The result is sized exactly from a counting
    pass, owns its own store, and is empty (capacity 0) when nothing qualifies,
    including when ``buffer`` itself is empty.
    """
    values = buffer._view()  # noqa: SLF001
    mask = values > threshold
    count = int(mask.sum())

    out = IntBuffer(count)
    out._fill(values[mask])  # noqa: SLF001
    return out
