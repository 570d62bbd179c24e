from __future__ import annotations


class IntBufferError(Exception):
    """Base class for failures reported by IntBuffer."""


class AllocationError(IntBufferError, MemoryError):
    """Storage for the requested capacity could not be obtained."""

    def __init__(self, requested: int, reason: str = "") -> None:
        self.requested = requested
        msg = f"could not allocate storage for {requested} elements"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class OutOfBounds(IntBufferError, IndexError):
    """Index is negative or not below the logical size."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"index {index} out of bounds for buffer of size {size}")
