from __future__ import annotations

import logging
import operator
import sys
from typing import Iterable, Iterator, List, Optional

import numpy as np

from .errors import AllocationError, OutOfBounds


logger = logging.getLogger(__name__)

DTYPE = np.int64
INT_MIN = int(np.iinfo(DTYPE).min)
INT_MAX = int(np.iinfo(DTYPE).max)
MAX_CAPACITY = sys.maxsize // np.dtype(DTYPE).itemsize


def _allocate(capacity: int) -> np.ndarray:
    """Return an uninitialised int64 store of exactly ``capacity`` slots."""
    if capacity > MAX_CAPACITY:
        raise AllocationError(capacity, f"exceeds maximum capacity {MAX_CAPACITY}")
    try:
        return np.empty(capacity, dtype=DTYPE)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(capacity, str(exc)) from exc


def _check_value(value: object) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"IntBuffer stores integers, got {type(value).__name__}")
    v = int(value)
    if v < INT_MIN or v > INT_MAX:
        raise OverflowError(f"value {v} does not fit in a signed 64-bit slot")
    return v


class IntBuffer:
    """Growable buffer of signed integers with amortized O(1) append.

    The store is a numpy int64 array owned by the buffer. ``size`` counts the
    logically valid slots, ``capacity`` the allocated ones. Appending to a full
    buffer doubles its capacity (0 grows to 1). Reallocation is
    allocate-copy-swap: if the new store cannot be obtained the buffer keeps its
    previous data, size and capacity.

    Accessors are bounded by the logical size, never the capacity. Negative
    indices are rejected instead of wrapping around.

    Example:
        >>> with IntBuffer() as buf:
        ...     for v in (5, 25, 18):
        ...         buf.append(v)
        ...     buf.size(), buf.capacity(), buf.get(1)
        (3, 4, 25)
    """

    __slots__ = ("_data", "_capacity", "_size", "_destroyed")

    def __init__(self, initial_capacity: int = 0) -> None:
        initial_capacity = operator.index(initial_capacity)
        if initial_capacity < 0:
            raise ValueError(f"initial_capacity must be >= 0, got {initial_capacity}")
        self._data: Optional[np.ndarray] = None
        self._capacity: int = 0
        self._size: int = 0
        self._destroyed: bool = False
        if initial_capacity > 0:
            self._resize(initial_capacity)

    @classmethod
    def create(cls, initial_capacity: int = 0) -> "IntBuffer":
        return cls(initial_capacity)

    @classmethod
    def from_iterable(cls, values: Iterable[int], initial_capacity: int = 0) -> "IntBuffer":
        """Build a buffer by appending ``values`` one at a time."""
        buf = cls(initial_capacity)
        try:
            for v in values:
                buf.append(v)
        except BaseException:
            buf.destroy()
            raise
        return buf

    # ───────────────────────────── storage ─────────────────────────────
    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise ValueError("operation on destroyed IntBuffer")

    def _resize(self, new_capacity: int) -> None:
        """Reallocate to exactly ``new_capacity`` slots.

        Keeps the first ``min(size, new_capacity)`` values in order and clamps
        ``size`` down when the buffer shrinks below it. Raises AllocationError
        with the buffer untouched if the new store cannot be obtained.
        """
        self._ensure_alive()
        new_capacity = operator.index(new_capacity)
        if new_capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {new_capacity}")

        keep = min(self._size, new_capacity)
        if new_capacity == 0:
            new_data = None
        else:
            new_data = _allocate(new_capacity)
            if keep:
                assert self._data is not None
                new_data[:keep] = self._data[:keep]

        if keep < self._size:
            logger.debug("IntBuffer truncated from size %d to %d", self._size, keep)
        logger.debug("IntBuffer capacity %d -> %d", self._capacity, new_capacity)
        self._data = new_data
        self._capacity = new_capacity
        self._size = keep

    # ───────────────────────────── mutation ─────────────────────────────
    def append(self, value: int) -> None:
        self._ensure_alive()
        v = _check_value(value)
        if self._size == self._capacity:
            new_capacity = 1 if self._capacity == 0 else self._capacity * 2
            self._resize(new_capacity)
        assert self._data is not None
        self._data[self._size] = v
        self._size += 1

    def set(self, index: int, value: int) -> None:
        self._ensure_alive()
        i = self._check_index(index)
        v = _check_value(value)
        assert self._data is not None
        self._data[i] = v

    def _fill(self, values: np.ndarray) -> None:
        """Replace the contents with ``values`` when they fit the current capacity.

        Bulk counterpart of append for in-package algorithms that size the
        buffer up front. Raises ValueError when ``values`` exceed the capacity.
        """
        self._ensure_alive()
        count = len(values)
        if count > self._capacity:
            raise ValueError(f"{count} values do not fit capacity {self._capacity}")
        if count:
            assert self._data is not None
            self._data[:count] = values
        self._size = count

    def destroy(self) -> None:
        """Release the store. Any further use of the buffer raises ValueError."""
        self._data = None
        self._capacity = 0
        self._size = 0
        self._destroyed = True

    # ───────────────────────────── accessors ─────────────────────────────
    def _check_index(self, index: int) -> int:
        i = operator.index(index)
        if i < 0 or i >= self._size:
            raise OutOfBounds(i, self._size)
        return i

    def get(self, index: int) -> int:
        self._ensure_alive()
        i = self._check_index(index)
        assert self._data is not None
        return int(self._data[i])

    def size(self) -> int:
        self._ensure_alive()
        return self._size

    def capacity(self) -> int:
        self._ensure_alive()
        return self._capacity

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the logical contents."""
        self._ensure_alive()
        if self._data is None:
            return np.empty(0, dtype=DTYPE)
        return self._data[: self._size].copy()

    def to_list(self) -> List[int]:
        return [int(v) for v in self._view()]

    def _view(self) -> np.ndarray:
        # Read-only window over [0, size) for in-package algorithms.
        self._ensure_alive()
        if self._data is None:
            return np.empty(0, dtype=DTYPE)
        view = self._data[: self._size]
        view.flags.writeable = False
        return view

    # ───────────────────────────── protocols ─────────────────────────────
    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_list())

    def __getitem__(self, index: int) -> int:
        return self.get(index)

    def __setitem__(self, index: int, value: int) -> None:
        self.set(index, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntBuffer):
            return NotImplemented
        return self.to_list() == other.to_list()

    __hash__ = None  # type: ignore[assignment]

    def __enter__(self) -> "IntBuffer":
        self._ensure_alive()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.destroy()

    def __repr__(self) -> str:
        if self._destroyed:
            return "IntBuffer(<destroyed>)"
        return f"IntBuffer(size={self._size}, capacity={self._capacity}, values={self.to_list()})"
