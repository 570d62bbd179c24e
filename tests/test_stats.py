from __future__ import annotations

import pytest

from airquality.core import buffer as buffer_mod
from airquality.core.buffer import IntBuffer
from airquality.core.errors import AllocationError
from airquality.core.stats import average, extract_above_threshold, maximum, minimum


READINGS = [5, 25, 18, 30, -2]


def test_end_to_end_example() -> None:
    buf = IntBuffer.from_iterable(READINGS)
    assert average(buf) == pytest.approx(15.2)
    assert maximum(buf) == 30.0
    assert minimum(buf, ceiling=30) == -2.0
    critical = extract_above_threshold(buf, 20)
    assert critical.to_list() == [25, 30]
    assert critical.size() == 2
    assert critical.capacity() == 2


def test_empty_input_conventions() -> None:
    buf = IntBuffer()
    assert average(buf) == 0.0
    assert maximum(buf) == 0.0
    assert minimum(buf) == 0.0
    assert maximum(buf, floor=None) == 0.0
    assert minimum(buf, ceiling=None) == 0.0


def test_empty_after_hint_is_still_empty() -> None:
    buf = IntBuffer(16)
    assert average(buf) == 0.0


def test_maximum_all_negative_reports_floor() -> None:
    buf = IntBuffer.from_iterable([-5, -3, -9])
    assert maximum(buf) == 0.0
    assert maximum(buf, floor=None) == -3.0


def test_minimum_above_ceiling_reports_ceiling() -> None:
    buf = IntBuffer.from_iterable([35, 40, 31])
    assert minimum(buf) == 30.0
    assert minimum(buf, ceiling=None) == 31.0
    assert minimum(buf, ceiling=100) == 31.0


def test_stats_return_floats() -> None:
    buf = IntBuffer.from_iterable([1, 2])
    for value in (average(buf), maximum(buf), minimum(buf)):
        assert isinstance(value, float)


def test_average_handles_large_values() -> None:
    big = 2**62
    buf = IntBuffer.from_iterable([big, big])
    assert average(buf) == pytest.approx(float(big))


def test_stats_only_see_logical_size() -> None:
    buf = IntBuffer.from_iterable([1, 2, 3])
    # capacity 4, slot 3 is uninitialised
    assert buf.capacity() == 4
    assert average(buf) == pytest.approx(2.0)
    assert maximum(buf, floor=None) == 3.0


@pytest.mark.parametrize(
    "values, threshold, expected",
    [
        ([1, 2, 3], 5, []),
        ([21, 20, 19, 22], 20, [21, 22]),
        ([-1, -5, 0], -2, [-1, 0]),
        ([7, 7, 7], 6, [7, 7, 7]),
    ],
)
def test_extract_above_threshold(values: list[int], threshold: int, expected: list[int]) -> None:
    buf = IntBuffer.from_iterable(values)
    out = extract_above_threshold(buf, threshold)
    assert out.to_list() == expected
    assert out.size() == len(expected)
    assert out.capacity() == len(expected)


def test_extract_from_empty_source_returns_empty_buffer() -> None:
    out = extract_above_threshold(IntBuffer(), 20)
    assert out is not None
    assert out.size() == 0
    assert out.capacity() == 0


def test_extract_owns_its_storage() -> None:
    buf = IntBuffer.from_iterable([25, 30])
    out = extract_above_threshold(buf, 20)
    out.set(0, 99)
    assert buf.get(0) == 25
    buf.destroy()
    assert out.to_list() == [99, 30]


def test_extract_reports_allocation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    buf = IntBuffer.from_iterable(READINGS)

    def fail(capacity: int):  # noqa: ANN202
        raise AllocationError(capacity, "injected")

    monkeypatch.setattr(buffer_mod, "_allocate", fail)
    with pytest.raises(AllocationError):
        extract_above_threshold(buf, 20)
    assert buf.to_list() == READINGS
