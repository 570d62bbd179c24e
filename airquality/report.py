from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from .core.buffer import IntBuffer
from .core.stats import (
    DEFAULT_MAX_FLOOR,
    DEFAULT_MIN_CEILING,
    average,
    extract_above_threshold,
    maximum,
    minimum,
)


@dataclass
class Summary:
    count: int
    capacity: int
    average: float
    maximum: float
    minimum: float
    threshold: int
    critical_values: List[int] = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return len(self.critical_values)


def summarize(
    buffer: IntBuffer,
    threshold: int,
    max_floor: Optional[float] = DEFAULT_MAX_FLOOR,
    min_ceiling: Optional[float] = DEFAULT_MIN_CEILING,
) -> Summary:
    """Compute the statistics for a populated readings buffer."""
    with extract_above_threshold(buffer, threshold) as critical:
        critical_values = critical.to_list()
    return Summary(
        count=buffer.size(),
        capacity=buffer.capacity(),
        average=average(buffer),
        maximum=maximum(buffer, floor=max_floor),
        minimum=minimum(buffer, ceiling=min_ceiling),
        threshold=threshold,
        critical_values=critical_values,
    )


def render_text(summary: Summary, values: Optional[List[int]] = None) -> str:
    lines: List[str] = []
    if values is not None:
        lines.extend(f"NO2-Value {i}: {v}" for i, v in enumerate(values))
    lines.append(f"Average: {summary.average:.2f}")
    lines.append(f"Max. Value: {summary.maximum:.2f}")
    lines.append(f"Min. Value: {summary.minimum:.2f}")
    lines.append(f"Critical values (> {summary.threshold}): {summary.critical_count}")
    lines.extend(f"NO2-value {i}: {v}" for i, v in enumerate(summary.critical_values))
    return "\n".join(lines)


def render_json(summary: Summary) -> str:
    payload = asdict(summary)
    payload["critical_count"] = summary.critical_count
    return json.dumps(payload, ensure_ascii=False)
