from __future__ import annotations

from typing import Literal

from luvatrix_axis.axis import Axis
from luvatrix_axis.context import TextMeasurer
from luvatrix_axis.scales import AxisMapping


Extent = Literal["width", "height"]
EXTENTS = ("width", "height")


def measure_overlap(mapping: AxisMapping, axis: Axis, extent: Extent, context: TextMeasurer) -> float | None:
    """Worst overlap between consecutive labeled ticks, in plane units.

    Pairs are taken in ``axis.positions`` order, not sorted by plane coordinate.
    Positive means at least one pair of labels collides, negative means every
    pair has a gap. ``None`` when fewer than two ticks carry a label.
    """
    if extent not in EXTENTS:
        raise ValueError(f"unsupported extent: {extent}")
    size_index = 0 if extent == "width" else 1

    labeled: list[tuple[float, float]] = []
    for position, mark in axis:
        if mark is None:
            continue
        size = context.measure_text(mark)[size_index]
        labeled.append((mapping.map(position), float(size)))

    if len(labeled) < 2:
        return None
    return max(
        (size + prev_size) / 2.0 - abs(plane - prev_plane)
        for (prev_plane, prev_size), (plane, size) in zip(labeled, labeled[1:])
    )
