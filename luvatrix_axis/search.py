from __future__ import annotations

from dataclasses import dataclass
import logging

from luvatrix_axis.axis import Axis
from luvatrix_axis.config import DEFAULT_DENSITY_RADIUS, DEFAULT_MIN_TEXT_DISTANCE
from luvatrix_axis.context import TextMeasurer
from luvatrix_axis.density import DensityStrategy, IndexGuess
from luvatrix_axis.errors import MeasurementFailure, UnboundedSearch
from luvatrix_axis.formatting import format_default
from luvatrix_axis.overlap import Extent, measure_overlap
from luvatrix_axis.scales import AxisMapping, Interval


LOGGER = logging.getLogger(__name__)

# Widths below this fraction of the endpoint magnitude are cancellation noise.
DEGENERATE_RELATIVE_WIDTH = 1e-10

BADNESS_NO_MARKS = 4.0
BADNESS_OVERLAPPING = 3.0
BADNESS_NO_SIGNAL = 2.0
BADNESS_CRAMPED = 1.0


@dataclass(frozen=True)
class AxisCandidate:
    index: int
    axis: Axis
    overlap: float | None
    badness: float
    measured: bool = True


def compress(x: float) -> float:
    """Map ``[0, inf)`` onto ``[0, 1)`` preserving order."""
    if x < 0:
        raise ValueError("compress expects a non-negative value")
    return x / (1.0 + x)


def badness(axis: Axis, overlap: float | None, min_distance: float) -> float:
    if axis.labeled_count == 0:
        return BADNESS_NO_MARKS
    if overlap is None:
        return BADNESS_NO_SIGNAL
    if overlap > 0:
        return BADNESS_OVERLAPPING + compress(overlap)
    if overlap > -min_distance:
        return BADNESS_CRAMPED + compress(overlap + min_distance)
    return compress(-overlap - min_distance)


def is_degenerate(domain: Interval) -> bool:
    width = abs(domain.width)
    if width == 0:
        return True
    return width <= DEGENERATE_RELATIVE_WIDTH * max(abs(domain.left), abs(domain.right))


def degenerate_axis(domain: Interval) -> Axis:
    return Axis(positions=(domain.left,), marks=(format_default(domain.left),))


def explored_indices(guess: IndexGuess, radius: int) -> range:
    center, lower, upper = guess
    if radius < 0:
        raise ValueError("radius must be >= 0")
    if lower is not None and upper is not None and lower > upper:
        raise UnboundedSearch(f"density strategy returned inverted bounds: min={lower} > max={upper}")
    lo = center - radius if lower is None else max(lower, center - radius)
    hi = center + radius if upper is None else min(upper, center + radius)
    if lo > hi:
        # The guess lies further than ``radius`` outside the bounds; try the nearest bound only.
        nearest = center
        if lower is not None:
            nearest = max(nearest, lower)
        if upper is not None:
            nearest = min(nearest, upper)
        return range(nearest, nearest + 1)
    return range(lo, hi + 1)


def score_candidates(
    mapping: AxisMapping,
    strategy: DensityStrategy,
    extent: Extent,
    context: TextMeasurer,
    *,
    min_distance: float,
    radius: int = DEFAULT_DENSITY_RADIUS,
) -> list[AxisCandidate]:
    candidates: list[AxisCandidate] = []
    for index in explored_indices(strategy.guess_index(mapping), radius):
        axis = strategy.generate(mapping, index)
        try:
            overlap = measure_overlap(mapping, axis, extent, context)
        except MeasurementFailure as exc:
            LOGGER.warning("density index %d dropped: %s", index, exc)
            candidates.append(AxisCandidate(index=index, axis=axis, overlap=None, badness=BADNESS_NO_MARKS, measured=False))
            continue
        candidates.append(
            AxisCandidate(index=index, axis=axis, overlap=overlap, badness=badness(axis, overlap, min_distance))
        )
    return candidates


def pick_best_axis(
    mapping: AxisMapping,
    strategy: DensityStrategy,
    extent: Extent,
    context: TextMeasurer,
    *,
    min_distance: float | None = None,
    radius: int = DEFAULT_DENSITY_RADIUS,
) -> Axis:
    domain = mapping.domain
    if is_degenerate(domain):
        LOGGER.debug("degenerate domain [%r, %r]; using a single tick", domain.left, domain.right)
        return degenerate_axis(domain)

    if min_distance is None:
        min_distance = DEFAULT_MIN_TEXT_DISTANCE * context.capital_letter_height()
    candidates = score_candidates(mapping, strategy, extent, context, min_distance=min_distance, radius=radius)
    best = min(candidates, key=lambda c: c.badness)
    LOGGER.debug(
        "picked density index %d (badness=%.4f, overlap=%s) among indices %d..%d",
        best.index,
        best.badness,
        best.overlap,
        candidates[0].index,
        candidates[-1].index,
    )
    return best.axis
