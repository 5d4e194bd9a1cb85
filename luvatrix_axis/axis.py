from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from luvatrix_axis.config import AxisConfig
from luvatrix_axis.errors import InvalidAxis

if TYPE_CHECKING:
    from luvatrix_axis.density import DensityStrategy


@dataclass(frozen=True)
class Axis:
    """Tick positions in domain coordinates, index-aligned with optional labels.

    A ``None`` mark draws the tick without a label and keeps it out of overlap
    checks. An empty string is a blank label that still takes part in them.
    """

    positions: tuple[float, ...]
    marks: tuple[str | None, ...]

    def __post_init__(self) -> None:
        positions = tuple(float(p) for p in self.positions)
        marks = tuple(self.marks)
        if len(positions) != len(marks):
            raise InvalidAxis(f"positions and marks length mismatch: {len(positions)} != {len(marks)}")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "marks", marks)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, str | None]]) -> "Axis":
        items = list(pairs)
        return cls(positions=tuple(p for p, _ in items), marks=tuple(m for _, m in items))

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[tuple[float, str | None]]:
        return iter(zip(self.positions, self.marks))

    @property
    def labeled_count(self) -> int:
        return sum(1 for mark in self.marks if mark is not None)


@dataclass(frozen=True)
class AutoAxis:
    """Request to pick ticks automatically when the axis is resolved."""

    title: str | None = None
    strategy: "DensityStrategy | None" = None
    config: AxisConfig | None = None


AxisSpec = Axis | AutoAxis
