from __future__ import annotations

from dataclasses import dataclass
import math
from typing import ClassVar, Literal, Protocol

import numpy as np


Side = Literal["left", "right", "top", "bottom"]
SIDES = ("left", "right", "top", "bottom")


class AxisMapping(Protocol):
    """Anything that maps domain positions onto the drawing plane."""

    kind: ClassVar[str]

    @property
    def domain(self) -> "Interval": ...

    def map(self, value: float) -> float: ...


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[left, right]``; ``left > right`` means a reversed interval."""

    left: float
    right: float

    def __post_init__(self) -> None:
        left = float(self.left)
        right = float(self.right)
        if not (math.isfinite(left) and math.isfinite(right)):
            raise ValueError("interval endpoints must be finite")
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def positive(self) -> bool:
        return self.left < self.right

    @property
    def lower(self) -> float:
        return min(self.left, self.right)

    @property
    def upper(self) -> float:
        return max(self.left, self.right)

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class LinearMapping:
    domain: Interval
    plane: Interval

    kind: ClassVar[str] = "linear"

    @property
    def scale(self) -> float:
        if self.domain.width == 0:
            return 0.0
        return self.plane.width / self.domain.width

    def map(self, value: float) -> float:
        if self.domain.width == 0:
            return self.plane.left + 0.5 * self.plane.width
        return self.plane.left + (float(value) - self.domain.left) * self.scale

    def map_array(self, values: np.ndarray) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if self.domain.width == 0:
            return np.full(arr.shape, self.plane.left + 0.5 * self.plane.width, dtype=np.float64)
        return self.plane.left + (arr - self.domain.left) * self.scale


@dataclass(frozen=True)
class PlotFrame:
    """Pixel rectangle of the plotting area; corners are inclusive."""

    x0: int
    y0: int
    x1: int
    y1: int

    def __post_init__(self) -> None:
        if self.x1 <= self.x0 or self.y1 <= self.y0:
            raise ValueError("plot frame must have positive width and height")

    @property
    def width(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return self.y1 - self.y0 + 1

    def horizontal_mapping(self, domain: Interval) -> LinearMapping:
        return LinearMapping(domain=domain, plane=Interval(self.x0, self.x1))

    def vertical_mapping(self, domain: Interval) -> LinearMapping:
        # Canvas rows grow downwards, so the domain's left end sits at the bottom row.
        return LinearMapping(domain=domain, plane=Interval(self.y1, self.y0))

    def mapping_for_side(self, side: Side, domain: Interval) -> LinearMapping:
        if is_horizontal(side):
            return self.horizontal_mapping(domain)
        return self.vertical_mapping(domain)

    def edge(self, side: Side) -> int:
        if side == "bottom":
            return self.y1
        if side == "top":
            return self.y0
        if side == "left":
            return self.x0
        if side == "right":
            return self.x1
        raise ValueError(f"unsupported axis side: {side}")


def is_horizontal(side: Side) -> bool:
    if side not in SIDES:
        raise ValueError(f"unsupported axis side: {side}")
    return side in ("top", "bottom")
