from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Literal


RGBA = tuple[int, int, int, int]

MarkDirection = Literal["up", "down", "left", "right"]
MARK_DIRECTIONS = ("up", "down", "left", "right")

DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 12.0

DEFAULT_DENSITY_RADIUS = 5
# Measured in capital-letter heights of the label font.
DEFAULT_MIN_TEXT_DISTANCE = 1.0
DEFAULT_MIN_EXPONENT = -5
DEFAULT_MAX_EXPONENT = 5

DEFAULT_TEXT_COLOR: RGBA = (208, 218, 232, 255)
DEFAULT_LINE_COLOR: RGBA = (124, 138, 156, 255)
DEFAULT_TITLE_FONT_SIZE_PX = 14.0


@dataclass(frozen=True)
class AxisConfig:
    radius: int = DEFAULT_DENSITY_RADIUS
    min_text_distance: float = DEFAULT_MIN_TEXT_DISTANCE
    min_exponent: int = DEFAULT_MIN_EXPONENT
    max_exponent: int = DEFAULT_MAX_EXPONENT

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("radius must be >= 0")
        if not math.isfinite(self.min_text_distance) or self.min_text_distance < 0:
            raise ValueError("min_text_distance must be finite and >= 0")
        if self.min_exponent > self.max_exponent:
            raise ValueError("min_exponent must be <= max_exponent")


@dataclass(frozen=True)
class TextStyle:
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    color: RGBA = DEFAULT_TEXT_COLOR
    embolden_px: int = 1

    def __post_init__(self) -> None:
        if self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")
        if self.embolden_px < 1:
            raise ValueError("embolden_px must be >= 1")


@dataclass(frozen=True)
class AxisStyle:
    label_font: TextStyle = field(default_factory=TextStyle)
    title_font: TextStyle = field(default_factory=lambda: TextStyle(font_size_px=DEFAULT_TITLE_FONT_SIZE_PX, embolden_px=2))
    line_color: RGBA = DEFAULT_LINE_COLOR
    line_width: int = 1
    padding: int = 4
    tick_length: int = 6
    title_padding: int = 8
    # None points the marks away from the plotting frame.
    mark_direction: MarkDirection | None = None
    rotate_labels: bool = False

    def __post_init__(self) -> None:
        if self.line_width < 1:
            raise ValueError("line_width must be >= 1")
        if self.padding < 0 or self.tick_length < 0 or self.title_padding < 0:
            raise ValueError("padding, tick_length and title_padding must be >= 0")
        if self.mark_direction is not None and self.mark_direction not in MARK_DIRECTIONS:
            raise ValueError(f"unsupported mark direction: {self.mark_direction}")
