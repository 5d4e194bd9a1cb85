from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Iterator, Protocol

import numpy as np

from luvatrix_axis.config import RGBA, TextStyle
from luvatrix_axis.errors import MeasurementFailure
from luvatrix_axis.raster.canvas import new_canvas
from luvatrix_axis.raster.draw_text import capital_height, text_size


class TextMeasurer(Protocol):
    def measure_text(self, text: str) -> tuple[float, float]: ...

    def capital_letter_height(self) -> float: ...


class RenderContext:
    """Shared drawing state for axis resolution: an RGBA canvas and the active font.

    Style application mutates the active font, so callers resolving axes from
    several threads hold :meth:`exclusive` from ``apply_style`` through drawing.
    """

    def __init__(self, canvas: np.ndarray | None = None, *, text_style: TextStyle | None = None) -> None:
        if canvas is not None:
            if canvas.dtype != np.uint8:
                raise ValueError("canvas must be uint8")
            if canvas.ndim != 3 or canvas.shape[2] != 4:
                raise ValueError("canvas must have shape (H, W, 4)")
        self._canvas = canvas
        self._text_style = text_style or TextStyle()
        self._lock = threading.RLock()

    @classmethod
    def blank(cls, width: int, height: int, color: RGBA = (12, 16, 23, 255)) -> "RenderContext":
        return cls(new_canvas(width, height, color=color))

    @property
    def canvas(self) -> np.ndarray:
        if self._canvas is None:
            raise ValueError("render context has no canvas to draw on")
        return self._canvas

    @property
    def text_style(self) -> TextStyle:
        return self._text_style

    def apply_style(self, style: TextStyle) -> None:
        self._text_style = style

    def measure_text(self, text: str) -> tuple[float, float]:
        style = self._text_style
        try:
            w, h = text_size(text, font_family=style.font_family, font_size_px=style.font_size_px)
        except (OSError, ValueError) as exc:
            raise MeasurementFailure(text, str(exc)) from exc
        return (float(w), float(h))

    def capital_letter_height(self) -> float:
        style = self._text_style
        try:
            return float(capital_height(font_family=style.font_family, font_size_px=style.font_size_px))
        except (OSError, ValueError) as exc:
            raise MeasurementFailure("X", str(exc)) from exc

    @contextmanager
    def exclusive(self) -> Iterator["RenderContext"]:
        with self._lock:
            yield self
