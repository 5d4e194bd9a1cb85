from __future__ import annotations

import numpy as np

from luvatrix_axis.config import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    _blend_into(dst[y : y + 1, x], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    for yy in _thick_band(y, width):
        if yy < 0 or yy >= dst.shape[0]:
            continue
        xa = max(0, min(x0, x1))
        xb = min(dst.shape[1] - 1, max(x0, x1))
        if xa > xb:
            return
        _blend_into(dst[yy, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    for xx in _thick_band(x, width):
        if xx < 0 or xx >= dst.shape[1]:
            continue
        ya = max(0, min(y0, y1))
        yb = min(dst.shape[0] - 1, max(y0, y1))
        if ya > yb:
            return
        _blend_into(dst[ya : yb + 1, xx], color)


def draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    """Stroke an axis-aligned segment; tick marks and axis rules are never diagonal."""
    if y0 == y1:
        draw_hline(dst, x0, x1, y0, color, width=width)
    elif x0 == x1:
        draw_vline(dst, x0, y0, y1, color, width=width)
    else:
        raise ValueError("segment must be horizontal or vertical")


def _thick_band(center: int, width: int) -> range:
    width = max(1, int(width))
    start = center - (width - 1) // 2
    return range(start, start + width)


def _blend_into(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255
