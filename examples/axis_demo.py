from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from luvatrix_axis import AutoAxis, Axis, AxisStyle, LinearDensity, PlotFrame, RenderContext, TextStyle, draw_axes
from luvatrix_axis.scales import Interval


def _render_axes_frame(width: int, height: int) -> np.ndarray:
    ctx = RenderContext.blank(width, height)
    frame = PlotFrame(x0=110, y0=90, x1=width - 110, y1=height - 90)
    style = AxisStyle(title_font=TextStyle(font_size_px=16.0, embolden_px=2))

    quarters = Axis.from_pairs([(0.0, "Q1"), (0.25, None), (0.5, "Q3"), (0.75, None), (1.0, "Q1'")])
    drawn = draw_axes(
        ctx,
        {
            "bottom": (frame.horizontal_mapping(Interval(0.0, 97.0)), AutoAxis(title="sample index")),
            "left": (frame.vertical_mapping(Interval(-0.0042, 0.0137)), AutoAxis(title="residual")),
            "top": (frame.horizontal_mapping(Interval(1.2e7, 4.6e7)), AutoAxis(strategy=LinearDensity(max_index=22))),
            "right": (frame.vertical_mapping(Interval(0.0, 1.0)), quarters),
        },
        frame,
        style=style,
    )
    for side, axis in drawn.items():
        marks = [] if axis is None else [mark for mark in axis.marks if mark is not None]
        print(f"{side}: {marks}")
    return ctx.canvas


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame).save(path)


def main() -> None:
    parser = argparse.ArgumentParser(prog="axis_demo")
    parser.add_argument("--out", type=Path, default=Path("axis_demo.png"))
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=640)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    canvas = _render_axes_frame(args.width, args.height)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    _save_rgba(args.out, canvas)
    print(f"wrote {args.out}")


if __name__ == "__main__":
    main()
