from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Mapping

from luvatrix_axis.axis import Axis, AutoAxis, AxisSpec
from luvatrix_axis.config import AxisConfig, AxisStyle, MarkDirection
from luvatrix_axis.context import RenderContext
from luvatrix_axis.density import strategy_for
from luvatrix_axis.overlap import Extent
from luvatrix_axis.raster.canvas import draw_segment
from luvatrix_axis.raster.draw_text import draw_aligned_text
from luvatrix_axis.scales import AxisMapping, PlotFrame, Side, is_horizontal
from luvatrix_axis.search import pick_best_axis


LOGGER = logging.getLogger(__name__)

OUTWARD_DIRECTIONS: dict[str, MarkDirection] = {
    "bottom": "down",
    "top": "up",
    "left": "left",
    "right": "right",
}
LABEL_ROTATION_DEG = 90


@dataclass(frozen=True)
class TickPlacement:
    value: float
    plane: float
    label: str | None
    rotate_deg: int = 0


def resolve_axis(
    mapping: AxisMapping,
    spec: AxisSpec,
    extent: Extent,
    context: RenderContext,
    style: AxisStyle,
    config: AxisConfig | None = None,
) -> Axis:
    """Return ``spec`` itself when it is a concrete axis, else search for one."""
    if isinstance(spec, Axis):
        return spec
    if not isinstance(spec, AutoAxis):
        raise TypeError(f"expected Axis or AutoAxis, got {type(spec)!r}")
    explicit = spec.config or config
    config = explicit or AxisConfig()
    strategy = spec.strategy or strategy_for(mapping, config)
    if explicit is not None:
        strategy = strategy.configured(explicit)
    context.apply_style(style.label_font)
    min_distance = config.min_text_distance * context.capital_letter_height()
    return pick_best_axis(mapping, strategy, extent, context, min_distance=min_distance, radius=config.radius)


def extent_for_side(side: Side, rotate_labels: bool = False) -> Extent:
    along_width = is_horizontal(side) != rotate_labels
    return "width" if along_width else "height"


def mark_direction_for(side: Side, style: AxisStyle) -> MarkDirection:
    direction = style.mark_direction or OUTWARD_DIRECTIONS[side]
    allowed = ("up", "down") if is_horizontal(side) else ("left", "right")
    if direction not in allowed:
        raise ValueError(f"mark direction {direction!r} is not perpendicular to the {side} axis")
    return direction


def tick_placements(mapping: AxisMapping, axis: Axis, style: AxisStyle) -> list[TickPlacement]:
    rotate_deg = LABEL_ROTATION_DEG if style.rotate_labels else 0
    return [
        TickPlacement(value=position, plane=mapping.map(position), label=mark, rotate_deg=rotate_deg)
        for position, mark in axis
    ]


def draw_axis(
    context: RenderContext,
    mapping: AxisMapping,
    spec: AxisSpec,
    side: Side,
    frame: PlotFrame,
    *,
    style: AxisStyle | None = None,
    config: AxisConfig | None = None,
    title: str | None = None,
) -> Axis:
    style = style or AxisStyle()
    horizontal = is_horizontal(side)
    direction = mark_direction_for(side, style)
    outward = 1 if side in ("bottom", "right") else -1
    mark_sign = 1 if direction in ("down", "right") else -1
    if title is None and isinstance(spec, AutoAxis):
        title = spec.title

    with context.exclusive():
        axis = resolve_axis(mapping, spec, extent_for_side(side, style.rotate_labels), context, style, config)
        canvas = context.canvas
        edge = frame.edge(side)
        color = style.line_color
        width = style.line_width

        if horizontal:
            draw_segment(canvas, frame.x0, edge, frame.x1, edge, color, width=width)
        else:
            draw_segment(canvas, edge, frame.y0, edge, frame.y1, color, width=width)

        mark_end = edge + mark_sign * style.tick_length
        outer_reach = style.tick_length if mark_sign == outward else 0
        label_at = edge + outward * (outer_reach + style.padding)
        font = style.label_font
        label_depth = 0
        for tick in tick_placements(mapping, axis, style):
            p = int(round(tick.plane))
            if horizontal:
                draw_segment(canvas, p, edge, p, mark_end, color, width=width)
            else:
                draw_segment(canvas, edge, p, mark_end, p, color, width=width)
            if tick.label is None:
                continue
            _, _, w, h = draw_aligned_text(
                canvas,
                p if horizontal else label_at,
                label_at if horizontal else p,
                tick.label,
                font.color,
                h_align="center" if horizontal else ("left" if outward > 0 else "right"),
                v_align=("top" if outward > 0 else "bottom") if horizontal else "center",
                font_family=font.font_family,
                font_size_px=font.font_size_px,
                embolden_px=font.embolden_px,
                rotate_deg=tick.rotate_deg,
            )
            label_depth = max(label_depth, h if horizontal else w)

        if title:
            _draw_title(context, title, side, frame, style, label_at + outward * (label_depth + style.title_padding))
    return axis


def _draw_title(context: RenderContext, title: str, side: Side, frame: PlotFrame, style: AxisStyle, at: int) -> None:
    font = style.title_font
    horizontal = is_horizontal(side)
    outward = 1 if side in ("bottom", "right") else -1
    if horizontal:
        x, y = (frame.x0 + frame.x1) // 2, at
        h_align, v_align = "center", ("top" if outward > 0 else "bottom")
    else:
        x, y = at, (frame.y0 + frame.y1) // 2
        h_align, v_align = ("left" if outward > 0 else "right"), "center"
    draw_aligned_text(
        context.canvas,
        x,
        y,
        title,
        font.color,
        h_align=h_align,
        v_align=v_align,
        font_family=font.font_family,
        font_size_px=font.font_size_px,
        embolden_px=font.embolden_px,
        rotate_deg=0 if horizontal else LABEL_ROTATION_DEG,
    )


def draw_axes(
    context: RenderContext,
    axes: Mapping[Side, tuple[AxisMapping, AxisSpec]],
    frame: PlotFrame,
    *,
    style: AxisStyle | None = None,
    config: AxisConfig | None = None,
) -> dict[Side, Axis | None]:
    """Draw each axis independently; one failing axis does not stop the others."""
    drawn: dict[Side, Axis | None] = {}
    for side, (mapping, spec) in axes.items():
        try:
            drawn[side] = draw_axis(context, mapping, spec, side, frame, style=style, config=config)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("%s axis failed to draw: %s", side, exc)
            drawn[side] = None
    return drawn
