from luvatrix_axis.axis import AutoAxis, Axis
from luvatrix_axis.config import AxisConfig, AxisStyle, TextStyle
from luvatrix_axis.context import RenderContext
from luvatrix_axis.density import DensityStrategy, LinearDensity, generate_linear, register_strategy, strategy_for
from luvatrix_axis.errors import AxisError, InvalidAxis, MeasurementFailure, UnboundedSearch
from luvatrix_axis.overlap import measure_overlap
from luvatrix_axis.render import TickPlacement, draw_axes, draw_axis, resolve_axis, tick_placements
from luvatrix_axis.scales import Interval, LinearMapping, PlotFrame
from luvatrix_axis.search import AxisCandidate, pick_best_axis, score_candidates

__all__ = [
    "AutoAxis",
    "Axis",
    "AxisCandidate",
    "AxisConfig",
    "AxisError",
    "AxisStyle",
    "DensityStrategy",
    "Interval",
    "InvalidAxis",
    "LinearDensity",
    "LinearMapping",
    "MeasurementFailure",
    "PlotFrame",
    "RenderContext",
    "TextStyle",
    "TickPlacement",
    "UnboundedSearch",
    "draw_axes",
    "draw_axis",
    "generate_linear",
    "measure_overlap",
    "pick_best_axis",
    "register_strategy",
    "resolve_axis",
    "score_candidates",
    "strategy_for",
    "tick_placements",
]
