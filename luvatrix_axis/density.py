from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, localcontext
from typing import Callable

from luvatrix_axis.axis import Axis
from luvatrix_axis.config import DEFAULT_MAX_EXPONENT, DEFAULT_MIN_EXPONENT, AxisConfig
from luvatrix_axis.errors import AxisError
from luvatrix_axis.formatting import decimal_exponent, decimal_step, format_plain, format_scientific
from luvatrix_axis.scales import AxisMapping, Interval


IndexGuess = tuple[int, int | None, int | None]
StrategyFactory = Callable[[AxisConfig], "DensityStrategy"]

# Enough digits for i * step to stay exact for any tick count the search can produce.
_DECIMAL_PRECISION = 60


class DensityStrategy(ABC):
    """Per-mapping-kind notion of tick density.

    ``guess_index`` gives a starting density index and optional hard bounds;
    ``generate`` must be a pure function of ``(mapping, index)``.
    """

    @abstractmethod
    def guess_index(self, mapping: AxisMapping) -> IndexGuess:
        raise NotImplementedError

    @abstractmethod
    def generate(self, mapping: AxisMapping, index: int) -> Axis:
        raise NotImplementedError

    def configured(self, config: AxisConfig) -> "DensityStrategy":
        """Return this strategy with the label settings of ``config`` applied."""
        return self


@dataclass(frozen=True)
class LinearDensity(DensityStrategy):
    min_index: int | None = None
    max_index: int | None = None
    min_exponent: int = DEFAULT_MIN_EXPONENT
    max_exponent: int = DEFAULT_MAX_EXPONENT

    @classmethod
    def from_config(cls, config: AxisConfig) -> "LinearDensity":
        return cls(min_exponent=config.min_exponent, max_exponent=config.max_exponent)

    def configured(self, config: AxisConfig) -> "LinearDensity":
        return replace(self, min_exponent=config.min_exponent, max_exponent=config.max_exponent)

    def guess_index(self, mapping: AxisMapping) -> IndexGuess:
        return (guess_linear_index(mapping.domain), self.min_index, self.max_index)

    def generate(self, mapping: AxisMapping, index: int) -> Axis:
        return generate_linear(
            mapping.domain,
            index,
            min_exponent=self.min_exponent,
            max_exponent=self.max_exponent,
        )


def guess_linear_index(domain: Interval) -> int:
    return 3 * decimal_exponent(domain.width)


def linear_step(index: int) -> float:
    return float(decimal_step(index)[1])


def generate_linear(
    domain: Interval,
    index: int,
    *,
    min_exponent: int = DEFAULT_MIN_EXPONENT,
    max_exponent: int = DEFAULT_MAX_EXPONENT,
) -> Axis:
    """Ticks at every multiple of the index's step inside ``domain``, in domain order."""
    exp10, step = decimal_step(index)
    max_abs = max(abs(domain.left), abs(domain.right))
    magnitude = decimal_exponent(max_abs) if max_abs > 0 else None
    # Exponent shared by every label, or None for plain labels.
    sci_exponent = magnitude if magnitude is not None and not min_exponent <= magnitude <= max_exponent else None

    positions: list[float] = []
    marks: list[str | None] = []
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        left = Decimal(str(domain.left)) / step
        right = Decimal(str(domain.right)) / step
        if domain.positive:
            first = int(left.to_integral_value(rounding=ROUND_CEILING))
            last = int(right.to_integral_value(rounding=ROUND_FLOOR))
            indices = range(first, last + 1)
        else:
            first = int(left.to_integral_value(rounding=ROUND_FLOOR))
            last = int(right.to_integral_value(rounding=ROUND_CEILING))
            indices = range(first, last - 1, -1)

        for i in indices:
            value = Decimal(i) * step
            position = float(value)
            if not domain.contains(position):
                continue
            positions.append(position)
            if sci_exponent is None:
                marks.append(format_plain(value, -exp10))
            else:
                marks.append(format_scientific(value, sci_exponent, sci_exponent - exp10))
    return Axis(positions=tuple(positions), marks=tuple(marks))


_STRATEGIES: dict[str, StrategyFactory] = {
    "linear": LinearDensity.from_config,
}


def register_strategy(kind: str, factory: StrategyFactory) -> None:
    if not kind:
        raise ValueError("mapping kind must be a non-empty string")
    _STRATEGIES[kind] = factory


def strategy_for(mapping: AxisMapping, config: AxisConfig | None = None) -> DensityStrategy:
    kind = getattr(mapping, "kind", None)
    factory = _STRATEGIES.get(kind) if isinstance(kind, str) else None
    if factory is None:
        raise AxisError(f"no density strategy registered for mapping kind: {kind!r}")
    return factory(config or AxisConfig())
