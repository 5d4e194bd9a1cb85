from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np

from luvatrix_axis import AxisConfig, AxisError, LinearDensity, LinearMapping, register_strategy, strategy_for
from luvatrix_axis import density
from luvatrix_axis.density import generate_linear, guess_linear_index, linear_step
from luvatrix_axis.formatting import decimal_exponent, decimal_step, format_default, format_plain, format_scientific
from luvatrix_axis.scales import Interval


class StepDecodingTests(unittest.TestCase):
    def test_index_decomposes_into_exponent_and_multiplier(self) -> None:
        self.assertEqual(decimal_step(0), (0, Decimal(1)))
        self.assertEqual(decimal_step(4), (1, Decimal(20)))
        self.assertEqual(decimal_step(-1), (-1, Decimal("0.5")))
        self.assertEqual(decimal_step(-3), (-1, Decimal("0.1")))

    def test_step_is_strictly_increasing_in_index(self) -> None:
        steps = [linear_step(i) for i in range(-30, 31)]
        self.assertTrue(all(b > a for a, b in zip(steps, steps[1:])))

    def test_decimal_exponent(self) -> None:
        self.assertEqual(decimal_exponent(97.0), 1)
        self.assertEqual(decimal_exponent(1000.0), 3)
        self.assertEqual(decimal_exponent(0.001), -3)
        self.assertEqual(decimal_exponent(-4e7), 7)
        with self.assertRaises(ValueError):
            decimal_exponent(0.0)

    def test_guess_tracks_width_magnitude(self) -> None:
        self.assertEqual(guess_linear_index(Interval(0, 97)), 3)
        self.assertEqual(guess_linear_index(Interval(97, 0)), 3)
        self.assertEqual(guess_linear_index(Interval(1e7, 5e7)), 21)
        self.assertEqual(guess_linear_index(Interval(0.1, 0.3)), -3)


class FormattingTests(unittest.TestCase):
    def test_plain_uses_fixed_digits(self) -> None:
        self.assertEqual(format_plain(Decimal("30"), 0), "30")
        self.assertEqual(format_plain(Decimal("1.0"), 1), "1.0")
        self.assertEqual(format_plain(Decimal("0.05"), 2), "0.05")
        self.assertEqual(format_plain(Decimal("-0.0"), 1), "0.0")

    def test_scientific(self) -> None:
        self.assertEqual(format_scientific(Decimal("1E+7"), 7, 0), "1e7")
        self.assertEqual(format_scientific(Decimal("15E+6"), 7, 1), "1.5e7")
        self.assertEqual(format_scientific(Decimal("3E-6"), -6, 0), "3e-6")

    def test_default_formatting(self) -> None:
        self.assertEqual(format_default(5.0), "5")
        self.assertEqual(format_default(2.5), "2.5")
        self.assertEqual(format_default(-0.0), "0")
        self.assertEqual(format_default(1e12), "1.0000e+12")


class GenerateLinearTests(unittest.TestCase):
    def test_integer_steps_on_positive_domain(self) -> None:
        axis = generate_linear(Interval(0, 97), 3)
        self.assertEqual(axis.positions, tuple(float(v) for v in range(0, 91, 10)))
        self.assertEqual(axis.marks, tuple(str(v) for v in range(0, 91, 10)))

    def test_reversed_domain_iterates_descending(self) -> None:
        axis = generate_linear(Interval(97, 0), 4)
        self.assertEqual(axis.positions, (80.0, 60.0, 40.0, 20.0, 0.0))
        self.assertEqual(axis.marks, ("80", "60", "40", "20", "0"))

    def test_decimal_endpoints_are_hit_exactly(self) -> None:
        axis = generate_linear(Interval(0.1, 0.3), -3)
        self.assertEqual(axis.positions, (0.1, 0.2, 0.3))
        self.assertEqual(axis.marks, ("0.1", "0.2", "0.3"))

    def test_negative_index_straddling_zero(self) -> None:
        axis = generate_linear(Interval(-1, 1), -2)
        self.assertEqual(len(axis), 11)
        self.assertEqual(axis.marks[0], "-1.0")
        self.assertEqual(axis.marks[5], "0.0")
        self.assertEqual(axis.marks[-1], "1.0")

    def test_large_magnitudes_switch_to_scientific(self) -> None:
        axis = generate_linear(Interval(1e7, 5e7), 21)
        self.assertEqual(axis.marks, ("1e7", "2e7", "3e7", "4e7", "5e7"))
        finer = generate_linear(Interval(1e7, 5e7), 20)
        self.assertEqual(finer.marks[:3], ("1.0e7", "1.5e7", "2.0e7"))

    def test_small_magnitudes_switch_to_scientific(self) -> None:
        axis = generate_linear(Interval(0, 3e-6), -18)
        self.assertEqual(axis.marks, ("0e-6", "1e-6", "2e-6", "3e-6"))

    def test_exponent_thresholds_are_configurable(self) -> None:
        axis = generate_linear(Interval(1e7, 5e7), 21, max_exponent=8)
        self.assertEqual(axis.marks[0], "10000000")

    def test_step_wider_than_domain_can_yield_no_ticks(self) -> None:
        axis = generate_linear(Interval(1, 9), 6)
        self.assertEqual(len(axis), 0)

    def test_positions_never_leave_domain(self) -> None:
        rng = np.random.default_rng(7)
        for _ in range(200):
            a, b = rng.uniform(-1e3, 1e3, size=2) * 10.0 ** rng.integers(-4, 4)
            if a == b:
                continue
            domain = Interval(float(a), float(b))
            guess = guess_linear_index(domain)
            for index in range(guess - 4, guess + 3):
                axis = generate_linear(domain, index)
                for position in axis.positions:
                    self.assertGreaterEqual(position, domain.lower)
                    self.assertLessEqual(position, domain.upper)

    def test_plain_labels_round_trip(self) -> None:
        for domain in (Interval(-3.7, 12.2), Interval(0.013, 0.029), Interval(850, 120)):
            guess = guess_linear_index(domain)
            for index in range(guess - 3, guess + 2):
                exp10, _ = decimal_step(index)
                tolerance = 0.5 * 10.0 ** min(0, exp10) + 1e-12
                for position, mark in generate_linear(domain, index):
                    self.assertAlmostEqual(float(mark), position, delta=tolerance)


class StrategyRegistryTests(unittest.TestCase):
    def test_linear_mapping_gets_linear_density_with_config_thresholds(self) -> None:
        mapping = LinearMapping(domain=Interval(0, 1), plane=Interval(0, 100))
        strategy = strategy_for(mapping, AxisConfig(min_exponent=-2, max_exponent=2))
        self.assertIsInstance(strategy, LinearDensity)
        self.assertEqual((strategy.min_exponent, strategy.max_exponent), (-2, 2))

    def test_linear_density_reports_caller_bounds(self) -> None:
        mapping = LinearMapping(domain=Interval(0, 97), plane=Interval(0, 100))
        self.assertEqual(LinearDensity().guess_index(mapping), (3, None, None))
        self.assertEqual(LinearDensity(min_index=2, max_index=9).guess_index(mapping), (3, 2, 9))

    def test_configured_applies_thresholds_and_keeps_bounds(self) -> None:
        strategy = LinearDensity(min_index=2, max_index=9).configured(AxisConfig(min_exponent=-2, max_exponent=8))
        self.assertEqual(strategy, LinearDensity(min_index=2, max_index=9, min_exponent=-2, max_exponent=8))

    def test_unknown_kind_is_rejected(self) -> None:
        class PolarMapping:
            kind = "polar"
            domain = Interval(0, 1)

            def map(self, value: float) -> float:
                return value

        with self.assertRaises(AxisError):
            strategy_for(PolarMapping())

    def test_registered_kind_is_dispatched(self) -> None:
        class SquaredMapping:
            kind = "squared"
            domain = Interval(0, 10)

            def map(self, value: float) -> float:
                return value * value

        self.addCleanup(density._STRATEGIES.pop, "squared", None)
        register_strategy("squared", lambda config: LinearDensity(min_index=0))
        strategy = strategy_for(SquaredMapping())
        self.assertEqual(strategy.guess_index(SquaredMapping()), (3, 0, None))


if __name__ == "__main__":
    unittest.main()
