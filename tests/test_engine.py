"""Tests for the demand planning engine."""

import math
import sys
import unittest

from supplyplanner.core.numeric import bounded, sanitize
from supplyplanner.models.demand import (
    DemandObservation,
    PlanningParameters,
    PlanningRow,
    PlanningSummary,
)
from supplyplanner.planning.engine import DemandPlanningEngine


def make_series(item_counts, start_day=1):
    return [
        DemandObservation(
            period=f"2024-01-{start_day + i:02d}",
            order_count=1,
            item_count=items,
            revenue=items * 10.0,
        )
        for i, items in enumerate(item_counts)
    ]


def make_row(adjusted, capacity, target):
    return PlanningRow(
        period="2024-01-01",
        orders=1,
        revenue=0.0,
        baseline_demand=adjusted,
        adjusted_demand=adjusted,
        capacity=capacity,
        utilization=adjusted / capacity,
        recommended_capacity=adjusted / target,
    )


class TestDefaultCapacity(unittest.TestCase):
    """Test cases for derive_default_capacity."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = DemandPlanningEngine()

    def test_eightieth_percentile_with_headroom(self):
        """Ten periods pick rank 8 (value 90) and add 15%."""
        series = make_series([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])
        self.assertEqual(self.engine.derive_default_capacity(series), 104)

    def test_input_order_does_not_matter(self):
        series = make_series([100, 10, 90, 20, 80, 30, 70, 40, 60, 50])
        self.assertEqual(self.engine.derive_default_capacity(series), 104)

    def test_empty_input_falls_back(self):
        self.assertEqual(self.engine.derive_default_capacity([]), 100)

    def test_only_zero_demand_falls_back(self):
        series = make_series([0, 0, 0])
        self.assertEqual(self.engine.derive_default_capacity(series), 100)

    def test_single_observation(self):
        """Rank floor(0.8) = 0 selects the only value."""
        series = make_series([10])
        self.assertEqual(self.engine.derive_default_capacity(series), math.ceil(10 * 1.15))

    def test_tiny_demand_floors_at_one(self):
        series = [DemandObservation(period="2024-01-01", item_count=0.5)]
        self.assertEqual(self.engine.derive_default_capacity(series), 1)

    def test_non_finite_values_are_ignored(self):
        series = make_series([float('nan'), float('inf'), -5, 30])
        self.assertEqual(self.engine.derive_default_capacity(series), 35)

    def test_spike_is_not_provisioned_for(self):
        """A single extreme period does not drive the default capacity."""
        series = make_series([10] * 9 + [1000])
        self.assertEqual(self.engine.derive_default_capacity(series), 12)
        series = make_series([10] * 19 + [1000])
        self.assertEqual(self.engine.derive_default_capacity(series), 12)

    def test_extreme_values_stay_finite(self):
        capacity = self.engine.derive_default_capacity(make_series([1e308]))
        self.assertTrue(math.isfinite(capacity))
        self.assertGreater(capacity, 1e308)

        capacity = self.engine.derive_default_capacity(make_series([1.6e308]))
        self.assertEqual(capacity, sys.float_info.max)

    def test_integer_too_large_for_float_is_zero(self):
        series = [DemandObservation(period="2024-01-01", item_count=10 ** 400)]
        self.assertEqual(self.engine.derive_default_capacity(series), 100)


class TestCapacityMax(unittest.TestCase):
    """Test cases for compute_capacity_max."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = DemandPlanningEngine()

    def test_empty_input(self):
        self.assertEqual(self.engine.compute_capacity_max([]), 10)

    def test_twice_the_baseline_peak(self):
        series = make_series([10, 40, 25])
        self.assertEqual(self.engine.compute_capacity_max(series), 80)

    def test_minimum_of_ten(self):
        series = make_series([1, 2, 3])
        self.assertEqual(self.engine.compute_capacity_max(series), 10)

    def test_follows_multiplier_through_rows(self):
        series = make_series([10, 40, 25])
        params = PlanningParameters(capacity=50, demand_multiplier=1.5)
        rows = self.engine.compute_rows(series, params)

        self.assertEqual(self.engine.compute_capacity_max(series, rows), 120)

    def test_shrinking_multiplier_keeps_baseline_bound(self):
        series = make_series([10, 40, 25])
        params = PlanningParameters(capacity=50, demand_multiplier=0.5)
        rows = self.engine.compute_rows(series, params)

        self.assertEqual(self.engine.compute_capacity_max(series, rows), 80)

    def test_extreme_peak_is_capped(self):
        series = make_series([1e308])
        self.assertEqual(self.engine.compute_capacity_max(series), sys.float_info.max)

        rows = self.engine.compute_rows(series, PlanningParameters(capacity=10, demand_multiplier=10))
        self.assertEqual(self.engine.compute_capacity_max(series, rows), sys.float_info.max)

    def test_integer_too_large_for_float_is_zero(self):
        series = [DemandObservation(period="2024-01-01", item_count=10 ** 400)]
        self.assertEqual(self.engine.compute_capacity_max(series), 10)


class TestComputeRows(unittest.TestCase):
    """Test cases for compute_rows."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = DemandPlanningEngine()
        self.series = make_series([30, 60, 90])
        self.params = PlanningParameters(capacity=60, demand_multiplier=1.0,
                                         target_utilization=0.5)

    def test_row_values(self):
        rows = self.engine.compute_rows(self.series, self.params)

        self.assertEqual(len(rows), 3)
        self.assertEqual([row.baseline_demand for row in rows], [30, 60, 90])
        self.assertEqual([row.adjusted_demand for row in rows], [30, 60, 90])
        self.assertEqual([row.utilization for row in rows], [0.5, 1.0, 1.5])
        self.assertEqual([row.recommended_capacity for row in rows], [60, 120, 180])
        self.assertEqual([row.capacity for row in rows], [60, 60, 60])

    def test_carries_orders_and_revenue(self):
        rows = self.engine.compute_rows(self.series, self.params)

        self.assertEqual(rows[1].period, "2024-01-02")
        self.assertEqual(rows[1].orders, 1)
        self.assertEqual(rows[1].revenue, 600.0)

    def test_deterministic(self):
        first = self.engine.compute_rows(self.series, self.params)
        second = self.engine.compute_rows(self.series, self.params)
        self.assertEqual(first, second)

    def test_order_preserved(self):
        series = list(reversed(make_series([5, 15, 25, 35])))
        rows = self.engine.compute_rows(series, self.params)

        self.assertEqual([row.period for row in rows], [obs.period for obs in series])

    def test_zero_capacity_gives_zero_utilization(self):
        series = [DemandObservation(period="2024-01-01", order_count=1,
                                    item_count=50, revenue=500)]
        params = PlanningParameters(capacity=0, demand_multiplier=1,
                                    target_utilization=0.8)
        rows = self.engine.compute_rows(series, params)

        self.assertEqual(rows[0].utilization, 0)
        self.assertEqual(rows[0].recommended_capacity, 62.5)

    def test_multiplier_clamped_high(self):
        rows = self.engine.compute_rows(
            self.series, PlanningParameters(capacity=60, demand_multiplier=50))
        self.assertEqual(rows[0].adjusted_demand, 300)

    def test_multiplier_clamped_low(self):
        rows = self.engine.compute_rows(
            self.series, PlanningParameters(capacity=60, demand_multiplier=0))
        self.assertAlmostEqual(rows[0].adjusted_demand, 3.0)

    def test_target_utilization_floor(self):
        rows = self.engine.compute_rows(
            self.series, PlanningParameters(capacity=60, target_utilization=0))

        self.assertAlmostEqual(rows[0].recommended_capacity, 30 / 0.01)
        self.assertTrue(all(math.isfinite(row.recommended_capacity) for row in rows))

    def test_target_utilization_ceiling(self):
        rows = self.engine.compute_rows(
            self.series, PlanningParameters(capacity=60, target_utilization=3))
        self.assertEqual(rows[2].recommended_capacity, 90)

    def test_malformed_parameters_never_produce_nan(self):
        params = PlanningParameters(capacity=float('nan'),
                                    demand_multiplier=float('inf'),
                                    target_utilization=-1)
        rows = self.engine.compute_rows(self.series, params)

        for row in rows:
            for value in (row.adjusted_demand, row.utilization, row.recommended_capacity):
                self.assertTrue(math.isfinite(value))
                self.assertGreaterEqual(value, 0)
        self.assertEqual(rows[0].utilization, 0)

    def test_malformed_observation_fields_are_zero(self):
        series = [DemandObservation(period="2024-01-01", order_count=float('nan'),
                                    item_count=-7, revenue=float('inf'))]
        rows = self.engine.compute_rows(series, self.params)

        self.assertEqual(rows[0].orders, 0)
        self.assertEqual(rows[0].baseline_demand, 0)
        self.assertEqual(rows[0].revenue, 0)

    def test_extreme_demand_stays_finite(self):
        series = [DemandObservation(period="2024-01-01", order_count=1, item_count=1e308)]
        rows = self.engine.compute_rows(series, PlanningParameters(capacity=10, demand_multiplier=10))

        row = rows[0]
        self.assertEqual(row.adjusted_demand, sys.float_info.max)
        for value in (row.utilization, row.recommended_capacity, row.utilization_pct):
            self.assertTrue(math.isfinite(value))

    def test_tiny_capacity_stays_finite(self):
        rows = self.engine.compute_rows(self.series, PlanningParameters(capacity=1e-310))
        self.assertTrue(all(math.isfinite(row.utilization) for row in rows))

    def test_integer_too_large_for_float_is_zero(self):
        series = [DemandObservation(period="2024-01-01", order_count=10 ** 400,
                                    item_count=10 ** 400, revenue=10 ** 400)]
        rows = self.engine.compute_rows(series, self.params)

        self.assertEqual(rows[0].orders, 0)
        self.assertEqual(rows[0].baseline_demand, 0)
        self.assertEqual(rows[0].revenue, 0)

    def test_empty_input(self):
        self.assertEqual(self.engine.compute_rows([], self.params), [])


class TestComputeSummary(unittest.TestCase):
    """Test cases for compute_summary."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = DemandPlanningEngine()

    def test_aggregation(self):
        rows = [make_row(adjusted, 60, 0.5) for adjusted in (30, 60, 90)]
        summary = self.engine.compute_summary(rows)

        self.assertEqual(summary.periods, 3)
        self.assertEqual(summary.capacity, 60)
        self.assertEqual(summary.peak_adjusted_demand, 90)
        self.assertEqual(summary.average_adjusted_demand, 60)
        self.assertEqual(summary.peak_utilization, 1.5)
        self.assertEqual(summary.average_utilization, 1.0)
        self.assertEqual(summary.recommended_capacity_for_peak, 180)

    def test_extreme_rows_stay_finite(self):
        series = make_series([1e308, 1e308])
        rows = self.engine.compute_rows(series, PlanningParameters(capacity=10, demand_multiplier=10))
        summary = self.engine.compute_summary(rows)

        for value in (summary.peak_adjusted_demand, summary.average_adjusted_demand,
                      summary.peak_utilization, summary.average_utilization,
                      summary.recommended_capacity_for_peak):
            self.assertTrue(math.isfinite(value))

    def test_empty_rows(self):
        summary = self.engine.compute_summary([])

        self.assertEqual(summary, PlanningSummary())
        self.assertEqual(summary.peak_adjusted_demand, 0)
        self.assertEqual(summary.average_adjusted_demand, 0)
        self.assertEqual(summary.peak_utilization, 0)
        self.assertEqual(summary.average_utilization, 0)
        self.assertEqual(summary.recommended_capacity_for_peak, 0)


class TestPlan(unittest.TestCase):
    """Test cases for the full planning pass."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = DemandPlanningEngine()
        self.series = make_series([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

    def test_missing_capacity_uses_default(self):
        result = self.engine.plan(self.series, PlanningParameters())

        self.assertEqual(result.default_capacity, 104)
        self.assertEqual(result.parameters.capacity, 104)
        self.assertTrue(all(row.capacity == 104 for row in result.rows))

    def test_explicit_capacity_wins(self):
        result = self.engine.plan(self.series, PlanningParameters(capacity=200))

        self.assertEqual(result.parameters.capacity, 200)
        self.assertEqual(result.summary.peak_utilization, 0.5)
        self.assertEqual(result.capacity_max, 200)

    def test_parameters_reported_clamped(self):
        result = self.engine.plan(self.series, PlanningParameters(
            capacity=-3, demand_multiplier=99, target_utilization=0))

        self.assertEqual(result.parameters.capacity, 0)
        self.assertEqual(result.parameters.demand_multiplier, 10)
        self.assertEqual(result.parameters.target_utilization, 0.01)
        self.assertEqual(result.capacity_max, 2000)

    def test_empty_plan(self):
        result = self.engine.plan([])

        self.assertEqual(result.rows, [])
        self.assertEqual(result.summary, PlanningSummary())
        self.assertEqual(result.default_capacity, 100)
        self.assertEqual(result.capacity_max, 10)

    def test_to_dict(self):
        data = self.engine.plan(self.series[:2], PlanningParameters(capacity=40)).to_dict()

        self.assertEqual(data['parameters']['capacity'], 40)
        self.assertEqual(data['summary']['periods'], 2)
        self.assertEqual(data['rows'][1]['utilization_pct'], 50.0)
        self.assertEqual(data['rows'][0]['period'], "2024-01-01")


class TestNumeric(unittest.TestCase):
    """Test cases for numeric coercion."""

    def test_sanitize(self):
        self.assertEqual(sanitize(10 ** 400), 0.0)
        self.assertEqual(sanitize("30"), 30.0)
        self.assertEqual(sanitize("many"), 0.0)
        self.assertEqual(sanitize(None), 0.0)
        self.assertEqual(sanitize(-1), 0.0)

    def test_bounded(self):
        self.assertEqual(bounded(float("inf")), sys.float_info.max)
        self.assertEqual(bounded(float("nan")), 0.0)
        self.assertEqual(bounded(12.5), 12.5)


if __name__ == '__main__':
    unittest.main()
