"""Demand planning engine.

Turns a history of per-period demand into utilization against a capacity
and a recommended capacity for a target utilization. Every operation is a
pure function of its arguments: nothing is cached between calls, numeric
input is sanitized rather than rejected, and empty input gives empty or
zero-valued output.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.numeric import bounded, sanitize, sanitize_count
from ..models.demand import (
    DemandObservation,
    PlanningParameters,
    PlanningRow,
    PlanningSummary,
)
from ..utils.logger import setup_logger

# Default capacity policy: 80th percentile (nearest rank) plus 15% headroom
DEFAULT_CAPACITY_PERCENTILE = 0.8
DEFAULT_CAPACITY_HEADROOM = 1.15
FALLBACK_CAPACITY = 100.0

# Capacity input range: never below 10, otherwise twice the observed peak
MIN_CAPACITY_MAX = 10.0
CAPACITY_MAX_FACTOR = 2.0


def _mean(values: Sequence[float]) -> float:
    total = sum(values)
    if math.isinf(total):
        # Sum of near-maximal values overflows; divide first instead
        return bounded(sum(value / len(values) for value in values))
    return total / len(values)


@dataclass
class PlanningResult:
    """Rows, summary and input bounds for one planning request."""
    parameters: PlanningParameters
    rows: List[PlanningRow] = field(default_factory=list)
    summary: PlanningSummary = field(default_factory=PlanningSummary)
    default_capacity: float = FALLBACK_CAPACITY
    capacity_max: float = MIN_CAPACITY_MAX

    def to_dict(self) -> Dict[str, Any]:
        return {
            'parameters': self.parameters.to_dict(),
            'default_capacity': self.default_capacity,
            'capacity_max': self.capacity_max,
            'summary': self.summary.to_dict(),
            'rows': [dict(row.to_dict(), utilization_pct=row.utilization_pct)
                     for row in self.rows],
        }


class DemandPlanningEngine:
    """Stateless demand/capacity/utilization calculator."""

    def __init__(self):
        self.logger = setup_logger(self.__class__.__name__)

    def derive_default_capacity(self, observations: Sequence[DemandObservation]) -> float:
        """Starting capacity sized to the 80th percentile of demand plus headroom.

        Spikes above the 80th percentile are treated as overflow rather than
        provisioned for.
        """
        values = sorted(
            value for value in (sanitize(obs.item_count) for obs in observations or [])
            if value > 0
        )
        if not values:
            return FALLBACK_CAPACITY

        rank = min(int(math.floor(DEFAULT_CAPACITY_PERCENTILE * len(values))), len(values) - 1)
        capacity = max(1, math.ceil(bounded(values[rank] * DEFAULT_CAPACITY_HEADROOM)))

        self.logger.debug(f"Default capacity {capacity} from {len(values)} periods (p80={values[rank]})")
        return float(capacity)

    def compute_capacity_max(
        self,
        observations: Sequence[DemandObservation],
        rows: Optional[Sequence[PlanningRow]] = None
    ) -> float:
        """Upper bound for the capacity input.

        Args:
            observations: Demand history
            rows: Most recently computed rows; their adjusted demand depends
                on the multiplier, so pass fresh rows after it changes

        Returns:
            max(10, ceil(2 * max(peak baseline, peak adjusted)))
        """
        peak_baseline = max((sanitize(obs.item_count) for obs in observations or []), default=0.0)
        peak_adjusted = max((sanitize(row.adjusted_demand) for row in rows or []), default=0.0)
        peak = max(peak_baseline, peak_adjusted)
        return float(max(MIN_CAPACITY_MAX, math.ceil(bounded(CAPACITY_MAX_FACTOR * peak))))

    def compute_rows(
        self,
        observations: Sequence[DemandObservation],
        parameters: PlanningParameters
    ) -> List[PlanningRow]:
        """Compute one planning row per observation, in input order."""
        params = parameters.clamped()
        capacity = params.capacity
        multiplier = params.demand_multiplier
        target = params.target_utilization

        rows = []
        for obs in observations or []:
            baseline = sanitize(obs.item_count)
            adjusted = bounded(baseline * multiplier)
            rows.append(PlanningRow(
                period=str(obs.period or ""),
                orders=sanitize_count(obs.order_count),
                revenue=sanitize(obs.revenue),
                baseline_demand=baseline,
                adjusted_demand=adjusted,
                capacity=capacity,
                utilization=bounded(adjusted / capacity) if capacity > 0 else 0.0,
                recommended_capacity=bounded(adjusted / target) if target > 0 else 0.0,
            ))

        self.logger.debug(
            f"Computed {len(rows)} rows (capacity={capacity}, "
            f"multiplier={multiplier}, target={target})"
        )
        return rows

    def compute_summary(self, rows: Sequence[PlanningRow]) -> PlanningSummary:
        """Reduce planning rows to peak and average figures."""
        rows = list(rows or [])
        if not rows:
            return PlanningSummary()

        adjusted = [sanitize(row.adjusted_demand) for row in rows]
        utilization = [sanitize(row.utilization) for row in rows]

        # All rows share one target, so the largest recommendation belongs
        # to the peak-demand period.
        return PlanningSummary(
            periods=len(rows),
            capacity=sanitize(rows[0].capacity),
            peak_adjusted_demand=max(adjusted),
            average_adjusted_demand=_mean(adjusted),
            peak_utilization=max(utilization),
            average_utilization=_mean(utilization),
            recommended_capacity_for_peak=max(sanitize(row.recommended_capacity) for row in rows),
        )

    def plan(
        self,
        observations: Sequence[DemandObservation],
        parameters: Optional[PlanningParameters] = None
    ) -> PlanningResult:
        """Run a full planning pass.

        A ``None`` capacity is replaced by :meth:`derive_default_capacity`.
        """
        observations = list(observations or [])
        parameters = parameters or PlanningParameters()

        default_capacity = self.derive_default_capacity(observations)
        if parameters.capacity is None:
            parameters = PlanningParameters(
                capacity=default_capacity,
                demand_multiplier=parameters.demand_multiplier,
                target_utilization=parameters.target_utilization,
            )
        parameters = parameters.clamped()

        rows = self.compute_rows(observations, parameters)
        return PlanningResult(
            parameters=parameters,
            rows=rows,
            summary=self.compute_summary(rows),
            default_capacity=default_capacity,
            capacity_max=self.compute_capacity_max(observations, rows),
        )
