"""Demand observations and the planning entities derived from them."""

from dataclasses import dataclass, replace
from typing import Optional

from dataclasses_json import dataclass_json

from ..core.numeric import bounded, clamp, sanitize

# Bounds enforced on operator input before any computation
MIN_DEMAND_MULTIPLIER = 0.1
MAX_DEMAND_MULTIPLIER = 10.0
MIN_TARGET_UTILIZATION = 0.01
MAX_TARGET_UTILIZATION = 1.0

DEFAULT_DEMAND_MULTIPLIER = 1.0
DEFAULT_TARGET_UTILIZATION = 0.8


@dataclass_json
@dataclass(frozen=True)
class DemandObservation:
    """Observed demand for one calendar period (day or ISO week)."""
    period: str
    order_count: int = 0
    item_count: int = 0
    revenue: float = 0.0


@dataclass_json
@dataclass(frozen=True)
class PlanningParameters:
    """Operator-tunable what-if inputs.

    ``capacity`` of ``None`` means the operator has not picked one yet; the
    engine then derives a default from the observed history.
    """
    capacity: Optional[float] = None
    demand_multiplier: float = DEFAULT_DEMAND_MULTIPLIER
    target_utilization: float = DEFAULT_TARGET_UTILIZATION

    def clamped(self) -> "PlanningParameters":
        """Return a copy with every field sanitized into its valid range."""
        return replace(
            self,
            capacity=sanitize(self.capacity),
            demand_multiplier=clamp(self.demand_multiplier,
                                    MIN_DEMAND_MULTIPLIER, MAX_DEMAND_MULTIPLIER),
            target_utilization=clamp(self.target_utilization,
                                     MIN_TARGET_UTILIZATION, MAX_TARGET_UTILIZATION),
        )


@dataclass_json
@dataclass(frozen=True)
class PlanningRow:
    """Per-period planning output."""
    period: str
    orders: int
    revenue: float
    baseline_demand: float
    adjusted_demand: float
    capacity: float
    utilization: float
    recommended_capacity: float

    @property
    def utilization_pct(self) -> float:
        return bounded(self.utilization * 100)


@dataclass_json
@dataclass(frozen=True)
class PlanningSummary:
    """Aggregate over a full set of planning rows."""
    periods: int = 0
    capacity: float = 0.0
    peak_adjusted_demand: float = 0.0
    average_adjusted_demand: float = 0.0
    peak_utilization: float = 0.0
    average_utilization: float = 0.0
    recommended_capacity_for_peak: float = 0.0
