"""SupplyPlanner: demand and capacity planning for order histories."""

from .models.demand import (
    DemandObservation,
    PlanningParameters,
    PlanningRow,
    PlanningSummary,
)
from .planning.engine import DemandPlanningEngine, PlanningResult
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "DemandObservation",
    "PlanningParameters",
    "PlanningRow",
    "PlanningSummary",
    "DemandPlanningEngine",
    "PlanningResult",
    "setup_logger",
]
