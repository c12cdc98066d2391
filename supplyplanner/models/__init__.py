"""Planning data model."""

from .demand import (
    DemandObservation,
    PlanningParameters,
    PlanningRow,
    PlanningSummary,
)

__all__ = [
    "DemandObservation",
    "PlanningParameters",
    "PlanningRow",
    "PlanningSummary",
]
