"""Demand planning engine."""

from .engine import DemandPlanningEngine, PlanningResult

__all__ = ["DemandPlanningEngine", "PlanningResult"]
