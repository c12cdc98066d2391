"""Supply planning module for SupplyPlanner."""

from .planner import SupplyPlanner, run_supply_planning
from .report_writer import ReportWriter

__all__ = ['SupplyPlanner', 'run_supply_planning', 'ReportWriter']
