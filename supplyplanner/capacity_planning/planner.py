"""
Supply planning module - orchestrates demand series loading, planning runs
for each granularity, and report generation.
"""
from pathlib import Path
from typing import Dict, Any, Iterable, List, Mapping, Optional
from datetime import datetime, timezone

from configs import load_planning_config
from ..models.demand import DemandObservation, PlanningParameters
from ..planning.engine import DemandPlanningEngine
from ..workload.demand_series import (
    aggregate_daily_series,
    bucket_weekly,
    build_weekly_series,
    retain_positive,
)
from ..workload.series_loader import SeriesLoader
from ..utils.io import save_json
from ..utils.logger import setup_logger

GRANULARITIES = ('daily', 'weekly')


class SupplyPlanner:
    """
    Orchestrates the supply planning workflow:
    1. Hold daily and weekly demand series
    2. Track per-granularity capacity and shared what-if parameters
    3. Run the planning engine and write reports
    """

    def __init__(
        self,
        daily: Iterable[DemandObservation],
        weekly: Optional[Iterable[DemandObservation]] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize supply planner.

        Args:
            daily: Daily demand series
            weekly: Weekly demand series (bucketed from ``daily`` if omitted)
            config: Planning configuration (defaults from configs/default.yaml)
        """
        self.logger = setup_logger("SupplyPlanner")
        self.config = config if config is not None else load_planning_config()
        self.engine = DemandPlanningEngine()

        daily = list(daily or [])
        weekly_limit = self.config.get('series', {}).get('weekly_limit')
        if weekly is None:
            weekly = bucket_weekly(daily, limit_weeks=weekly_limit)

        self.series = {
            'daily': retain_positive(daily),
            'weekly': retain_positive(weekly),
        }

        planning_cfg = self.config.get('planning', {})
        self.demand_multiplier = planning_cfg.get('demand_multiplier', 1.0)
        self.target_utilization = planning_cfg.get('target_utilization', 0.8)

        # Each granularity starts from its own historical default
        configured = planning_cfg.get('capacity') or {}
        self.capacity = {}
        for granularity in GRANULARITIES:
            capacity = configured.get(granularity)
            if capacity is None:
                capacity = self.engine.derive_default_capacity(self.series[granularity])
            self.capacity[granularity] = capacity

        self.logger.info(
            f"Loaded {len(self.series['daily'])} daily and "
            f"{len(self.series['weekly'])} weekly demand periods"
        )

    @classmethod
    def from_orders(
        cls,
        orders: Iterable[Mapping],
        config: Optional[Dict[str, Any]] = None
    ) -> "SupplyPlanner":
        """Build a planner from raw order records."""
        config = config if config is not None else load_planning_config()
        series_cfg = config.get('series', {})
        orders = list(orders or [])

        daily = aggregate_daily_series(orders, limit=series_cfg.get('daily_limit', 90))
        weekly = build_weekly_series(orders, limit_weeks=series_cfg.get('weekly_limit', 26))
        return cls(daily, weekly, config=config)

    @classmethod
    def from_file(
        cls,
        path: str,
        orders: bool = False,
        config: Optional[Dict[str, Any]] = None
    ) -> "SupplyPlanner":
        """Build a planner from a demand series file or, with ``orders``, an order file."""
        loader = SeriesLoader(path)
        if orders:
            return cls.from_orders(loader.load_orders(), config=config)
        return cls(loader.load_observations(), config=config)

    def has_demand(self) -> bool:
        return any(self.series[granularity] for granularity in GRANULARITIES)

    def set_capacity(self, granularity: str, capacity: float):
        """Set the operator capacity for one granularity."""
        self._check_granularity(granularity)
        self.capacity[granularity] = capacity

    def parameters(self, granularity: str) -> PlanningParameters:
        self._check_granularity(granularity)
        return PlanningParameters(
            capacity=self.capacity[granularity],
            demand_multiplier=self.demand_multiplier,
            target_utilization=self.target_utilization,
        )

    def plan(self, granularity: str = 'daily') -> Dict[str, Any]:
        """
        Run the planning engine for one granularity.

        Args:
            granularity: 'daily' or 'weekly'

        Returns:
            JSON-ready plan with rows, summary and capacity bounds
        """
        self._check_granularity(granularity)

        result = self.engine.plan(self.series[granularity], self.parameters(granularity))
        plan = result.to_dict()
        plan['granularity'] = granularity

        summary = result.summary
        self.logger.info(
            f"{granularity}: {summary.periods} periods, peak utilization "
            f"{summary.peak_utilization:.0%}, recommended capacity for peak "
            f"{summary.recommended_capacity_for_peak:.0f}"
        )
        return plan

    def plan_all(self) -> Dict[str, Any]:
        """Run the planning engine for every granularity."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'currency': self.config.get('report', {}).get('currency', 'EUR'),
            'plans': {granularity: self.plan(granularity) for granularity in GRANULARITIES},
        }

    def save_report(self, results: Dict[str, Any], output_path: str):
        """Save supply planning report as JSON."""
        save_json(results, output_path)
        self.logger.info(f"Report saved to: {output_path}")

    def save_summary(self, results: Dict[str, Any], output_path: str):
        """Save human-readable summary."""
        from .report_writer import ReportWriter

        writer = ReportWriter()
        summary = writer.generate_summary(results)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            f.write(summary)

        self.logger.info(f"Summary saved to: {output_path}")

    @staticmethod
    def _check_granularity(granularity: str):
        if granularity not in GRANULARITIES:
            raise ValueError(
                f"Unknown granularity: {granularity!r} (expected one of {', '.join(GRANULARITIES)})"
            )


def run_supply_planning(
    input_path: str,
    output_path: str,
    orders: bool = False,
    config_path: Optional[str] = None,
    capacity: Optional[Dict[str, float]] = None,
    demand_multiplier: Optional[float] = None,
    target_utilization: Optional[float] = None
) -> Dict[str, Any]:
    """
    Simplified interface for running supply planning.

    Args:
        input_path: Path to a demand series (or order records with ``orders``)
        output_path: Path to save the JSON report
        orders: Treat ``input_path`` as raw order records
        config_path: Optional YAML merged over the default configuration
        capacity: Optional capacity per granularity
        demand_multiplier: Optional demand multiplier override
        target_utilization: Optional target utilization override

    Returns:
        Supply planning results
    """
    logger = setup_logger("SupplyPlanning")

    config = load_planning_config(config_path)
    planner = SupplyPlanner.from_file(input_path, orders=orders, config=config)

    for granularity, value in (capacity or {}).items():
        if value is not None:
            planner.set_capacity(granularity, value)
    if demand_multiplier is not None:
        planner.demand_multiplier = demand_multiplier
    if target_utilization is not None:
        planner.target_utilization = target_utilization

    if not planner.has_demand():
        logger.warning("No demand series found (no orders with items)")

    results = planner.plan_all()

    # Save outputs
    planner.save_report(results, output_path)

    # Also save summary
    summary_path = Path(output_path).with_suffix('.txt')
    planner.save_summary(results, str(summary_path))

    logger.info("Supply planning complete!")

    return results
