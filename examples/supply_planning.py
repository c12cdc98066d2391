"""Supply planning example - what-if sweep over demand growth."""

import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List

import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from supplyplanner.capacity_planning import ReportWriter, SupplyPlanner
from supplyplanner.utils.logger import setup_logger
from supplyplanner.utils.visualization import plot_results


def generate_orders(num_days: int = 120, seed: int = 42) -> List[Dict]:
    """Generate synthetic order records with a weekly pattern.

    Args:
        num_days: Number of days of history
        seed: Random seed

    Returns:
        List of order dictionaries
    """
    rng = np.random.default_rng(seed)
    start = date(2024, 1, 1)
    orders = []

    for offset in range(num_days):
        day = start + timedelta(days=offset)
        # Weekends are busier
        rate = 14 if day.weekday() >= 5 else 8
        for _ in range(rng.poisson(rate)):
            items = int(rng.integers(1, 6))
            orders.append({
                'order_date': f"{day.isoformat()}T12:00:00Z",
                'item_count': items,
                'total': round(items * float(rng.uniform(8, 40)), 2),
            })

    return orders


def sweep_multipliers(planner: SupplyPlanner, multipliers: List[float]) -> None:
    """Show how peak utilization and recommended capacity move with demand growth.

    Args:
        planner: Supply planner with loaded history
        multipliers: Demand multipliers to try
    """
    logger = setup_logger("SupplyPlanningExample")
    logger.info("=== Demand Growth Sweep (daily) ===")

    for multiplier in multipliers:
        planner.demand_multiplier = multiplier
        summary = planner.plan('daily')['summary']
        logger.info(
            f"x{multiplier:.2f}: peak util {summary['peak_utilization']:.0%}, "
            f"avg util {summary['average_utilization']:.0%}, "
            f"recommended {summary['recommended_capacity_for_peak']:.0f} items/day"
        )


def main():
    """Main function."""
    output_dir = Path("results/supply_planning")

    planner = SupplyPlanner.from_orders(generate_orders())
    sweep_multipliers(planner, [0.8, 1.0, 1.2, 1.5])

    planner.demand_multiplier = 1.0
    results = planner.plan_all()
    planner.save_report(results, str(output_dir / "plan.json"))
    plot_results(results, output_dir)

    writer = ReportWriter()
    print(writer.generate_summary(results))
    print(writer.generate_rows_table(results['plans']['weekly']['rows']))


if __name__ == "__main__":
    main()
