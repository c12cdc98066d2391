"""
CLI interface for supply planning module.

Usage:
    python -m supplyplanner.capacity_planning --series <path> --output <path>
"""

import sys
import argparse
from pathlib import Path

from .planner import run_supply_planning
from .report_writer import ReportWriter
from ..utils.logger import setup_logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SupplyPlanner Demand & Capacity Planning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan from a pre-aggregated daily demand series
  python -m supplyplanner.capacity_planning \\
    --series data/daily_demand.json \\
    --output results/supply_plan.json

  # Plan from raw order records with a what-if scenario
  python -m supplyplanner.capacity_planning \\
    --orders data/orders.csv \\
    --multiplier 1.2 --target-utilization 0.85 \\
    --capacity-daily 120 \\
    --output results/supply_plan.json --plots results/plots
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--series',
        type=str,
        help='Path to a daily demand series (JSON or CSV)'
    )
    source.add_argument(
        '--orders',
        type=str,
        help='Path to raw order records (JSON or CSV)'
    )

    parser.add_argument(
        '--output',
        type=str,
        required=True,
        help='Path to save supply planning report (JSON)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to planning config YAML (optional)'
    )

    parser.add_argument(
        '--capacity-daily',
        type=float,
        default=None,
        help='Capacity in items per day (default: derived from history)'
    )

    parser.add_argument(
        '--capacity-weekly',
        type=float,
        default=None,
        help='Capacity in items per week (default: derived from history)'
    )

    parser.add_argument(
        '--multiplier',
        type=float,
        default=None,
        help='Demand multiplier applied to baseline demand'
    )

    parser.add_argument(
        '--target-utilization',
        type=float,
        default=None,
        help='Target fraction of capacity to run at'
    )

    parser.add_argument(
        '--plots',
        type=str,
        default=None,
        help='Directory to save demand and utilization charts (optional)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """CLI entry point."""
    args = parse_args(argv)

    logger = setup_logger("SupplyPlanning", verbose=args.verbose)

    input_path = args.series or args.orders
    if not Path(input_path).exists():
        logger.error(f"Input not found: {input_path}")
        return 1

    if args.config and not Path(args.config).exists():
        logger.error(f"Config not found: {args.config}")
        return 1

    logger.info("Running supply planning...")

    try:
        results = run_supply_planning(
            input_path=input_path,
            output_path=args.output,
            orders=args.orders is not None,
            config_path=args.config,
            capacity={'daily': args.capacity_daily, 'weekly': args.capacity_weekly},
            demand_multiplier=args.multiplier,
            target_utilization=args.target_utilization
        )

        if args.plots:
            from ..utils.visualization import plot_results
            written = plot_results(results, Path(args.plots))
            logger.info(f"Saved {len(written)} charts to {args.plots}")

        # Print summary
        writer = ReportWriter()
        print("\n" + writer.generate_summary(results))

        logger.info("✓ Supply planning complete!")
        return 0

    except Exception as e:
        logger.error(f"✗ Failed: {e}", exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
