"""
Report writer for supply planning - generates human-readable summaries.
"""
from typing import Dict, Any, List

from ..utils.formatting import format_integer, format_money, format_percent, period_label


class ReportWriter:
    """Generates human-readable supply planning reports."""

    def generate_summary(self, results: Dict[str, Any]) -> str:
        """Generate human-readable summary from results."""
        lines = []

        # Header
        lines.append("=" * 60)
        lines.append("   SUPPLY PLANNING REPORT")
        timestamp = results.get('timestamp', 'N/A')
        lines.append(f"   Date: {timestamp}")
        lines.append("=" * 60)
        lines.append("")

        plans = results.get('plans', {})
        if not any(plan.get('rows') for plan in plans.values()):
            lines.append("NO DEMAND SERIES FOUND")
            lines.append("")
            lines.append("Create some orders with items first.")
            return "\n".join(lines)

        currency = results.get('currency', 'EUR')
        for granularity, plan in plans.items():
            lines.extend(self._granularity_section(granularity, plan, currency))

        return "\n".join(lines)

    def _granularity_section(self, granularity: str, plan: Dict[str, Any],
                             currency: str) -> List[str]:
        lines = []
        unit = "week" if granularity == "weekly" else "day"
        rows = plan.get('rows', [])

        lines.append(f"{granularity.upper()} PLAN")
        lines.append("━" * 60)

        if not rows:
            lines.append(f"No {granularity} demand periods.")
            lines.append("")
            return lines

        params = plan['parameters']
        summary = plan['summary']

        lines.append(f"Periods:            {summary['periods']} "
                     f"({rows[0]['period']} .. {rows[-1]['period']})")
        lines.append(f"Capacity:           {format_integer(params['capacity'])} items per {unit} "
                     f"(default {format_integer(plan['default_capacity'])}, "
                     f"max {format_integer(plan['capacity_max'])})")
        lines.append(f"Demand Multiplier:  {params['demand_multiplier']:.2f}x baseline")
        lines.append(f"Target Util:        {format_percent(params['target_utilization'])}")
        lines.append("")

        lines.append(f"Peak Demand:        {format_integer(summary['peak_adjusted_demand'])} items")
        lines.append(f"Avg Demand:         {format_integer(summary['average_adjusted_demand'])} items")
        lines.append(f"Peak Utilization:   {format_percent(summary['peak_utilization'])}")
        lines.append(f"Avg Utilization:    {format_percent(summary['average_utilization'])}")

        over = [row for row in rows if row['utilization'] > 1.0]
        lines.append(f"Over Capacity:      {len(over)} of {len(rows)} periods")

        revenue = sum(row['revenue'] for row in rows)
        orders = sum(row['orders'] for row in rows)
        lines.append(f"Orders / Revenue:   {format_integer(orders)} / {format_money(revenue, currency)}")
        lines.append("")

        lines.append("RECOMMENDATION")
        lines.append(f"Provision {format_integer(summary['recommended_capacity_for_peak'])} items per "
                     f"{unit} to run the peak {unit} at "
                     f"{format_percent(params['target_utilization'])} utilization.")
        lines.append("")

        return lines

    def generate_rows_table(self, rows: List[Dict[str, Any]]) -> str:
        """Generate ASCII table of planning rows."""
        if not rows:
            return "No planning rows available"

        lines = []
        lines.append("\nDemand vs Capacity")
        lines.append("─" * 72)
        lines.append(f"{'Period':<8} {'Orders':<8} {'Baseline':<10} {'Adjusted':<10} "
                     f"{'Capacity':<10} {'Util':<8} {'Recommended':<12}")
        lines.append("─" * 72)

        for row in rows:
            lines.append(
                f"{period_label(row['period']):<8} "
                f"{format_integer(row['orders']):<8} "
                f"{format_integer(row['baseline_demand']):<10} "
                f"{format_integer(row['adjusted_demand']):<10} "
                f"{format_integer(row['capacity']):<10} "
                f"{format_percent(row['utilization']):<8} "
                f"{format_integer(row['recommended_capacity']):<12}"
            )

        lines.append("─" * 72)
        return "\n".join(lines)
