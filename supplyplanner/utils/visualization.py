"""Visualization utilities for supply planning results."""

import math
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .formatting import period_label

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_results(results: Dict, output_dir: Path) -> List[Path]:
    """Generate demand and utilization charts for every planned granularity.

    Args:
        results: Results dictionary from ``SupplyPlanner.plan_all``
        output_dir: Directory to save plots

    Returns:
        Paths of the written images
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for granularity, plan in results.get('plans', {}).items():
        if not plan.get('rows'):
            continue

        demand_path = output_dir / f"demand_vs_capacity_{granularity}.png"
        plot_demand_vs_capacity(plan, demand_path)
        written.append(demand_path)

        utilization_path = output_dir / f"utilization_{granularity}.png"
        plot_utilization(plan, utilization_path)
        written.append(utilization_path)

    return written


def plot_demand_vs_capacity(plan: Dict, output_path: Path) -> None:
    """Plot baseline demand, adjusted demand and capacity per period.

    Args:
        plan: Single-granularity plan dictionary
        output_path: Output file path
    """
    rows = plan['rows']
    x = np.arange(len(rows))
    labels = [period_label(row['period']) for row in rows]
    baseline = [row['baseline_demand'] for row in rows]
    adjusted = [row['adjusted_demand'] for row in rows]
    capacity = [row['capacity'] for row in rows]

    fig, ax = plt.subplots(figsize=(12, 6))

    ax.fill_between(x, baseline, alpha=0.3, color='#93c5fd')
    ax.plot(x, baseline, color='#2563eb', linewidth=1, label='Baseline demand (items)')
    ax.plot(x, adjusted, color='#16a34a', linewidth=2, label='Adjusted demand')
    ax.plot(x, capacity, color='#111111', linestyle='--', label='Capacity')

    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=-18, ha='left')
    ax.set_ylabel('Items')
    ax.set_title(f"Demand vs Capacity ({plan.get('granularity', '')})")
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()


def plot_utilization(plan: Dict, output_path: Path) -> None:
    """Plot utilization percentage with target and 100% reference lines.

    Args:
        plan: Single-granularity plan dictionary
        output_path: Output file path
    """
    rows = plan['rows']
    x = np.arange(len(rows))
    labels = [period_label(row['period']) for row in rows]
    utilization_pct = [row['utilization_pct'] for row in rows]
    target_pct = plan['parameters']['target_utilization'] * 100

    fig, ax = plt.subplots(figsize=(12, 5))

    ax.plot(x, utilization_pct, color='#0ea5e9', linewidth=2, label='Utilization')
    ax.axhline(target_pct, color='#f97316', linestyle=':', label=f"Target {round(target_pct)}%")
    ax.axhline(100, color='#ef4444', linestyle='--', label='100%')

    ax.set_ylim([0, max(110, math.ceil(max(utilization_pct, default=0) * 1.2))])
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=-18, ha='left')
    ax.set_ylabel('Utilization (%)')
    ax.set_title(f"Utilization ({plan.get('granularity', '')})")
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()
