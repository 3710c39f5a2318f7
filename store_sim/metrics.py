"""
Metrics accumulation and reporting for the store simulation.
Keeps running totals during a run and turns them into the
end-of-run financial and efficiency report.
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import config
from store_sim.customer import Customer


@dataclass
class MetricsAccumulator:
    """Running totals for one run. Counters only ever go up."""
    item_cost_seed: int = 0
    total_customers: int = 0
    total_customers_served: int = 0
    total_items: int = 0
    total_wait_time: float = 0.0
    gross: float = 0.0

    def record_arrival(self):
        self.total_customers += 1

    def record_completion(self, customer: Customer, wait_time: float = 0.0):
        """Tally a customer who finished checking out.

        Args:
            customer: the departing customer
            wait_time: wait minutes to add for this customer (completion accrual only)
        """
        self.total_customers_served += 1
        self.gross += customer.price_of_items
        self.total_items += customer.item_count
        self.total_wait_time += wait_time

    def accrue_wait(self, minutes: float):
        self.total_wait_time += minutes


@dataclass(frozen=True)
class SimulationReport:
    """Aggregate results of a finished run."""
    gross: float
    worker_costs: float
    item_cost: float
    overhead_cost: float
    profit: float
    total_items: int
    total_customers: int
    total_customers_served: int
    efficiency: float  # percent of arrived customers served
    total_wait_time_hours: float
    average_wait_time: float  # minutes per arrived customer

    def to_dict(self) -> Dict:
        return asdict(self)

    def to_display(self) -> Dict:
        """Report values rounded to two decimals for printing."""
        return {
            key: round(value, 2) if isinstance(value, float) else value
            for key, value in asdict(self).items()
        }


def compute_item_cost(
    total_items: int,
    seed: int,
    item_cost_max: float = config.ITEM_COST_MAX,
) -> float:
    """Wholesale cost of everything sold, one uniform draw per item.

    The draws come from a generator seeded with ``seed`` so the same
    totals always cost the same.
    """
    if total_items <= 0:
        return 0.0
    rng = np.random.default_rng(seed)
    return float(rng.uniform(0.0, item_cost_max, size=total_items).sum())


def build_report(
    metrics: MetricsAccumulator,
    total_num_workers: int,
    duration: int,
    worker_wage: float = config.WORKER_WAGE,
    overhead_pct: float = config.OVERHEAD_COST_PERCENTAGE,
    item_cost_max: float = config.ITEM_COST_MAX,
) -> SimulationReport:
    """Derive the end-of-run figures from accumulated totals.

    Args:
        metrics: totals collected during the run (not modified)
        total_num_workers: workers on shift at the start of the run
        duration: simulated minutes
        worker_wage: hourly wage per worker
        overhead_pct: overhead as a share of gross
        item_cost_max: upper bound of the per-item wholesale cost

    Returns:
        SimulationReport
    """
    if metrics.total_customers > 0:
        average_wait_time = metrics.total_wait_time / metrics.total_customers
        efficiency = metrics.total_customers_served / metrics.total_customers * 100
    else:
        average_wait_time = 0.0
        efficiency = 0.0

    item_cost = compute_item_cost(metrics.total_items, metrics.item_cost_seed, item_cost_max)
    overhead_cost = metrics.gross * overhead_pct
    worker_costs = total_num_workers * worker_wage * (duration / 60.0)
    profit = metrics.gross - worker_costs - item_cost - overhead_cost

    return SimulationReport(
        gross=float(metrics.gross),
        worker_costs=float(worker_costs),
        item_cost=item_cost,
        overhead_cost=float(overhead_cost),
        profit=float(profit),
        total_items=metrics.total_items,
        total_customers=metrics.total_customers,
        total_customers_served=metrics.total_customers_served,
        efficiency=float(efficiency),
        total_wait_time_hours=metrics.total_wait_time / 60.0,
        average_wait_time=float(average_wait_time),
    )


def format_report(report: SimulationReport) -> str:
    """Render the report as the end-of-run summary block."""
    r = report.to_display()
    lines = [
        "Simulation Results:",
        f"\tGross Amount: ${r['gross']:.2f}",
        f"\tWorker Costs: ${r['worker_costs']:.2f}",
        f"\tItem Costs: ${r['item_cost']:.2f}",
        f"\tOverhead Costs: ${r['overhead_cost']:.2f}",
        f"\tTotal Profit: ${r['profit']:.2f}",
        f"\tTotal Items Sold: {r['total_items']}",
        f"\tTotal Customers: {r['total_customers']}",
        f"\tTotal Customers Served: {r['total_customers_served']}",
        f"\tCustomer Serving Efficiency: {r['efficiency']:.2f}%",
        f"\tAggregate Wait Time: {r['total_wait_time_hours']:.2f} hours",
        f"\tAverage Wait Time per Customer: {r['average_wait_time']:.2f} minutes",
    ]
    return "\n".join(lines)


class ReportWriter:
    """Save reports and plots for a run."""

    def __init__(self, output_dir: str = config.REPORT_DIR, run_id: str = "default"):
        """Initialize report writer.

        Args:
            output_dir: Output directory for reports
            run_id: Identifier for this run
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.run_id = run_id

    def save_report_json(self, report: SimulationReport, parameters: Dict) -> str:
        """Save report as JSON file.

        Args:
            report: Report of the finished run
            parameters: Run parameters stored alongside the results

        Returns:
            Path to saved file
        """
        path = self.output_dir / f"report_{self.run_id}.json"

        # Handle non-serializable values
        def default_serializer(obj):
            if isinstance(obj, np.ndarray):
                return obj.tolist()
            if isinstance(obj, (np.integer, np.floating)):
                return float(obj)
            return str(obj)

        payload = {
            "run_id": self.run_id,
            "parameters": parameters,
            "results": report.to_dict(),
        }
        with open(path, "w") as f:
            json.dump(payload, f, indent=2, default=default_serializer)

        return str(path)

    def plot_occupancy(self, history: List[Dict]) -> str:
        """Plot queued customers, busy lanes and free workers per minute.

        Args:
            history: per-minute records from StoreSimulator.history

        Returns:
            Path to saved figure, "" when there is nothing to plot
        """
        if not history:
            return ""

        df = pd.DataFrame(history)

        fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

        axes[0].plot(df["minute"], df["queued_customers"], label="Customers in line", linewidth=2)
        axes[0].plot(df["minute"], df["occupied_lanes"], label="Occupied lanes", linewidth=2)
        axes[0].plot(df["minute"], df["stalled_lanes"], label="Stalled lanes", linewidth=2)
        axes[0].set_ylabel("Count")
        axes[0].set_title("Self-Checkout Occupancy")
        axes[0].legend()
        axes[0].grid(True, alpha=0.3)

        axes[1].step(df["minute"], df["workers_available"], where="post", linewidth=2)
        axes[1].set_ylabel("Free Workers")
        axes[1].set_xlabel("Simulation Time (min)")
        axes[1].set_title("Worker Availability")
        axes[1].grid(True, alpha=0.3)

        path = self.output_dir.parent / "plots" / f"occupancy_{self.run_id}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close(fig)

        return str(path)
