"""
Main orchestration script for the self-checkout store simulation.
Runs one or more seeded simulations and generates reports.
"""

from pathlib import Path
import argparse
import logging
import sys

# Ensure root directory is in path for config import
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import numpy as np
import config
from store_sim.errors import InvalidConfigurationError
from store_sim.event_log import EventLog
from store_sim.metrics import ReportWriter, SimulationReport, format_report
from store_sim.simulator import StoreSimulator
from store_sim.status import render_status


def print_minute(minute, snapshots):
    print(render_status(minute, snapshots))


def run_single_simulation(args: argparse.Namespace, seed: int, run_id: str) -> SimulationReport:
    """Run a single store simulation and save its outputs.

    Args:
        args: Parsed command-line arguments
        seed: Random seed for this run
        run_id: Identifier used in output filenames

    Returns:
        Report of the finished run
    """
    out = Path(args.output_dir)
    event_log = EventLog(output_dir=str(out / "logs"), run_id=run_id)

    store = StoreSimulator(
        number_of_lanes=args.lanes,
        arrival_prob=args.arrival_prob,
        num_workers=args.workers,
        duration=args.duration,
        max_cust_per_min=args.max_per_minute,
        seed=seed,
        event_log=event_log,
        wait_accrual=args.wait_accrual,
        on_minute=None if args.quiet else print_minute,
    )

    print(f"[{run_id}] Starting simulation...")
    report = store.run()
    print(f"[{run_id}] Simulation complete.")

    writer = ReportWriter(output_dir=str(out / "reports"), run_id=run_id)
    writer.save_report_json(report, {**store.parameters(), "seed": seed})
    writer.plot_occupancy(store.history)

    return report


def summarize(label: str, values):
    print(f"\n{label}:")
    print(f"  Mean: {np.mean(values):.2f}")
    print(f"  Std:  {np.std(values):.2f}")
    print(f"  Min:  {np.min(values):.2f}")
    print(f"  Max:  {np.max(values):.2f}")


def run_batch_simulation(args: argparse.Namespace):
    """Run several simulations with consecutive seeds and summarize them.

    Args:
        args: Parsed command-line arguments
    """
    print("Self-Checkout Store Simulation")
    print("=" * 50)
    print("Configuration:")
    print(f"  Lanes: {args.lanes}")
    print(f"  Arrival probability: {args.arrival_prob}")
    print(f"  Workers: {args.workers}")
    print(f"  Duration: {args.duration} min")
    print(f"  Max customers per minute: {args.max_per_minute}")
    print(f"  Number of runs: {args.seeds}")
    print("=" * 50)

    reports = []
    for run in range(args.seeds):
        print(f"\n--- Run {run + 1}/{args.seeds} ---")
        reports.append(run_single_simulation(args, args.seed + run, f"run{run}"))

    print(f"\n{'=' * 50}")
    print("SUMMARY")
    print(f"{'=' * 50}")

    summarize("Profit ($)", [r.profit for r in reports])
    summarize("Efficiency (%)", [r.efficiency for r in reports])
    summarize("Average Wait (min)", [r.average_wait_time for r in reports])

    print(f"\n{'=' * 50}")
    print("Outputs:")
    print(f"  Event logs: {args.output_dir}/logs")
    print(f"  Reports:    {args.output_dir}/reports")
    print(f"  Plots:      {args.output_dir}/plots")
    print(f"{'=' * 50}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Self-checkout store simulator")
    parser.add_argument("--lanes", type=int, default=config.NUM_LANES, help="number of self-checkouts")
    parser.add_argument(
        "--arrival-prob",
        type=float,
        default=config.ARRIVAL_PROB,
        help="probability a candidate customer joins a line",
    )
    parser.add_argument("--workers", type=int, default=config.NUM_WORKERS, help="workers to fix issues")
    parser.add_argument("--duration", type=int, default=config.SIM_DURATION, help="simulated minutes")
    parser.add_argument(
        "--max-per-minute",
        type=int,
        default=config.MAX_CUST_PER_MIN,
        help="maximum candidate arrivals per minute",
    )
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED_BASE)
    parser.add_argument("--seeds", type=int, default=1, help="number of seeded runs (batch mode if > 1)")
    parser.add_argument(
        "--wait-accrual",
        choices=config.WAIT_ACCRUAL_POLICIES,
        default=config.WAIT_ACCRUAL,
    )
    parser.add_argument("--output-dir", default=config.OUTPUT_DIR)
    parser.add_argument("--quiet", action="store_true", help="skip per-minute status tables")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv=None):
    """Entry point for the simulation."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.seeds > 1:
            args.quiet = True
            run_batch_simulation(args)
        else:
            report = run_single_simulation(args, args.seed, "run0")
            print()
            print(format_report(report))
    except InvalidConfigurationError as e:
        print(f"\nError: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
