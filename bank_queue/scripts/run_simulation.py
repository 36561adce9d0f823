#!/usr/bin/env python3
"""Command-line interface for running the bank queue scenarios."""

import argparse
import json
import sys
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from bank_queue.analysis import mmc
from bank_queue.core import SimulationError, SimulationResult
from bank_queue.core.multiserver_queue import SELECTION_METHODS
from bank_queue.system import (
    SimulationConfig,
    compare_scenarios,
    customer_table,
    load_config,
    run_replications,
    run_scenarios,
)


def convert_numpy_types(obj):
    """
    Convert numpy types to Python native types for JSON serialization.

    Non-finite floats (nan, inf) become None so the output is strict JSON.
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        value = float(obj)
        return value if np.isfinite(value) else None
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {key: convert_numpy_types(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_numpy_types(item) for item in obj]
    else:
        return obj


def _fmt(value: float, digits: int = 4) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return "n/a"
    return f"{value:.{digits}f}"


def print_results(results: Dict[str, SimulationResult],
                  config: SimulationConfig,
                  detailed: bool = False) -> None:
    """Print a summary of every scenario to the console."""
    print("\n=== Simulation Results ===")
    print(f"Arrival rate: {config.hourly_rate:g} customers/hour")
    print(f"Mean service time: {config.mean_service_time:g} min")
    print(f"Horizon: {config.horizon:g} min")
    print(f"Seed: {config.seed}")

    for name, result in results.items():
        m = result.metrics
        theory = mmc(config.arrival_rate, config.service_rate, result.num_servers)

        print(f"\n{name}:")
        print(f"  Customers served: {m.total_customers}")
        print(f"  Mean waiting time: {_fmt(m.mean_wait)} min"
              f"  (M/M/c Wq: {_fmt(theory.Wq)})")
        print(f"  Mean queue length: {_fmt(m.mean_queue_length)}")
        print(f"  Max queue length: {m.max_queue_length}")
        print(f"  Utilization: {_fmt(m.utilization)}"
              f"  (traffic intensity: {_fmt(theory.utilization)})")
        if theory.note:
            print(f"  Warning: {theory.note}")

        if detailed:
            print(f"  Max waiting time: {_fmt(m.max_wait)} min")
            print(f"  Time-average queue length: {_fmt(m.time_average_queue_length)}"
                  f"  (M/M/c Lq: {_fmt(theory.Lq)})")
            print(f"  Throughput: {_fmt(m.throughput)} customers/min")
            print(f"  Last service ends: {_fmt(m.makespan, 2)} min")
            for k, (busy, util, served) in enumerate(zip(m.server_busy_times,
                                                         m.server_utilizations,
                                                         m.customers_per_server)):
                print(f"    Teller {k + 1}: {served} customers, "
                      f"busy {busy:.2f} min ({_fmt(util, 3)})")


def print_replications(summaries: List[Dict], detailed: bool = False) -> None:
    """Print replication statistics."""
    for summary in summaries:
        print(f"\n=== Replications: c={summary['num_servers']} "
              f"(n={summary['replications']}, base seed {summary['base_seed']}) ===")
        for metric, stats in summary['metrics'].items():
            print(f"  {metric}: {_fmt(stats['mean'])} (±{_fmt(stats['ci_half_width'])})")
            if detailed:
                print(f"    Std: {_fmt(stats['std'])}, "
                      f"Min: {_fmt(stats['min'])}, Max: {_fmt(stats['max'])}")


def build_comparisons(results: Dict[str, SimulationResult]) -> Dict[str, pd.DataFrame]:
    """Compare the first scenario against each of the others."""
    names = list(results.keys())
    comparisons = {}
    for name in names[1:]:
        comparisons[f"{names[0]} vs {name}"] = compare_scenarios(
            results[names[0]], results[name], names[0], name)
    return comparisons


def save_results(results: Dict, output_path: str) -> None:
    """Save results to JSON file."""
    with open(output_path, 'w') as f:
        json.dump(convert_numpy_types(results), f, indent=2, allow_nan=False)


def save_customers(results: Dict[str, SimulationResult], output_path: str) -> None:
    """Write every scenario's customer table to one CSV file."""
    frames = []
    for name, result in results.items():
        table = customer_table(result)
        table.insert(0, 'scenario', name)
        frames.append(table)
    pd.concat(frames, ignore_index=True).to_csv(output_path, index=False)


def build_parser() -> argparse.ArgumentParser:
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description='Run the bank M/M/c queue scenarios')

    # Model parameters
    parser.add_argument('--arrival-rate', type=float,
                        help=f'Customers per hour (default: {defaults.hourly_rate:g})')
    parser.add_argument('--service-time', type=float,
                        help=f'Mean service time in minutes (default: {defaults.mean_service_time:g})')
    parser.add_argument('-t', '--horizon', type=float,
                        help=f'Simulated minutes (default: {defaults.horizon:g})')
    parser.add_argument('-c', '--servers', type=int, nargs='+',
                        help='Server counts, one scenario each (default: 2 3)')
    parser.add_argument('-s', '--seed', type=int,
                        help=f'Random seed (default: {defaults.seed})')
    parser.add_argument('-r', '--replications', type=int,
                        help='Number of replications (default: 1)')
    parser.add_argument('--selection', choices=SELECTION_METHODS,
                        help='Teller selection strategy (default: scan)')
    parser.add_argument('--config', type=str,
                        help='JSON configuration file')

    # Output options
    parser.add_argument('-o', '--output', type=str,
                        help='Output file for results (JSON)')
    parser.add_argument('--customers-csv', type=str,
                        help='Output file for per-customer records (CSV)')
    parser.add_argument('-p', '--plot', action='store_true',
                        help='Show plots')
    parser.add_argument('--plot-file', type=str,
                        help='Save plots to file')
    parser.add_argument('-d', '--detailed', action='store_true',
                        help='Show detailed statistics')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress console output')
    return parser


def resolve_config(args: argparse.Namespace) -> SimulationConfig:
    """Defaults, then the JSON file, then command-line flags."""
    config = SimulationConfig()
    if args.config:
        config = load_config(args.config, config)

    return config.with_overrides(
        hourly_rate=args.arrival_rate,
        mean_service_time=args.service_time,
        horizon=args.horizon,
        servers=args.servers,
        seed=args.seed,
        replications=args.replications,
        selection=args.selection,
    ).validate()


def write_outputs(args: argparse.Namespace,
                  config: SimulationConfig,
                  results: Dict[str, SimulationResult],
                  comparisons: Dict[str, pd.DataFrame],
                  summaries: List[Dict]) -> None:
    """Write the JSON summary, customer CSV and report figure that were requested."""
    if args.output:
        output = {
            'config': config.as_dict(),
            'scenarios': {name: r.get_metrics_summary() for name, r in results.items()},
            'analytical': {name: mmc(config.arrival_rate, config.service_rate,
                                     r.num_servers).as_dict()
                           for name, r in results.items()},
            'comparisons': {title: table.reset_index().to_dict(orient='records')
                            for title, table in comparisons.items()},
        }
        if summaries:
            output['replications'] = summaries
        save_results(output, args.output)
        if not args.quiet:
            print(f"\nResults saved to: {args.output}")

    if args.customers_csv:
        save_customers(results, args.customers_csv)
        if not args.quiet:
            print(f"Customer records saved to: {args.customers_csv}")

    # Generate plots
    if args.plot or args.plot_file:
        from bank_queue.visualization import create_performance_report

        comparison = next(iter(comparisons.values()), None)
        create_performance_report(results, comparison, save_path=args.plot_file)

        if args.plot_file and not args.quiet:
            print(f"Plot saved to: {args.plot_file}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
        results = run_scenarios(config)
        summaries = []
        if config.replications > 1:
            summaries = [run_replications(config, c) for c in config.servers]
    except (SimulationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    comparisons = build_comparisons(results)

    # Output results
    if not args.quiet:
        print_results(results, config, args.detailed)
        for title, table in comparisons.items():
            print(f"\n=== Comparison: {title} ===")
            print(table.to_string(float_format=lambda v: f"{v:.3f}"))
        if summaries:
            print_replications(summaries, args.detailed)

    try:
        write_outputs(args, config, results, comparisons, summaries)
    except (SimulationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.plot:
        import matplotlib.pyplot as plt
        plt.show()

    return 0


if __name__ == '__main__':
    sys.exit(main())
