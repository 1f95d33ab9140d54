# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Console report and plots of benchmark results.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from steering_benchmark.stats import SampleSummary

if TYPE_CHECKING:
    from steering_benchmark.runner import BenchmarkResult, ScenarioResult


def format_report_line(steering_id: str, timing: SampleSummary) -> str:
    """One console line: "<id> mean [s] +/- std [s]: <mean> +/- <std>"."""
    return f"{steering_id} mean [s] +/- std [s]: {timing.mean:g} +/- {timing.std:g}"


def print_summary(result: BenchmarkResult) -> None:
    """Print a table per scenario."""
    print("=" * 78)
    print("STEERING FUNCTION TIMING SUMMARY")
    print("=" * 78)
    if result.description:
        print(f"Description: {result.description}")
    print(f"Timestamp:   {result.timestamp}")

    for scenario in result.scenarios:
        print("\n" + "-" * 78)
        print(
            f"{scenario.operation.title} "
            f"({scenario.n_samples} pairs, seed={scenario.seed}, clock={scenario.clock})"
        )
        print("-" * 78)
        print(
            f"{'Steering function':<22} {'Mean [us]':>12} {'Std [us]':>12} "
            f"{'Length [m]':>12} {'Status':>14}"
        )
        print("-" * 78)
        for r in scenario.results:
            if r.timing is None:
                print(f"{r.steering_id:<22} {'-':>12} {'-':>12} {'-':>12} {'FAILED':>14}")
                continue
            length = f"{r.path_length.mean:.3f}" if r.path_length is not None else "-"
            status = "ok" if r.succeeded else "FAILED"
            print(
                f"{r.steering_id:<22} {r.timing.mean * 1e6:>12.2f} "
                f"{r.timing.std * 1e6:>12.2f} {length:>12} {status:>14}"
            )
    print("=" * 78)


def plot_timing_distributions(scenario: ScenarioResult, output_path: Path) -> Path:
    """Save a box plot of per-call computation times for every steering function."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    measured = [r for r in scenario.results if r.computation_times]
    fig, ax = plt.subplots(figsize=(max(6, 1.2 * len(measured) + 2), 5))
    if measured:
        ax.boxplot(
            [[t * 1e6 for t in r.computation_times] for r in measured],
            showfliers=False,
        )
        ax.set_xticks(range(1, len(measured) + 1))
        ax.set_xticklabels([str(r.steering_id) for r in measured], rotation=30)
    ax.set_ylabel(f"Computation time [us] ({scenario.clock})")
    ax.set_title(scenario.operation.title.capitalize())
    ax.grid(True, alpha=0.3)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
