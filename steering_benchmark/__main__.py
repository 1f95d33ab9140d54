# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
CLI entry point for steering function timing benchmarks.

Usage:
    # Run both scenarios with the default configuration
    python -m steering_benchmark run

    # Run a quick benchmark (1000 query pairs) of two steering functions
    python -m steering_benchmark run --quick "implementations=[Dubins,RS]"

    # Use a config file, write per-pair CSV records and timing plots
    python -m steering_benchmark run --config_path configs/timing.yaml \\
        records.enabled=true plot_dir=plots

    # Benchmark steering functions from an external library
    python -m steering_benchmark run backend.provider=my_steering.bindings:create

    # List steering functions and whether they can be constructed
    python -m steering_benchmark list
"""

import argparse
import logging
import sys
from pathlib import Path

from omegaconf import OmegaConf

from .errors import ConfigurationError

logger = logging.getLogger("steering_benchmark")

QUICK_SAMPLES = 1000


def _setup_logging(level: str) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigurationError(
            f"Invalid log level '{level}' (expected DEBUG, INFO, WARNING or ERROR)"
        )
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s.%(msecs)03d %(levelname)s:\t%(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_run(args: argparse.Namespace) -> int:
    """Run the benchmark scenarios."""
    from .report import plot_timing_distributions, print_summary
    from .runner import BenchmarkRunner
    from .schema import load_config

    overrides = list(args.overrides)
    if args.quick:
        overrides.append(f"samples={QUICK_SAMPLES}")
    cfg = load_config(args.config_path, overrides)
    _setup_logging(args.log_level or cfg.log_level)
    logger.debug("Config:\n%s", OmegaConf.to_yaml(OmegaConf.structured(cfg)))

    runner = BenchmarkRunner(cfg)
    result = runner.run()
    print_summary(result)

    if cfg.plot_dir:
        for scenario in result.scenarios:
            path = plot_timing_distributions(
                scenario, Path(cfg.plot_dir) / f"{scenario.operation}_timing.png"
            )
            print(f"Plot saved to: {path}")

    if result.n_failures:
        logger.error("%d steering function run(s) failed", result.n_failures)
        return 1
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List registered steering functions."""
    from .registry import build_steering_functions, load_provider
    from .schema import load_config
    from .steering_function import SteeringFunctionId, SteeringParameters

    cfg = load_config(args.config_path, list(args.overrides))
    _setup_logging(args.log_level or cfg.log_level)
    provider = load_provider(cfg.backend.provider) if cfg.backend.provider else None
    parameters = SteeringParameters(
        kappa_max=cfg.steering.kappa_max,
        sigma_max=cfg.steering.sigma_max,
        discretization=cfg.steering.discretization,
    )
    available, errors = build_steering_functions(None, parameters, provider)

    print(f"Steering functions ({len(available)}/{len(SteeringFunctionId)} available):")
    print("-" * 60)
    for steering_id in SteeringFunctionId:
        if steering_id in available:
            status = "available"
        elif steering_id in errors:
            status = f"error: {errors[steering_id]}"
        else:
            status = "no backend"
        print(f"  {steering_id:<22} {status}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Steering Function Timing Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the timing scenarios")
    run_parser.add_argument(
        "--quick",
        action="store_true",
        help=f"Use {QUICK_SAMPLES} query pairs instead of the configured number",
    )
    run_parser.set_defaults(func=cmd_run)

    list_parser = subparsers.add_parser("list", help="List steering functions")
    list_parser.set_defaults(func=cmd_list)

    for sub in (run_parser, list_parser):
        sub.add_argument(
            "--config_path",
            type=str,
            help="YAML config merged over the defaults",
        )
        sub.add_argument(
            "--log-level",
            type=str,
            default=None,
            help="Logging level (DEBUG, INFO, WARNING, ERROR), overrides log_level",
        )
        sub.add_argument(
            "overrides",
            nargs="*",
            help="Config overrides in dotlist form, e.g. samples=5000 records.enabled=true",
        )

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
