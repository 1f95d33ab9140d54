# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Steering Benchmark - reproducible timing of steering functions.

This package provides:
- PoseGenerator / generate_workload: Seeded query-pair workloads
- run_operation: Timing of get_controls / get_path calls over a workload
- mean / std_dev: Aggregation of timing samples
- write_records: Optional per-pair CSV records
- BenchmarkRunner: Runs every steering function over the identical workload

Example usage:
    from steering_benchmark import BenchmarkRunner, TimingConfig

    config = TimingConfig(samples=1000, implementations=["Dubins", "RS"])
    result = BenchmarkRunner(config).run()
"""

from steering_benchmark.driver import ClockSource, Operation, SampleRecord, run_operation
from steering_benchmark.errors import (
    BenchmarkError,
    ConfigurationError,
    EmptySampleError,
    RecordWriteError,
    UnknownSteeringFunctionError,
    UnsupportedSteeringFunctionError,
)
from steering_benchmark.records import read_records, write_records
from steering_benchmark.runner import BenchmarkResult, BenchmarkRunner, ScenarioResult
from steering_benchmark.schema import TimingConfig, load_config
from steering_benchmark.state import Control, QueryPair, State
from steering_benchmark.stats import mean, std_dev
from steering_benchmark.steering_function import (
    SteeringFunction,
    SteeringFunctionId,
    SteeringParameters,
)
from steering_benchmark.workload import OperatingRegion, PoseGenerator, generate_workload

__all__ = [
    "BenchmarkError",
    "BenchmarkResult",
    "BenchmarkRunner",
    "ClockSource",
    "ConfigurationError",
    "Control",
    "EmptySampleError",
    "OperatingRegion",
    "Operation",
    "PoseGenerator",
    "QueryPair",
    "RecordWriteError",
    "SampleRecord",
    "ScenarioResult",
    "State",
    "SteeringFunction",
    "SteeringFunctionId",
    "SteeringParameters",
    "TimingConfig",
    "UnknownSteeringFunctionError",
    "UnsupportedSteeringFunctionError",
    "generate_workload",
    "load_config",
    "mean",
    "read_records",
    "run_operation",
    "std_dev",
    "write_records",
]
