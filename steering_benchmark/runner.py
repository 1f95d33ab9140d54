# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Benchmark runner for steering function timing.

Runs one scenario per operation. Each scenario seeds the pose generator,
draws a single workload and runs every selected steering function over that
identical workload, one after the other.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from steering_benchmark.driver import (
    Clock,
    ClockSource,
    Operation,
    SampleRecord,
    run_operation,
)
from steering_benchmark.errors import (
    ConfigurationError,
    RecordWriteError,
    UnknownSteeringFunctionError,
)
from steering_benchmark.records import write_records
from steering_benchmark.registry import (
    build_steering_functions,
    load_provider,
)
from steering_benchmark.report import format_report_line
from steering_benchmark.schema import TimingConfig
from steering_benchmark.stats import SampleSummary, summarize
from steering_benchmark.steering_function import (
    SteeringFunction,
    SteeringFunctionId,
    SteeringParameters,
)
from steering_benchmark.workload import OperatingRegion, PoseGenerator, Workload

logger = logging.getLogger(__name__)


@dataclass
class ImplementationResult:
    """Outcome of one steering function in one scenario."""

    steering_id: str
    operation: Operation
    computation_times: list[float] = field(default_factory=list)
    path_lengths: list[float] = field(default_factory=list)
    timing: Optional[SampleSummary] = None
    path_length: Optional[SampleSummary] = None
    record_file: Optional[Path] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class ScenarioResult:
    """Results of all steering functions on one shared workload."""

    operation: Operation
    clock: str
    seed: int
    n_samples: int
    results: list[ImplementationResult]

    @property
    def failed(self) -> list[str]:
        return [r.steering_id for r in self.results if not r.succeeded]


@dataclass
class BenchmarkResult:
    """Complete benchmark results."""

    timestamp: str
    description: str
    scenarios: list[ScenarioResult]

    @property
    def n_failures(self) -> int:
        return sum(len(s.failed) for s in self.scenarios)


def _parse_config(
    config: TimingConfig,
) -> tuple[
    list[Operation],
    ClockSource,
    Optional[list[str]],
    SteeringParameters,
    OperatingRegion,
]:
    if config.samples < 1:
        raise ConfigurationError(f"samples must be >= 1, got {config.samples}")
    try:
        operations = [Operation(op) for op in config.operations]
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid operation in {list(config.operations)}: "
            f"choose from {[op.value for op in Operation]}"
        ) from e
    try:
        clock_source = ClockSource(config.clock)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid clock '{config.clock}': choose from {[c.value for c in ClockSource]}"
        ) from e
    labels = None
    if config.implementations is not None:
        labels = [str(label) for label in config.implementations]
    parameters = SteeringParameters(
        kappa_max=config.steering.kappa_max,
        sigma_max=config.steering.sigma_max,
        discretization=config.steering.discretization,
    )
    region = OperatingRegion(
        x=config.region.x, y=config.region.y, theta=config.region.theta
    )
    return operations, clock_source, labels, parameters, region


class BenchmarkRunner:
    """Runs steering function timing benchmarks.

    Steering functions are constructed once, when the runner is created, and
    reused for every scenario.

    Args:
        config: Benchmark configuration (default: TimingConfig())
        steering_functions: Prebuilt steering functions by identity; when given,
            no backend is consulted
        clock: Clock override, mainly for tests (default: config.clock)
    """

    def __init__(
        self,
        config: TimingConfig | None = None,
        steering_functions: Mapping[SteeringFunctionId, SteeringFunction]
        | None = None,
        clock: Clock | None = None,
    ):
        self.config = config or TimingConfig()
        (
            self.operations,
            self.clock_source,
            labels,
            self.parameters,
            self.region,
        ) = _parse_config(self.config)
        self.clock = clock or self.clock_source.clock
        self.generator = PoseGenerator(self.region, seed=self.config.seed)

        # Unknown labels fail on their own; the remaining identities still run.
        self.construction_errors: dict[str, str] = {}
        requested_ids = None
        if labels is not None:
            requested_ids = [self._resolve_label(label) for label in labels]

        if steering_functions is not None:
            self.steering_functions = dict(steering_functions)
            self.steering_ids: list[str] = (
                requested_ids
                if requested_ids is not None
                else [i for i in SteeringFunctionId if i in self.steering_functions]
            )
        else:
            provider = (
                load_provider(self.config.backend.provider)
                if self.config.backend.provider
                else None
            )
            if requested_ids is None:
                self.steering_functions, errors = build_steering_functions(
                    None, self.parameters, provider
                )
                self.steering_ids = [
                    i
                    for i in SteeringFunctionId
                    if i in self.steering_functions or i in errors
                ]
            else:
                known = [
                    i for i in requested_ids if isinstance(i, SteeringFunctionId)
                ]
                self.steering_functions, errors = build_steering_functions(
                    known, self.parameters, provider
                )
                self.steering_ids = requested_ids
            self.construction_errors.update(errors)

        if not self.steering_ids:
            raise ConfigurationError("No steering functions selected for benchmarking")
        logger.info(
            "Benchmarking %s with %s clock",
            ", ".join(self.steering_ids),
            self.clock_source,
        )

    def _resolve_label(self, label: str) -> str:
        try:
            return SteeringFunctionId.parse(label)
        except UnknownSteeringFunctionError as e:
            logger.error("Cannot construct %s: %s", label, e)
            self.construction_errors[label] = str(e)
            return label

    def generate_workload(self) -> Workload:
        """Reseed the generator and draw the shared workload of a scenario."""
        self.generator.reseed(self.config.seed)
        pairs = self.generator.random_pairs(self.config.samples)
        return Workload(pairs=tuple(pairs), seed=self.config.seed, region=self.region)

    def run(self) -> BenchmarkResult:
        """Run every configured scenario."""
        scenarios = [self.run_scenario(operation) for operation in self.operations]
        return BenchmarkResult(
            timestamp=datetime.now().isoformat(),
            description=self.config.description,
            scenarios=scenarios,
        )

    def run_scenario(self, operation: Operation) -> ScenarioResult:
        """Run all steering functions over one freshly generated workload."""
        operation = Operation(operation)
        workload = self.generate_workload()
        logger.info(
            "Scenario: %s (%d query pairs, seed=%d)",
            operation.title,
            len(workload),
            workload.seed,
        )

        results = []
        for i, steering_id in enumerate(self.steering_ids):
            logger.info("  [%d/%d] %s", i + 1, len(self.steering_ids), steering_id)
            result = self._run_implementation(operation, steering_id, workload)
            results.append(result)
            if result.timing is not None:
                print(format_report_line(steering_id, result.timing))

        return ScenarioResult(
            operation=operation,
            clock=str(self.clock_source),
            seed=workload.seed,
            n_samples=len(workload),
            results=results,
        )

    def _run_implementation(
        self,
        operation: Operation,
        steering_id: str,
        workload: Workload,
    ) -> ImplementationResult:
        result = ImplementationResult(steering_id=steering_id, operation=operation)

        if steering_id in self.construction_errors:
            result.error = self.construction_errors[steering_id]
            logger.error("    -> skipped: %s", result.error)
            return result

        try:
            records = run_operation(
                operation, steering_id, self.steering_functions, workload, self.clock
            )
        except ConfigurationError as e:
            result.error = str(e)
            logger.error("    -> %s", result.error)
            return result
        except Exception as e:
            if not self.config.isolate_failures:
                raise
            result.error = f"{type(e).__name__}: {e}"
            logger.exception("    -> %s failed", steering_id)
            return result

        self._summarize(result, records)
        if self.config.records.enabled and operation == Operation.CONTROLS:
            try:
                result.record_file = write_records(
                    self.config.records.output_dir, steering_id, records
                )
            except RecordWriteError as e:
                # The timing stays valid and is still reported.
                result.error = str(e)
                logger.error("    -> %s", result.error)
        return result

    def _summarize(
        self, result: ImplementationResult, records: list[SampleRecord]
    ) -> None:
        result.computation_times = [r.computation_time for r in records]
        result.timing = summarize(result.computation_times)
        result.path_lengths = [
            r.path_length for r in records if r.path_length is not None
        ]
        if result.path_lengths:
            result.path_length = summarize(result.path_lengths)
            logger.info(
                "    -> path length mean [m] +/- std [m]: %g +/- %g",
                result.path_length.mean,
                result.path_length.std,
            )
