# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Timing of steering function calls over a workload.

Only the single call under measurement lies between the two clock samples;
result bookkeeping and the follow-up distance query happen outside of it.
"""

import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Iterable, Mapping, Optional

from steering_benchmark.errors import UnsupportedSteeringFunctionError
from steering_benchmark.state import QueryPair, State
from steering_benchmark.steering_function import SteeringFunction, SteeringFunctionId

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Operation(StrEnum):
    """Steering function operation under measurement."""

    CONTROLS = "controls"
    PATH = "path"

    @property
    def title(self) -> str:
        if self == Operation.CONTROLS:
            return "timing of control computation"
        return "timing of full path construction"


class ClockSource(StrEnum):
    """Clock used to time calls.

    PROCESS_TIME measures CPU time of the process, PERF_COUNTER measures
    monotonic wall-clock time.
    """

    PROCESS_TIME = "process_time"
    PERF_COUNTER = "perf_counter"

    @property
    def clock(self) -> Clock:
        if self == ClockSource.PERF_COUNTER:
            return time.perf_counter
        return time.process_time


@dataclass(frozen=True)
class SampleRecord:
    """Result of one steering function call on one query pair."""

    start: State
    goal: State
    computation_time: float  # [s]
    path_length: Optional[float] = None  # [m], only recorded for control timing


def run_operation(
    operation: Operation,
    steering_id: str | SteeringFunctionId,
    steering_functions: Mapping[SteeringFunctionId, SteeringFunction],
    pairs: Iterable[QueryPair],
    clock: Clock = time.process_time,
) -> list[SampleRecord]:
    """Time one steering function operation on every query pair.

    Args:
        operation: CONTROLS times get_controls and then queries get_distance
            outside the timed interval, PATH times get_path and discards the path
        steering_id: Identity of the steering function to run
        steering_functions: Constructed steering functions by identity
        pairs: Query pairs, not modified
        clock: Clock returning seconds

    Returns:
        One record per query pair, in input order

    Raises:
        UnknownSteeringFunctionError: If steering_id is not a registered identity
        UnsupportedSteeringFunctionError: If steering_id was not constructed
    """
    steering_id = SteeringFunctionId.parse(steering_id)
    steering_function = steering_functions.get(steering_id)
    if steering_function is None:
        raise UnsupportedSteeringFunctionError(
            f"Steering function '{steering_id}' has not been constructed"
        )
    operation = Operation(operation)

    records: list[SampleRecord] = []
    if operation == Operation.CONTROLS:
        get_controls = steering_function.get_controls
        get_distance = steering_function.get_distance
        for pair in pairs:
            start, goal = pair.start, pair.goal
            clock_start = clock()
            get_controls(start, goal)
            clock_finish = clock()
            path_length = get_distance(start, goal)
            records.append(
                SampleRecord(
                    start=start,
                    goal=goal,
                    computation_time=max(0.0, clock_finish - clock_start),
                    path_length=float(path_length),
                )
            )
    else:
        get_path = steering_function.get_path
        for pair in pairs:
            start, goal = pair.start, pair.goal
            clock_start = clock()
            get_path(start, goal)
            clock_finish = clock()
            records.append(
                SampleRecord(
                    start=start,
                    goal=goal,
                    computation_time=max(0.0, clock_finish - clock_start),
                )
            )

    logger.debug("Timed %d %s calls of %s", len(records), operation, steering_id)
    return records
