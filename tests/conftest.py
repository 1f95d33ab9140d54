# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Shared test fixtures and helpers for steering benchmark tests."""

import pytest

from steering_benchmark.state import Control, QueryPair, State
from steering_benchmark.steering_function import SteeringFunction, SteeringFunctionId


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 0.0):
        self.now = now
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.now

    def advance(self, dt: float) -> None:
        self.now += dt


class AlternatingClock:
    """Clock whose consecutive start/finish samples are exactly `elapsed` apart."""

    def __init__(self, elapsed: float = 0.01):
        self.values = (0.0, elapsed)
        self.calls = 0

    def __call__(self) -> float:
        value = self.values[self.calls % 2]
        self.calls += 1
        return value


class StubSteeringFunction(SteeringFunction):
    """Steering function with constant results that logs its calls."""

    def __init__(
        self,
        distance: float = 5.0,
        clock: FakeClock | None = None,
        call_cost: float = 0.0,
        distance_cost: float = 0.0,
        fail_on_call: int | None = None,
    ):
        self.distance = distance
        self.clock = clock
        self.call_cost = call_cost
        self.distance_cost = distance_cost
        self.fail_on_call = fail_on_call
        self.calls: list[tuple[str, State, State]] = []

    @property
    def name(self) -> str:
        return "stub"

    def _call(self, kind: str, start: State, goal: State, cost: float) -> None:
        self.calls.append((kind, start, goal))
        if self.fail_on_call is not None and len(self.calls) >= self.fail_on_call:
            raise RuntimeError("steering function failed")
        if self.clock is not None:
            self.clock.advance(cost)

    def get_controls(self, start: State, goal: State) -> list[Control]:
        self._call("controls", start, goal, self.call_cost)
        return [Control(delta_s=self.distance, kappa=0.0)]

    def get_path(self, start: State, goal: State) -> list[State]:
        self._call("path", start, goal, self.call_cost)
        return [start, goal]

    def get_distance(self, start: State, goal: State) -> float:
        self._call("distance", start, goal, self.distance_cost)
        return self.distance


def stub_provider(steering_id, parameters):
    """External provider that supplies the curvature-continuous Reeds-Shepp variant only."""
    if steering_id == SteeringFunctionId.CC_RS:
        return StubSteeringFunction(distance=7.0)
    return None


def broken_provider(steering_id, parameters):
    """External provider returning objects that are not steering functions."""
    return object()


def hc00_broken_provider(steering_id, parameters):
    """External provider whose HC00 factory returns an object without the operations."""
    if steering_id == SteeringFunctionId.HC00:
        return object()
    return stub_provider(steering_id, parameters)


class CountingProvider:
    """External provider that counts construction requests per identity."""

    def __init__(self):
        self.calls: dict[SteeringFunctionId, int] = {}

    def __call__(self, steering_id, parameters):
        self.calls[steering_id] = self.calls.get(steering_id, 0) + 1
        return stub_provider(steering_id, parameters)


counting_provider = CountingProvider()


@pytest.fixture
def fixed_pairs() -> list[QueryPair]:
    return [
        QueryPair(State(1.5, -2.0, 0.25), State(-3.0, 4.0, -1.0)),
        QueryPair(State(0.0, 0.0, 0.0), State(5.0, 0.0, 0.0)),
        QueryPair(State(-7.25, 9.5, 3.0), State(2.0, -1.0, 1.5)),
    ]
