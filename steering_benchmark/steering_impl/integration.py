# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Sampling of control sequences into discretized paths."""

import math

from steering_benchmark.state import Control, State

_KAPPA_EPS = 1e-9


def _integrate_step(
    x: float, y: float, theta: float, kappa: float, ds: float
) -> tuple[float, float, float]:
    """Exact integration of a constant-curvature step of signed length ds."""
    if abs(kappa) < _KAPPA_EPS:
        return x + ds * math.cos(theta), y + ds * math.sin(theta), theta
    theta_next = theta + kappa * ds
    x_next = x + (math.sin(theta_next) - math.sin(theta)) / kappa
    y_next = y + (math.cos(theta) - math.cos(theta_next)) / kappa
    return x_next, y_next, theta_next


def integrate_controls(
    start: State, controls: list[Control], discretization: float
) -> list[State]:
    """Sample the states visited when driving `controls` from `start`.

    Each control is split into ceil(|delta_s| / discretization) equal steps.
    Steps of curvature-continuous controls use the mean curvature of the step,
    so their sampled heading is exact and their position is approximate.

    Returns:
        States from start to the end of the last control (inclusive)
    """
    x, y, theta = start.x, start.y, start.theta
    first = next((c for c in controls if c.delta_s != 0.0), None)
    if first is None:
        return [start]

    path = [State(x, y, theta, first.kappa, 1 if first.delta_s > 0.0 else -1)]
    for control in controls:
        if control.delta_s == 0.0:
            continue
        n_steps = max(1, math.ceil(abs(control.delta_s) / discretization))
        ds = control.delta_s / n_steps
        direction = 1 if control.delta_s > 0.0 else -1
        kappa = control.kappa
        for _ in range(n_steps):
            kappa_mean = kappa + 0.5 * control.sigma * abs(ds)
            x, y, theta = _integrate_step(x, y, theta, kappa_mean, ds)
            kappa += control.sigma * abs(ds)
            path.append(State(x, y, theta, kappa, direction))
    return path
