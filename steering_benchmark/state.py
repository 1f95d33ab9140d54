# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Planar vehicle states and the query pairs the benchmark feeds to steering functions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class State:
    """A planar configuration of a car-like robot."""

    x: float  # position [m]
    y: float  # position [m]
    theta: float  # heading [rad], not normalized
    kappa: float = 0.0  # signed curvature [1/m]
    d: int = 0  # driving direction: -1 backwards, 0 undefined, 1 forwards

    def fields(self) -> tuple[float, float, float, float, int]:
        """Fields in record order (x, y, theta, kappa, d)."""
        return (self.x, self.y, self.theta, self.kappa, self.d)


@dataclass(frozen=True)
class Control:
    """One piece of a steering maneuver.

    Attributes:
        delta_s: Signed arc length [m], negative when driving backwards
        kappa: Curvature at the start of the piece [1/m]
        sigma: Curvature rate along the piece [1/m^2], 0 for circular arcs
    """

    delta_s: float
    kappa: float
    sigma: float = 0.0


@dataclass(frozen=True)
class QueryPair:
    """An ordered (start, goal) pair handed to every steering function."""

    start: State
    goal: State
