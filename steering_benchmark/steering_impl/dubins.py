# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Shortest Dubins curves (Dubins 1957).

The path is the shortest of the six CSC/CCC words LSL, RSR, RSL, LSR, RLR and
LRL, computed in the frame normalized by the minimum turning radius.
"""

import math
from typing import NamedTuple, Optional

from steering_benchmark.state import Control, State
from steering_benchmark.steering_function import SteeringFunction
from steering_benchmark.steering_impl.integration import integrate_controls

_TWO_PI = 2.0 * math.pi
_DUBINS_EPS = 1e-6
_DUBINS_ZERO = -1e-7


class DubinsPath(NamedTuple):
    """A Dubins word and its three segment lengths in units of the turning radius."""

    word: str
    t: float
    p: float
    q: float

    @property
    def length(self) -> float:
        return self.t + self.p + self.q


def _mod2pi(x: float) -> float:
    if _DUBINS_ZERO < x < 0.0:
        return 0.0
    xm = x - _TWO_PI * math.floor(x / _TWO_PI)
    if _TWO_PI - xm < 0.5 * _DUBINS_EPS:
        xm = 0.0
    return xm


def _lsl(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = 2.0 + d * d - 2.0 * (ca * cb + sa * sb - d * (sa - sb))
    if tmp < _DUBINS_ZERO:
        return None
    theta = math.atan2(cb - ca, d + sa - sb)
    return DubinsPath(
        "LSL", _mod2pi(-alpha + theta), math.sqrt(max(tmp, 0.0)), _mod2pi(beta - theta)
    )


def _rsr(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = 2.0 + d * d - 2.0 * (ca * cb + sa * sb - d * (sb - sa))
    if tmp < _DUBINS_ZERO:
        return None
    theta = math.atan2(ca - cb, d - sa + sb)
    return DubinsPath(
        "RSR", _mod2pi(alpha - theta), math.sqrt(max(tmp, 0.0)), _mod2pi(-beta + theta)
    )


def _rsl(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = d * d - 2.0 + 2.0 * (ca * cb + sa * sb - d * (sa + sb))
    if tmp < _DUBINS_ZERO:
        return None
    p = math.sqrt(max(tmp, 0.0))
    theta = math.atan2(ca + cb, d - sa - sb) - math.atan2(2.0, p)
    return DubinsPath("RSL", _mod2pi(alpha - theta), p, _mod2pi(beta - theta))


def _lsr(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = -2.0 + d * d + 2.0 * (ca * cb + sa * sb + d * (sa + sb))
    if tmp < _DUBINS_ZERO:
        return None
    p = math.sqrt(max(tmp, 0.0))
    theta = math.atan2(-ca - cb, d + sa + sb) - math.atan2(-2.0, p)
    return DubinsPath("LSR", _mod2pi(-alpha + theta), p, _mod2pi(-beta + theta))


def _rlr(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = 0.125 * (6.0 - d * d + 2.0 * (ca * cb + sa * sb + d * (sa - sb)))
    if abs(tmp) >= 1.0:
        return None
    p = _TWO_PI - math.acos(tmp)
    theta = math.atan2(ca - cb, d - sa + sb)
    t = _mod2pi(alpha - theta + 0.5 * p)
    return DubinsPath("RLR", t, p, _mod2pi(alpha - beta - t + p))


def _lrl(d: float, alpha: float, beta: float) -> Optional[DubinsPath]:
    ca, sa, cb, sb = math.cos(alpha), math.sin(alpha), math.cos(beta), math.sin(beta)
    tmp = 0.125 * (6.0 - d * d + 2.0 * (ca * cb + sa * sb - d * (sa - sb)))
    if abs(tmp) >= 1.0:
        return None
    p = _TWO_PI - math.acos(tmp)
    theta = math.atan2(-ca + cb, d + sa - sb)
    t = _mod2pi(-alpha + theta + 0.5 * p)
    return DubinsPath("LRL", t, p, _mod2pi(beta - alpha - t + p))


_WORDS = (_lsl, _rsr, _rsl, _lsr, _rlr, _lrl)


def shortest_dubins_path(d: float, alpha: float, beta: float) -> DubinsPath:
    """Shortest Dubins word for a normalized query.

    Args:
        d: Distance between start and goal, in turning radii
        alpha: Start heading relative to the start-goal line
        beta: Goal heading relative to the start-goal line
    """
    if d < _DUBINS_EPS and abs(alpha - beta) < _DUBINS_EPS:
        return DubinsPath("LSL", 0.0, d, 0.0)
    candidates = [path for word in _WORDS if (path := word(d, alpha, beta)) is not None]
    return min(candidates, key=lambda path: path.length)


class DubinsSteeringFunction(SteeringFunction):
    """Forward-only or backward-only shortest Dubins curves.

    Args:
        kappa_max: Maximum curvature [1/m]
        discretization: Path sampling step [m]
        forwards: Drive forwards (True) or backwards (False) only
    """

    def __init__(self, kappa_max: float, discretization: float, forwards: bool = True):
        self.kappa_max = kappa_max
        self.radius = 1.0 / kappa_max
        self.discretization = discretization
        self.forwards = forwards

    @property
    def name(self) -> str:
        return "dubins" if self.forwards else "dubins_backwards"

    def _shortest(self, start: State, goal: State) -> DubinsPath:
        dx = goal.x - start.x
        dy = goal.y - start.y
        heading = math.atan2(dy, dx)
        d = math.hypot(dx, dy) / self.radius
        alpha = _mod2pi(start.theta - heading)
        beta = _mod2pi(goal.theta - heading)
        return shortest_dubins_path(d, alpha, beta)

    def _forward_controls(self, start: State, goal: State) -> list[Control]:
        path = self._shortest(start, goal)
        curvature = {"L": self.kappa_max, "S": 0.0, "R": -self.kappa_max}
        return [
            Control(delta_s=length * self.radius, kappa=curvature[segment])
            for segment, length in zip(path.word, (path.t, path.p, path.q))
        ]

    def get_controls(self, start: State, goal: State) -> list[Control]:
        if self.forwards:
            return self._forward_controls(start, goal)
        # Driving backwards retraces the forward curve from goal to start.
        return [
            Control(delta_s=-c.delta_s, kappa=c.kappa, sigma=c.sigma)
            for c in reversed(self._forward_controls(goal, start))
        ]

    def get_path(self, start: State, goal: State) -> list[State]:
        return integrate_controls(
            start, self.get_controls(start, goal), self.discretization
        )

    def get_distance(self, start: State, goal: State) -> float:
        if self.forwards:
            return self._shortest(start, goal).length * self.radius
        return self._shortest(goal, start).length * self.radius
