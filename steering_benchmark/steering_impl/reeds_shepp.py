# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Shortest Reeds-Shepp curves (Reeds and Shepp 1990).

All 48 words are covered by five formula families (CSC, CCC, CCCC, CCSC,
CCSCC) combined with the time-flip, reflection and backwards symmetries.
Segment lengths are signed: negative lengths are driven backwards.
"""

import math
from typing import NamedTuple, Optional

from steering_benchmark.state import Control, State
from steering_benchmark.steering_function import SteeringFunction
from steering_benchmark.steering_impl.integration import integrate_controls

_ZERO = 10.0 * 2.220446049250313e-16
_HALF_PI = 0.5 * math.pi


class ReedsSheppPath(NamedTuple):
    """A Reeds-Shepp word and its signed segment lengths in turning radii."""

    word: str
    lengths: tuple[float, ...]

    @property
    def length(self) -> float:
        return sum(abs(length) for length in self.lengths)


_NO_PATH = ReedsSheppPath("", (math.inf,))


def _mod2pi(x: float) -> float:
    v = math.fmod(x, 2.0 * math.pi)
    if v < -math.pi:
        v += 2.0 * math.pi
    elif v > math.pi:
        v -= 2.0 * math.pi
    return v


def _polar(x: float, y: float) -> tuple[float, float]:
    return math.hypot(x, y), math.atan2(y, x)


def _tau_omega(
    u: float, v: float, xi: float, eta: float, phi: float
) -> tuple[float, float]:
    delta = _mod2pi(u - v)
    a = math.sin(u) - math.sin(delta)
    b = math.cos(u) - math.cos(delta) - 1.0
    t1 = math.atan2(eta * a - xi * b, xi * a + eta * b)
    t2 = 2.0 * (math.cos(delta) - math.cos(v) - math.cos(u)) + 3.0
    tau = _mod2pi(t1 + math.pi) if t2 < 0.0 else _mod2pi(t1)
    omega = _mod2pi(tau - u + v - phi)
    return tau, omega


# Formula 8.1
def _lp_sp_lp(x: float, y: float, phi: float) -> Optional[tuple[float, float, float]]:
    u, t = _polar(x - math.sin(phi), y - 1.0 + math.cos(phi))
    if t >= -_ZERO:
        v = _mod2pi(phi - t)
        if v >= -_ZERO:
            return t, u, v
    return None


# Formula 8.2
def _lp_sp_rp(x: float, y: float, phi: float) -> Optional[tuple[float, float, float]]:
    u1, t1 = _polar(x + math.sin(phi), y - 1.0 - math.cos(phi))
    u1 = u1 * u1
    if u1 < 4.0:
        return None
    u = math.sqrt(u1 - 4.0)
    t = _mod2pi(t1 + math.atan2(2.0, u))
    v = _mod2pi(t - phi)
    if t >= -_ZERO and v >= -_ZERO:
        return t, u, v
    return None


# Formulas 8.3 / 8.4 (with the sign typo of the paper corrected)
def _lp_rm_l(x: float, y: float, phi: float) -> Optional[tuple[float, float, float]]:
    xi = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    u1, theta = _polar(xi, eta)
    if u1 > 4.0:
        return None
    u = -2.0 * math.asin(0.25 * u1)
    t = _mod2pi(theta + 0.5 * u + math.pi)
    v = _mod2pi(phi - t + u)
    if t >= -_ZERO and u <= _ZERO:
        return t, u, v
    return None


# Formula 8.7
def _lp_rup_lum_rm(
    x: float, y: float, phi: float
) -> Optional[tuple[float, float, float]]:
    xi = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    rho = 0.25 * (2.0 + math.hypot(xi, eta))
    if rho > 1.0:
        return None
    u = math.acos(rho)
    t, v = _tau_omega(u, -u, xi, eta, phi)
    if t >= -_ZERO and v <= _ZERO:
        return t, u, v
    return None


# Formula 8.8
def _lp_rum_lum_rp(
    x: float, y: float, phi: float
) -> Optional[tuple[float, float, float]]:
    xi = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    rho = (20.0 - xi * xi - eta * eta) / 16.0
    if not 0.0 <= rho <= 1.0:
        return None
    u = -math.acos(rho)
    if u < -_HALF_PI:
        return None
    t, v = _tau_omega(u, u, xi, eta, phi)
    if t >= -_ZERO and v >= -_ZERO:
        return t, u, v
    return None


# Formula 8.9
def _lp_rm_sm_lm(
    x: float, y: float, phi: float
) -> Optional[tuple[float, float, float]]:
    xi = x - math.sin(phi)
    eta = y - 1.0 + math.cos(phi)
    rho, theta = _polar(xi, eta)
    if rho < 2.0:
        return None
    r = math.sqrt(rho * rho - 4.0)
    u = 2.0 - r
    t = _mod2pi(theta + math.atan2(r, -2.0))
    v = _mod2pi(phi - _HALF_PI - t)
    if t >= -_ZERO and u <= _ZERO and v <= _ZERO:
        return t, u, v
    return None


# Formula 8.10
def _lp_rm_sm_rm(
    x: float, y: float, phi: float
) -> Optional[tuple[float, float, float]]:
    xi = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    rho, theta = _polar(-eta, xi)
    if rho < 2.0:
        return None
    t = theta
    u = 2.0 - rho
    v = _mod2pi(t + _HALF_PI - phi)
    if t >= -_ZERO and u <= _ZERO and v <= _ZERO:
        return t, u, v
    return None


# Formula 8.11 (with the typo of the paper corrected)
def _lp_rm_s_lm_rp(
    x: float, y: float, phi: float
) -> Optional[tuple[float, float, float]]:
    xi = x + math.sin(phi)
    eta = y - 1.0 - math.cos(phi)
    rho, _ = _polar(xi, eta)
    if rho < 2.0:
        return None
    u = 4.0 - math.sqrt(rho * rho - 4.0)
    if u > _ZERO:
        return None
    t = _mod2pi(math.atan2((4.0 - u) * xi - 2.0 * eta, -2.0 * xi + (u - 4.0) * eta))
    v = _mod2pi(t - phi)
    if t >= -_ZERO and v >= -_ZERO:
        return t, u, v
    return None


class _Shortest:
    """Keeps the shortest candidate seen so far."""

    def __init__(self) -> None:
        self.path = _NO_PATH

    def offer(self, word: str, *lengths: float) -> None:
        candidate = ReedsSheppPath(word, lengths)
        if candidate.length < self.path.length:
            self.path = candidate


def _csc(x: float, y: float, phi: float, best: _Shortest) -> None:
    if r := _lp_sp_lp(x, y, phi):
        best.offer("LSL", *r)
    if r := _lp_sp_lp(-x, y, -phi):  # timeflip
        best.offer("LSL", -r[0], -r[1], -r[2])
    if r := _lp_sp_lp(x, -y, -phi):  # reflect
        best.offer("RSR", *r)
    if r := _lp_sp_lp(-x, -y, phi):  # timeflip + reflect
        best.offer("RSR", -r[0], -r[1], -r[2])
    if r := _lp_sp_rp(x, y, phi):
        best.offer("LSR", *r)
    if r := _lp_sp_rp(-x, y, -phi):
        best.offer("LSR", -r[0], -r[1], -r[2])
    if r := _lp_sp_rp(x, -y, -phi):
        best.offer("RSL", *r)
    if r := _lp_sp_rp(-x, -y, phi):
        best.offer("RSL", -r[0], -r[1], -r[2])


def _ccc(x: float, y: float, phi: float, best: _Shortest) -> None:
    if r := _lp_rm_l(x, y, phi):
        best.offer("LRL", *r)
    if r := _lp_rm_l(-x, y, -phi):
        best.offer("LRL", -r[0], -r[1], -r[2])
    if r := _lp_rm_l(x, -y, -phi):
        best.offer("RLR", *r)
    if r := _lp_rm_l(-x, -y, phi):
        best.offer("RLR", -r[0], -r[1], -r[2])

    # backwards
    xb = x * math.cos(phi) + y * math.sin(phi)
    yb = x * math.sin(phi) - y * math.cos(phi)
    if r := _lp_rm_l(xb, yb, phi):
        best.offer("LRL", r[2], r[1], r[0])
    if r := _lp_rm_l(-xb, yb, -phi):
        best.offer("LRL", -r[2], -r[1], -r[0])
    if r := _lp_rm_l(xb, -yb, -phi):
        best.offer("RLR", r[2], r[1], r[0])
    if r := _lp_rm_l(-xb, -yb, phi):
        best.offer("RLR", -r[2], -r[1], -r[0])


def _cccc(x: float, y: float, phi: float, best: _Shortest) -> None:
    if r := _lp_rup_lum_rm(x, y, phi):
        best.offer("LRLR", r[0], r[1], -r[1], r[2])
    if r := _lp_rup_lum_rm(-x, y, -phi):
        best.offer("LRLR", -r[0], -r[1], r[1], -r[2])
    if r := _lp_rup_lum_rm(x, -y, -phi):
        best.offer("RLRL", r[0], r[1], -r[1], r[2])
    if r := _lp_rup_lum_rm(-x, -y, phi):
        best.offer("RLRL", -r[0], -r[1], r[1], -r[2])

    if r := _lp_rum_lum_rp(x, y, phi):
        best.offer("LRLR", r[0], r[1], r[1], r[2])
    if r := _lp_rum_lum_rp(-x, y, -phi):
        best.offer("LRLR", -r[0], -r[1], -r[1], -r[2])
    if r := _lp_rum_lum_rp(x, -y, -phi):
        best.offer("RLRL", r[0], r[1], r[1], r[2])
    if r := _lp_rum_lum_rp(-x, -y, phi):
        best.offer("RLRL", -r[0], -r[1], -r[1], -r[2])


def _ccsc(x: float, y: float, phi: float, best: _Shortest) -> None:
    if r := _lp_rm_sm_lm(x, y, phi):
        best.offer("LRSL", r[0], -_HALF_PI, r[1], r[2])
    if r := _lp_rm_sm_lm(-x, y, -phi):
        best.offer("LRSL", -r[0], _HALF_PI, -r[1], -r[2])
    if r := _lp_rm_sm_lm(x, -y, -phi):
        best.offer("RLSR", r[0], -_HALF_PI, r[1], r[2])
    if r := _lp_rm_sm_lm(-x, -y, phi):
        best.offer("RLSR", -r[0], _HALF_PI, -r[1], -r[2])

    if r := _lp_rm_sm_rm(x, y, phi):
        best.offer("LRSR", r[0], -_HALF_PI, r[1], r[2])
    if r := _lp_rm_sm_rm(-x, y, -phi):
        best.offer("LRSR", -r[0], _HALF_PI, -r[1], -r[2])
    if r := _lp_rm_sm_rm(x, -y, -phi):
        best.offer("RLSL", r[0], -_HALF_PI, r[1], r[2])
    if r := _lp_rm_sm_rm(-x, -y, phi):
        best.offer("RLSL", -r[0], _HALF_PI, -r[1], -r[2])

    # backwards
    xb = x * math.cos(phi) + y * math.sin(phi)
    yb = x * math.sin(phi) - y * math.cos(phi)
    if r := _lp_rm_sm_lm(xb, yb, phi):
        best.offer("LSRL", r[2], r[1], -_HALF_PI, r[0])
    if r := _lp_rm_sm_lm(-xb, yb, -phi):
        best.offer("LSRL", -r[2], -r[1], _HALF_PI, -r[0])
    if r := _lp_rm_sm_lm(xb, -yb, -phi):
        best.offer("RSLR", r[2], r[1], -_HALF_PI, r[0])
    if r := _lp_rm_sm_lm(-xb, -yb, phi):
        best.offer("RSLR", -r[2], -r[1], _HALF_PI, -r[0])

    if r := _lp_rm_sm_rm(xb, yb, phi):
        best.offer("RSRL", r[2], r[1], -_HALF_PI, r[0])
    if r := _lp_rm_sm_rm(-xb, yb, -phi):
        best.offer("RSRL", -r[2], -r[1], _HALF_PI, -r[0])
    if r := _lp_rm_sm_rm(xb, -yb, -phi):
        best.offer("LSLR", r[2], r[1], -_HALF_PI, r[0])
    if r := _lp_rm_sm_rm(-xb, -yb, phi):
        best.offer("LSLR", -r[2], -r[1], _HALF_PI, -r[0])


def _ccscc(x: float, y: float, phi: float, best: _Shortest) -> None:
    if r := _lp_rm_s_lm_rp(x, y, phi):
        best.offer("LRSLR", r[0], -_HALF_PI, r[1], -_HALF_PI, r[2])
    if r := _lp_rm_s_lm_rp(-x, y, -phi):
        best.offer("LRSLR", -r[0], _HALF_PI, -r[1], _HALF_PI, -r[2])
    if r := _lp_rm_s_lm_rp(x, -y, -phi):
        best.offer("RLSRL", r[0], -_HALF_PI, r[1], -_HALF_PI, r[2])
    if r := _lp_rm_s_lm_rp(-x, -y, phi):
        best.offer("RLSRL", -r[0], _HALF_PI, -r[1], _HALF_PI, -r[2])


def shortest_reeds_shepp_path(x: float, y: float, phi: float) -> ReedsSheppPath:
    """Shortest Reeds-Shepp word for a goal (x, y, phi) in the start frame.

    Coordinates are in units of the turning radius.
    """
    best = _Shortest()
    _csc(x, y, phi, best)
    _ccc(x, y, phi, best)
    _cccc(x, y, phi, best)
    _ccsc(x, y, phi, best)
    _ccscc(x, y, phi, best)
    return best.path


class ReedsSheppSteeringFunction(SteeringFunction):
    """Shortest Reeds-Shepp curves, driving forwards and backwards.

    Args:
        kappa_max: Maximum curvature [1/m]
        discretization: Path sampling step [m]
    """

    def __init__(self, kappa_max: float, discretization: float):
        self.kappa_max = kappa_max
        self.radius = 1.0 / kappa_max
        self.discretization = discretization

    @property
    def name(self) -> str:
        return "reeds_shepp"

    def _shortest(self, start: State, goal: State) -> ReedsSheppPath:
        dx = goal.x - start.x
        dy = goal.y - start.y
        c = math.cos(start.theta)
        s = math.sin(start.theta)
        x = c * dx + s * dy
        y = -s * dx + c * dy
        return shortest_reeds_shepp_path(
            x / self.radius, y / self.radius, goal.theta - start.theta
        )

    def get_controls(self, start: State, goal: State) -> list[Control]:
        path = self._shortest(start, goal)
        curvature = {"L": self.kappa_max, "S": 0.0, "R": -self.kappa_max}
        return [
            Control(delta_s=length * self.radius, kappa=curvature[segment])
            for segment, length in zip(path.word, path.lengths)
        ]

    def get_path(self, start: State, goal: State) -> list[State]:
        return integrate_controls(
            start, self.get_controls(start, goal), self.discretization
        )

    def get_distance(self, start: State, goal: State) -> float:
        return self._shortest(start, goal).length * self.radius
