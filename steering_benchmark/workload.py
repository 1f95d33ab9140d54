# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Reproducible query-pair workloads.

Every scenario draws its workload from a freshly seeded generator so that all
steering functions, scenarios and repeated runs see the identical sequence of
(start, goal) pairs.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from steering_benchmark.errors import ConfigurationError
from steering_benchmark.state import QueryPair, State

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperatingRegion:
    """Extents of the region query poses are sampled from, centered at the origin."""

    x: float = 20.0  # [m]
    y: float = 20.0  # [m]
    theta: float = 2.0 * math.pi  # [rad]

    def __post_init__(self) -> None:
        for name in ("x", "y", "theta"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ConfigurationError(
                    f"Operating region extent '{name}' must be finite and >= 0, got {value}"
                )

    @property
    def low(self) -> np.ndarray:
        return -0.5 * np.array([self.x, self.y, self.theta], dtype=np.float64)

    @property
    def high(self) -> np.ndarray:
        return 0.5 * np.array([self.x, self.y, self.theta], dtype=np.float64)


@dataclass(frozen=True)
class Workload:
    """An ordered, read-only sequence of query pairs."""

    pairs: tuple[QueryPair, ...]
    seed: int
    region: OperatingRegion

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[QueryPair]:
        return iter(self.pairs)

    def __getitem__(self, index: int) -> QueryPair:
        return self.pairs[index]


class PoseGenerator:
    """Draws independent random query states inside an operating region.

    Generated states have zero curvature and an undefined driving direction.
    """

    def __init__(self, region: OperatingRegion | None = None, seed: int = 0):
        self.region = region or OperatingRegion()
        self.rng = np.random.default_rng(seed)

    def reseed(self, seed: int) -> None:
        """Restart the random stream from `seed`."""
        self.rng = np.random.default_rng(seed)

    def random_state(self) -> State:
        x, y, theta = self.rng.uniform(self.region.low, self.region.high)
        return State(x=float(x), y=float(y), theta=float(theta), kappa=0.0, d=0)

    def random_pairs(self, n: int) -> list[QueryPair]:
        """Draw `n` (start, goal) pairs.

        Consumes the random stream in the same order as 2 * n calls to
        random_state(), start before goal.
        """
        if n < 1:
            raise ConfigurationError(f"Number of query pairs must be >= 1, got {n}")
        draws = self.rng.uniform(self.region.low, self.region.high, size=(n, 2, 3))
        return [
            QueryPair(
                start=State(x=float(sx), y=float(sy), theta=float(st)),
                goal=State(x=float(gx), y=float(gy), theta=float(gt)),
            )
            for (sx, sy, st), (gx, gy, gt) in draws.tolist()
        ]


def generate_workload(
    n: int, seed: int = 0, region: OperatingRegion | None = None
) -> Workload:
    """Seed a generator once and draw `n` query pairs from it."""
    region = region or OperatingRegion()
    generator = PoseGenerator(region, seed=seed)
    pairs = generator.random_pairs(n)
    logger.debug("Generated workload of %d query pairs (seed=%d)", n, seed)
    return Workload(pairs=tuple(pairs), seed=seed, region=region)
