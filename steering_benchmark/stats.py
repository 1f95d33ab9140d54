# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Mean and population standard deviation over timing samples."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from steering_benchmark.errors import EmptySampleError


def _as_array(samples: Sequence[float]) -> np.ndarray:
    values = np.array(samples, dtype=np.float64)
    if values.size == 0:
        raise EmptySampleError("Statistics require at least one sample")
    return values


def mean(samples: Sequence[float]) -> float:
    """Arithmetic mean of `samples`."""
    return float(np.mean(_as_array(samples)))


def std_dev(samples: Sequence[float]) -> float:
    """Population standard deviation of `samples` (no Bessel correction)."""
    return float(np.std(_as_array(samples), ddof=0))


@dataclass(frozen=True)
class SampleSummary:
    """Aggregate of one column of sample records."""

    mean: float
    std: float
    count: int


def summarize(samples: Sequence[float]) -> SampleSummary:
    values = _as_array(samples)
    return SampleSummary(
        mean=float(np.mean(values)),
        std=float(np.std(values, ddof=0)),
        count=int(values.size),
    )
