# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Steering function interface and the closed set of benchmarked identities.

A steering function connects two states with a bounded-curvature maneuver.
The benchmark treats every implementation as an opaque collaborator behind
this interface; only the cost of its calls is measured.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum

from steering_benchmark.errors import ConfigurationError, UnknownSteeringFunctionError
from steering_benchmark.state import Control, State


class SteeringFunctionId(StrEnum):
    """Identities of the benchmarked steering functions.

    Declaration order is the benchmark order.
    """

    CC_DUBINS = "CC_Dubins"
    CC_DUBINS_BACKWARDS = "CC_Dubins_Backwards"
    DUBINS = "Dubins"
    DUBINS_BACKWARDS = "Dubins_Backwards"
    CC_RS = "CC_RS"
    HC00 = "HC00"
    HC0PM = "HC0pm"
    HCPM0 = "HCpm0"
    HCPMPM = "HCpmpm"
    RS = "RS"

    @classmethod
    def parse(cls, value: "str | SteeringFunctionId") -> "SteeringFunctionId":
        """Look up an identity by its label, failing loudly for unknown labels."""
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise UnknownSteeringFunctionError(
                f"Unknown steering function '{value}' (known: {known})"
            ) from None

    @property
    def is_curvature_continuous(self) -> bool:
        return self not in (
            SteeringFunctionId.DUBINS,
            SteeringFunctionId.DUBINS_BACKWARDS,
            SteeringFunctionId.RS,
        )

    @property
    def forwards(self) -> bool | None:
        """Direction flag of Dubins-family identities, None for the others."""
        if self in (SteeringFunctionId.CC_DUBINS, SteeringFunctionId.DUBINS):
            return True
        if self in (
            SteeringFunctionId.CC_DUBINS_BACKWARDS,
            SteeringFunctionId.DUBINS_BACKWARDS,
        ):
            return False
        return None


@dataclass(frozen=True)
class SteeringParameters:
    """Construction parameters shared by all steering functions.

    Attributes:
        kappa_max: Maximum curvature magnitude [1/m]
        sigma_max: Maximum curvature rate [1/m^2], used by curvature-continuous variants
        discretization: Path sampling step [m]
    """

    kappa_max: float = 1.0
    sigma_max: float = 1.0
    discretization: float = 0.1

    def __post_init__(self) -> None:
        for name in ("kappa_max", "sigma_max", "discretization"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(
                    f"Steering parameter '{name}' must be finite and > 0, got {value}"
                )


class SteeringFunction(ABC):
    """Abstract interface for steering functions.

    Implementations are long-lived and reused for every query pair of a
    workload. Calls are strictly sequential.
    """

    @abstractmethod
    def get_controls(self, start: State, goal: State) -> list[Control]:
        """Compute the maneuver connecting start to goal."""
        ...

    @abstractmethod
    def get_path(self, start: State, goal: State) -> list[State]:
        """Compute the maneuver and sample it at the configured discretization."""
        ...

    @abstractmethod
    def get_distance(self, start: State, goal: State) -> float:
        """Length of the maneuver without sampling it."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Steering function name for logging/identification."""
        ...
