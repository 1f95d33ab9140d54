# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Configuration schema for the steering function timing benchmark."""

import math
from dataclasses import dataclass, field
from typing import Optional

from omegaconf import OmegaConf


@dataclass
class SteeringConfig:
    """Parameters every steering function is constructed with."""

    kappa_max: float = 1.0  # Maximum curvature [1/m]
    sigma_max: float = 1.0  # Maximum curvature rate [1/m^2], CC/HC variants only
    discretization: float = 0.1  # Path sampling step [m]


@dataclass
class RegionConfig:
    """Operating region query states are drawn from (centered at the origin)."""

    x: float = 20.0  # [m]
    y: float = 20.0  # [m]
    theta: float = 2.0 * math.pi  # [rad]


@dataclass
class BackendConfig:
    """Where steering functions come from."""

    # External factory "package.module:callable", called as factory(id, parameters).
    # Identities it returns None for fall back to the built-in implementations.
    provider: Optional[str] = None


@dataclass
class RecordsConfig:
    """Per-pair CSV records of the control timing scenario."""

    enabled: bool = False
    output_dir: str = "results"


@dataclass
class TimingConfig:
    """Top-level benchmark configuration."""

    samples: int = 100_000  # Query pairs per scenario
    seed: int = 0  # Seed applied at the start of every scenario
    clock: str = "process_time"  # process_time (CPU) or perf_counter (wall clock)
    operations: list[str] = field(default_factory=lambda: ["controls", "path"])
    # Steering function identities, e.g. [Dubins, RS]. None benchmarks every
    # identity the configured backends provide.
    implementations: Optional[list[str]] = None
    # Contain steering function exceptions to the failing identity instead of aborting
    isolate_failures: bool = False
    description: str = ""
    plot_dir: Optional[str] = None
    log_level: str = "INFO"

    steering: SteeringConfig = field(default_factory=SteeringConfig)
    region: RegionConfig = field(default_factory=RegionConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    records: RecordsConfig = field(default_factory=RecordsConfig)


def load_config(
    config_path: str | None = None, overrides: list[str] | None = None
) -> TimingConfig:
    """Merge the schema defaults, an optional YAML file and dotlist overrides."""
    cfg = OmegaConf.structured(TimingConfig)
    if config_path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
    return OmegaConf.to_object(cfg)  # type: ignore[return-value]
