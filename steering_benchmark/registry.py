# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Construction of steering function instances from their identities.

Instances are built once per benchmark and owned by the caller. Two backends
are consulted in order:
- an optional external provider, given as "package.module:factory", called as
  factory(steering_id, parameters) and returning a steering function or None
- the built-in reference implementations (Dubins and Reeds-Shepp)
"""

import importlib
import logging
from typing import Callable, Iterable, Optional

from steering_benchmark.errors import (
    ConfigurationError,
    UnsupportedSteeringFunctionError,
)
from steering_benchmark.steering_function import (
    SteeringFunction,
    SteeringFunctionId,
    SteeringParameters,
)

logger = logging.getLogger(__name__)

SteeringFactory = Callable[
    [SteeringFunctionId, SteeringParameters], Optional[SteeringFunction]
]

_REQUIRED_METHODS = ("get_controls", "get_path", "get_distance")


def create_builtin_steering_function(
    steering_id: SteeringFunctionId, parameters: SteeringParameters
) -> SteeringFunction | None:
    """Create a built-in steering function, or None if there is none for the identity."""
    if steering_id in (SteeringFunctionId.DUBINS, SteeringFunctionId.DUBINS_BACKWARDS):
        from steering_benchmark.steering_impl import DubinsSteeringFunction

        return DubinsSteeringFunction(
            parameters.kappa_max,
            parameters.discretization,
            forwards=bool(steering_id.forwards),
        )
    elif steering_id == SteeringFunctionId.RS:
        from steering_benchmark.steering_impl import ReedsSheppSteeringFunction

        return ReedsSheppSteeringFunction(
            parameters.kappa_max, parameters.discretization
        )
    return None


def load_provider(spec: str) -> SteeringFactory:
    """Import an external steering function factory from "module:attribute"."""
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            f"Steering provider must look like 'package.module:factory', got '{spec}'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Could not import steering provider module '{module_name}': {e}"
        ) from e
    factory = getattr(module, attribute, None)
    if not callable(factory):
        raise ConfigurationError(
            f"Steering provider '{spec}' does not name a callable"
        )
    return factory


def create_steering_function(
    steering_id: SteeringFunctionId,
    parameters: SteeringParameters,
    provider: SteeringFactory | None = None,
) -> SteeringFunction:
    """Create the steering function for one identity.

    Raises:
        UnsupportedSteeringFunctionError: If no backend provides the identity
    """
    instance = provider(steering_id, parameters) if provider is not None else None
    if instance is None:
        instance = create_builtin_steering_function(steering_id, parameters)
    if instance is None:
        raise UnsupportedSteeringFunctionError(
            f"No backend provides steering function '{steering_id}'; "
            "configure backend.provider to benchmark it"
        )
    missing = [m for m in _REQUIRED_METHODS if not callable(getattr(instance, m, None))]
    if missing:
        raise ConfigurationError(
            f"Steering function for '{steering_id}' lacks {', '.join(missing)}"
        )
    return instance


def build_steering_functions(
    steering_ids: Iterable[SteeringFunctionId] | None,
    parameters: SteeringParameters,
    provider: SteeringFactory | None = None,
) -> tuple[dict[SteeringFunctionId, SteeringFunction], dict[SteeringFunctionId, str]]:
    """Construct every requested steering function once.

    With steering_ids=None every registered identity is tried; identities no
    backend provides are skipped instead of being reported as errors.

    Returns:
        Tuple of (instances by identity, construction errors by identity)
    """
    skip_unsupported = steering_ids is None
    if steering_ids is None:
        steering_ids = list(SteeringFunctionId)

    instances: dict[SteeringFunctionId, SteeringFunction] = {}
    errors: dict[SteeringFunctionId, str] = {}
    for steering_id in steering_ids:
        try:
            instances[steering_id] = create_steering_function(
                steering_id, parameters, provider
            )
        except UnsupportedSteeringFunctionError as e:
            if skip_unsupported:
                logger.debug("Skipping %s: %s", steering_id, e)
                continue
            logger.error("Cannot construct %s: %s", steering_id, e)
            errors[steering_id] = str(e)
        except ConfigurationError as e:
            logger.error("Cannot construct %s: %s", steering_id, e)
            errors[steering_id] = str(e)
        else:
            logger.debug("Constructed steering function %s", steering_id)
    return instances, errors


def available_steering_functions(
    parameters: SteeringParameters, provider: SteeringFactory | None = None
) -> list[SteeringFunctionId]:
    """Identities that the configured backends can construct, in benchmark order."""
    instances, _ = build_steering_functions(None, parameters, provider)
    return list(instances)
