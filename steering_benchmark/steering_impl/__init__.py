# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Built-in steering functions.

This subpackage contains the reference implementations that ship with the
benchmark:
- DubinsSteeringFunction: Shortest Dubins curves, forwards or backwards only
- ReedsSheppSteeringFunction: Shortest Reeds-Shepp curves
"""

from steering_benchmark.steering_impl.dubins import DubinsSteeringFunction
from steering_benchmark.steering_impl.reeds_shepp import ReedsSheppSteeringFunction

__all__ = ["DubinsSteeringFunction", "ReedsSheppSteeringFunction"]
