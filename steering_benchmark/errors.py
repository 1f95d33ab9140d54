# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""Exception hierarchy for the steering function benchmark."""


class BenchmarkError(Exception):
    """Base class for all benchmark errors."""


class ConfigurationError(BenchmarkError, ValueError):
    """Raised when the benchmark is configured with invalid values."""


class UnknownSteeringFunctionError(ConfigurationError):
    """Raised when an identifier does not name a registered steering function."""


class UnsupportedSteeringFunctionError(ConfigurationError):
    """Raised when no backend can construct the requested steering function."""


class EmptySampleError(BenchmarkError, ValueError):
    """Raised when statistics are requested over an empty sample sequence."""


class RecordWriteError(BenchmarkError, OSError):
    """Raised when a record file could not be written.

    No file is left at the target path when this is raised.
    """
