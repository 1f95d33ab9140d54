# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 NVIDIA Corporation

"""
Flat CSV records of per-pair benchmark results for offline analysis.

One file per steering function, named "<id>_stats.csv", with the columns
start,goal,computation_time,path_length. Start and goal hold the five state
fields "x y theta kappa d" separated by spaces. Numbers use six significant
digits.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

import polars as pl  # type: ignore[import-not-found]

from steering_benchmark.driver import SampleRecord
from steering_benchmark.errors import RecordWriteError
from steering_benchmark.state import State
from steering_benchmark.steering_function import SteeringFunctionId

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ["start", "goal", "computation_time", "path_length"]


def _format_number(value: float) -> str:
    return f"{value:g}"


def _format_state(state: State) -> str:
    return " ".join(_format_number(v) for v in state.fields())


def _parse_state(text: str) -> State:
    x, y, theta, kappa, d = text.split()
    return State(
        x=float(x), y=float(y), theta=float(theta), kappa=float(kappa), d=int(float(d))
    )


def record_path(output_dir: str | os.PathLike, steering_id: str) -> Path:
    """Path of the record file for one steering function."""
    return Path(output_dir) / f"{SteeringFunctionId.parse(steering_id)}_stats.csv"


def records_to_frame(records: Sequence[SampleRecord]) -> pl.DataFrame:
    """Render records as a string-typed frame in record file layout."""
    return pl.DataFrame(
        {
            "start": [_format_state(r.start) for r in records],
            "goal": [_format_state(r.goal) for r in records],
            "computation_time": [_format_number(r.computation_time) for r in records],
            "path_length": [
                _format_number(r.path_length) if r.path_length is not None else None
                for r in records
            ],
        },
        schema={col: pl.Utf8 for col in RECORD_COLUMNS},
    )


def write_records(
    output_dir: str | os.PathLike,
    steering_id: str,
    records: Sequence[SampleRecord],
) -> Path:
    """Write the records of one steering function, replacing any previous file.

    The file is written next to its destination and renamed into place, so the
    destination either holds the complete record set or does not exist.

    Returns:
        Path of the written file

    Raises:
        RecordWriteError: If the file could not be written
    """
    path = record_path(output_dir, steering_id)
    tmp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.unlink(missing_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        os.close(fd)
        records_to_frame(records).write_csv(tmp_path)
        os.replace(tmp_path, path)
    except Exception as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise RecordWriteError(f"Failed to write records to {path}: {e}") from e

    logger.info("Wrote %d records to %s", len(records), path)
    return path


def read_records(path: str | os.PathLike) -> list[SampleRecord]:
    """Read a record file back into sample records."""
    df = pl.read_csv(path, infer_schema_length=0)
    if df.columns != RECORD_COLUMNS:
        raise ValueError(
            f"Unexpected record columns in {path}: {df.columns} (expected {RECORD_COLUMNS})"
        )
    return [
        SampleRecord(
            start=_parse_state(row["start"]),
            goal=_parse_state(row["goal"]),
            computation_time=float(row["computation_time"]),
            path_length=float(row["path_length"]) if row["path_length"] else None,
        )
        for row in df.iter_rows(named=True)
    ]
