# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Incremental CSV writer for sweep results."""

import csv
import logging
import os
from pathlib import Path
from typing import IO

from kvperf.common.exceptions import ResultSinkError
from kvperf.common.utils import format_number
from kvperf.orchestrator.models import RunResult

logger = logging.getLogger(__name__)

__all__ = [
    "RESULT_COLUMNS",
    "ResultsCsvWriter",
]

RESULT_COLUMNS = (
    "workload",
    "threads",
    "records",
    "ops",
    "dist",
    "zipf_s",
    "elapsed_sec",
    "throughput_Mops",
)


class ResultsCsvWriter:
    """Append-only results table, one row per successfully parsed run.

    Opening the writer truncates the file and writes the header exactly once.
    Every appended row is flushed and fsynced before append() returns, so a
    crash mid-sweep leaves all earlier rows intact.

    Usage:
        with ResultsCsvWriter(path) as sink:
            sink.append(result)
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.rows_written = 0
        self._file: IO[str] | None = None
        self._writer = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        """Create (or truncate) the results file and write the header row.

        Raises:
            ResultSinkError: If the file cannot be created or written
        """
        if self._file is not None:
            raise ResultSinkError(f"Results file {self.path} is already open", self.path)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise ResultSinkError(
                f"Cannot create results file {self.path}: {e}", self.path
            ) from e

        self._writer = csv.writer(self._file, lineterminator="\n")
        self._write_row(list(RESULT_COLUMNS))
        self.rows_written = 0
        logger.debug(f"Created results file {self.path}")

    def append(self, result: RunResult) -> None:
        """Append one result row and make it durable.

        Raises:
            ResultSinkError: If the file is not open or the write fails
        """
        if self._file is None:
            raise ResultSinkError(
                f"Results file {self.path} is not open; call open() first", self.path
            )
        self._write_row(self.format_row(result))
        self.rows_written += 1

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            raise ResultSinkError(
                f"Failed to close results file {self.path}: {e}", self.path
            ) from e
        finally:
            self._file = None
            self._writer = None

    @staticmethod
    def format_row(result: RunResult) -> list[str]:
        """Format a RunResult as cells in RESULT_COLUMNS order."""
        config = result.config
        return [
            config.workload.value,
            format_number(config.threads),
            format_number(config.record_count),
            format_number(config.operation_count),
            config.distribution.value,
            format_number(config.zipf_s),
            format_number(result.elapsed_seconds),
            format_number(result.throughput_mops),
        ]

    def _write_row(self, row: list[str]) -> None:
        try:
            self._writer.writerow(row)
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as e:
            raise ResultSinkError(
                f"Failed to write to results file {self.path}: {e}", self.path
            ) from e

    def __enter__(self) -> "ResultsCsvWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
