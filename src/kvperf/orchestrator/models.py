# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for sweep orchestration."""

import re
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kvperf.common.enums import Distribution, FailureCategory, Workload


class RunConfig(BaseModel):
    """Configuration for a single workload run (one grid point).

    Attributes:
        workload: Workload mix to execute
        threads: Number of worker threads inside the workload binary
        record_count: Number of records pre-loaded into the map
        operation_count: Number of measured operations
        distribution: Key access distribution
        zipf_s: Zipfian skew parameter, set only for zipfian runs
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    workload: Workload
    threads: int = Field(ge=1)
    record_count: int = Field(ge=1)
    operation_count: int = Field(ge=1)
    distribution: Distribution = Distribution.ZIPFIAN
    zipf_s: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_skew(self) -> "RunConfig":
        if self.distribution == Distribution.ZIPFIAN and self.zipf_s is None:
            raise ValueError("zipf_s is required when distribution is 'zipfian'")
        if self.distribution == Distribution.UNIFORM and self.zipf_s is not None:
            raise ValueError(
                f"zipf_s must not be set when distribution is 'uniform' (got {self.zipf_s})"
            )
        return self

    @property
    def label(self) -> str:
        """Label safe for log lines and file names: workload_a_threads_4."""
        label = f"workload_{self.workload.value}_threads_{self.threads}"
        return re.sub(r'[/\\<>:"|?*]|\.\.', "", label)


class CompletionMetrics(BaseModel):
    """Numbers extracted from a workload's completion line."""

    model_config = ConfigDict(frozen=True)

    elapsed_seconds: float = Field(ge=0)
    throughput_mops: float = Field(ge=0)


class RunResult(BaseModel):
    """Result of a successfully parsed run.

    Attributes:
        config: Grid point that produced this result
        elapsed_seconds: Measured elapsed time reported by the workload
        throughput_mops: Reported throughput in millions of operations per second
    """

    model_config = ConfigDict(frozen=True)

    config: RunConfig
    elapsed_seconds: float = Field(ge=0)
    throughput_mops: float = Field(ge=0)


class RunExecution(BaseModel):
    """Raw outcome of invoking the workload binary once."""

    model_config = ConfigDict(frozen=True)

    config: RunConfig
    command: list[str]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    duration_seconds: float = Field(default=0.0, ge=0)
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


class FailedRun(BaseModel):
    """A grid point that produced no result row."""

    label: str
    category: FailureCategory
    reason: str


class SweepSummary(BaseModel):
    """Outcome of a complete sweep.

    Attributes:
        started_at: Wall-clock time the sweep started
        finished_at: Wall-clock time the sweep finished
        total_points: Number of grid points visited
        successful_runs: Number of rows written to the results table
        failed_runs: Grid points that produced no row, in grid order
        results_path: Path of the results table
    """

    started_at: datetime
    finished_at: datetime
    total_points: int = Field(ge=0)
    successful_runs: int = Field(ge=0)
    failed_runs: list[FailedRun] = Field(default_factory=list)
    results_path: Path

    @property
    def num_failed(self) -> int:
        return len(self.failed_runs)

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()
