# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated, Any

import orjson
from pydantic import Field, field_validator

from kvperf.common.config.base_config import BaseConfig
from kvperf.common.config.config_defaults import SweepDefaults
from kvperf.common.enums import Distribution, Workload
from kvperf.common.exceptions import ConfigurationError
from kvperf.orchestrator.models import RunConfig


class SweepConfig(BaseConfig):
    """Immutable configuration for one benchmark sweep.

    The grid is ``workloads`` x ``threads``; every other field is fixed for the
    whole sweep.
    """

    @field_validator("workloads", mode="before")
    @classmethod
    def parse_workload_list(cls, v: Any) -> list[Workload]:
        """Parse workload identifiers from a list or a comma-separated string.

        Converts strings like "a,b,c" into [Workload.A, Workload.B, Workload.C].
        Order and duplicates are preserved.

        Raises:
            ValueError: If the list is empty or contains an unknown identifier
        """
        parts = _split_list(v)
        if not parts:
            raise ValueError(
                "At least one workload is required. "
                "Provide a comma-separated list of workloads: --workloads a,b,c"
            )

        workloads = []
        for part in parts:
            if isinstance(part, Workload):
                workloads.append(part)
                continue
            try:
                workloads.append(Workload(str(part).strip().lower()))
            except ValueError as err:
                valid = ", ".join(w.value for w in Workload)
                raise ValueError(
                    f"Invalid workload: '{part}'. Valid workloads are: {valid}"
                ) from err
        return workloads

    @field_validator("threads", mode="before")
    @classmethod
    def parse_thread_list(cls, v: Any) -> list[int]:
        """Parse thread counts from a list or a comma-separated string.

        Converts strings like "1,2,4" into [1, 2, 4]. Order and duplicates are
        preserved.

        Raises:
            ValueError: If the list is empty or a value is not a positive integer
        """
        parts = _split_list(v)
        if not parts:
            raise ValueError(
                "At least one thread count is required. "
                "Provide a comma-separated list of thread counts: --threads 1,2,4"
            )

        threads = []
        for part in parts:
            if isinstance(part, bool):
                raise ValueError(f"Invalid thread count: {part!r}")
            try:
                value = int(str(part).strip()) if isinstance(part, str) else int(part)
            except (TypeError, ValueError) as err:
                raise ValueError(
                    f"Invalid thread count: '{part}'. "
                    f"All values must be positive integers (>= 1). "
                    f"Examples: --threads 1,2,4,8"
                ) from err
            if isinstance(part, float) and part != value:
                raise ValueError(f"Invalid thread count: '{part}'. Must be an integer.")
            if value < 1:
                raise ValueError(
                    f"Invalid thread count: {value}. Thread counts must be >= 1."
                )
            threads.append(value)
        return threads

    binary: Annotated[
        Path,
        Field(description="Path to the workload benchmark executable."),
    ] = SweepDefaults.BINARY

    workloads: Annotated[
        list[Workload],
        Field(
            description="Workload mixes to sweep, in order. Accepts a comma-separated "
            "string such as 'a,b,c'.",
        ),
    ] = SweepDefaults.WORKLOADS

    threads: Annotated[
        list[int],
        Field(
            description="Thread counts to sweep for every workload, in order. Accepts "
            "a comma-separated string such as '1,2,4,8'.",
        ),
    ] = SweepDefaults.THREADS

    record_count: Annotated[
        int,
        Field(ge=1, description="Number of records pre-loaded into the map."),
    ] = SweepDefaults.RECORD_COUNT

    operation_count: Annotated[
        int,
        Field(ge=1, description="Number of measured operations per run."),
    ] = SweepDefaults.OPERATION_COUNT

    distribution: Annotated[
        Distribution,
        Field(description="Key access distribution: uniform or zipfian."),
    ] = SweepDefaults.DISTRIBUTION

    zipf_s: Annotated[
        float,
        Field(
            gt=0,
            description="Zipfian skew parameter. Only passed to the workload when "
            "distribution is zipfian.",
        ),
    ] = SweepDefaults.ZIPF_S

    output_file: Annotated[
        Path,
        Field(
            description="Results table (CSV). Truncated and recreated at sweep start."
        ),
    ] = SweepDefaults.OUTPUT_FILE

    summary_file: Annotated[
        Path | None,
        Field(description="Optional JSON file receiving the sweep summary."),
    ] = None

    cooldown_seconds: Annotated[
        float,
        Field(
            ge=0,
            description="Pause between consecutive runs (seconds). 0 disables it.",
        ),
    ] = SweepDefaults.COOLDOWN_SECONDS

    run_timeout_seconds: Annotated[
        float | None,
        Field(
            gt=0,
            description="Deadline for a single run (seconds). A run exceeding it is "
            "killed and skipped. Default: no deadline.",
        ),
    ] = SweepDefaults.RUN_TIMEOUT_SECONDS

    @property
    def grid_size(self) -> int:
        return len(self.workloads) * len(self.threads)

    @property
    def skew(self) -> float | None:
        """Skew passed to the workload, None for uniform sweeps."""
        if self.distribution == Distribution.ZIPFIAN:
            return self.zipf_s
        return None

    def run_config_for(self, workload: Workload, threads: int) -> RunConfig:
        """Build the RunConfig for one grid point."""
        return RunConfig(
            workload=workload,
            threads=threads,
            record_count=self.record_count,
            operation_count=self.operation_count,
            distribution=self.distribution,
            zipf_s=self.skew,
        )


def load_sweep_config(
    config_file: Path | None = None, overrides: dict[str, Any] | None = None
) -> SweepConfig:
    """Build a SweepConfig from an optional JSON file plus explicit overrides.

    Override values that are None are ignored, so CLI flags that were not given
    fall back to the file, then to the defaults.

    Raises:
        ConfigurationError: If the config file cannot be read or is not a JSON object
        pydantic.ValidationError: If the merged values are invalid
    """
    data: dict[str, Any] = {}
    if config_file is not None:
        try:
            data = orjson.loads(Path(config_file).read_bytes())
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file {config_file}: {e}"
            ) from e
        except orjson.JSONDecodeError as e:
            raise ConfigurationError(
                f"Config file {config_file} is not valid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a JSON object, "
                f"got {type(data).__name__}"
            )

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    return SweepConfig.model_validate(data)


def _split_list(v: Any) -> list[Any]:
    if v is None:
        return []
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    if isinstance(v, (list, tuple)):
        return list(v)
    return [v]
