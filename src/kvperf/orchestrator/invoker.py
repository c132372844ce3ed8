# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Invocation of the workload benchmark binary."""

import logging
import os
import shlex
import shutil
import subprocess
import time
from pathlib import Path

from kvperf.common.enums import Distribution
from kvperf.common.exceptions import WorkloadLaunchError
from kvperf.common.utils import format_number
from kvperf.orchestrator.models import RunConfig, RunExecution

logger = logging.getLogger(__name__)

__all__ = [
    "WorkloadInvoker",
]


class WorkloadInvoker:
    """Runs the workload binary for one grid point at a time.

    Each call to invoke() starts exactly one child process with the inherited
    environment and blocks until it exits (or until the optional deadline).
    """

    def __init__(
        self,
        binary: Path | str,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize WorkloadInvoker.

        Args:
            binary: Path to the workload executable, or a bare name looked up on PATH
            timeout_seconds: Optional deadline per run; None waits indefinitely

        Raises:
            ValueError: If timeout_seconds is not positive
        """
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError(
                f"Invalid run timeout: {timeout_seconds} seconds. "
                f"Use a positive value, or None for no deadline."
            )
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def validate_binary(self) -> None:
        """Check that the binary exists and is executable before any run starts.

        Raises:
            WorkloadLaunchError: If the binary cannot be executed
        """
        binary = str(self.binary)
        if os.sep not in binary and (os.altsep is None or os.altsep not in binary):
            if shutil.which(binary) is None:
                raise WorkloadLaunchError(
                    f"Workload binary '{binary}' was not found on PATH", binary=binary
                )
            return

        path = Path(binary)
        if not path.exists():
            raise WorkloadLaunchError(
                f"Workload binary not found: {path}. "
                f"Build it first (e.g. cargo build --release) or pass --binary.",
                binary=path,
            )
        if not path.is_file():
            raise WorkloadLaunchError(
                f"Workload binary is not a file: {path}", binary=path
            )
        if not os.access(path, os.X_OK):
            raise WorkloadLaunchError(
                f"Workload binary is not executable: {path}", binary=path
            )

    def build_command(self, run_config: RunConfig) -> list[str]:
        """Build the argument vector for one run.

        The skew flags (--zipfian --zipf-s <s>) are only passed for zipfian runs.

        Args:
            run_config: Grid point to run

        Returns:
            Argument list, starting with the binary
        """
        command = [
            str(self.binary),
            "--workload",
            run_config.workload.value,
            "--threads",
            str(run_config.threads),
            "--recordcount",
            str(run_config.record_count),
            "--operationcount",
            str(run_config.operation_count),
        ]
        if run_config.distribution == Distribution.ZIPFIAN:
            command.extend(["--zipfian", "--zipf-s", format_number(run_config.zipf_s)])
        return command

    def invoke(self, run_config: RunConfig) -> RunExecution:
        """Run the workload binary for one grid point and capture its output.

        Args:
            run_config: Grid point to run

        Returns:
            RunExecution with the exit status and captured stdout/stderr. A
            non-zero exit or an exceeded deadline is reported through the
            returned value, not raised.

        Raises:
            WorkloadLaunchError: If the process could not be started at all
        """
        command = self.build_command(run_config)
        logger.debug(f"Executing: {shlex.join(command)}")

        start = time.perf_counter()
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            duration = time.perf_counter() - start
            logger.debug(f"{run_config.label} exceeded {self.timeout_seconds}s deadline")
            return RunExecution(
                config=run_config,
                command=command,
                returncode=None,
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr),
                duration_seconds=duration,
                timed_out=True,
            )
        except FileNotFoundError as e:
            raise WorkloadLaunchError(
                f"Workload binary not found: {self.binary}", binary=self.binary
            ) from e
        except PermissionError as e:
            raise WorkloadLaunchError(
                f"Workload binary is not executable: {self.binary}",
                binary=self.binary,
            ) from e
        except OSError as e:
            raise WorkloadLaunchError(
                f"Failed to start workload binary {self.binary}: {e}",
                binary=self.binary,
            ) from e

        return RunExecution(
            config=run_config,
            command=command,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            duration_seconds=time.perf_counter() - start,
        )


def _decode(data: str | bytes | None) -> str:
    # TimeoutExpired may carry raw bytes even when text mode was requested.
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
