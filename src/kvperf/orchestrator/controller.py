# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Sequential sweep controller."""

import logging
import time
from collections.abc import Callable
from datetime import datetime

from rich.console import Console

from kvperf.common.config import SweepConfig, SweepDefaults
from kvperf.common.enums import FailureCategory
from kvperf.common.exceptions import OutputParseError
from kvperf.common.utils import format_number, tail
from kvperf.exporters.results_csv_exporter import ResultsCsvWriter
from kvperf.orchestrator.grid import generate_grid
from kvperf.orchestrator.invoker import WorkloadInvoker
from kvperf.orchestrator.models import (
    FailedRun,
    RunConfig,
    RunExecution,
    SweepSummary,
)
from kvperf.parsing.completion_parser import build_run_result

logger = logging.getLogger(__name__)

__all__ = [
    "SweepController",
]


class SweepController:
    """Drives a sweep over the configured grid, one run at a time.

    For each grid point the controller invokes the workload, forwards its raw
    output to the console, parses the completion line and appends a row to the
    results table. Runs that exit non-zero, time out or cannot be parsed are
    reported and skipped; launch and sink errors abort the sweep.
    """

    def __init__(
        self,
        config: SweepConfig,
        invoker: WorkloadInvoker,
        sink: ResultsCsvWriter,
        console: Console | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize SweepController.

        Args:
            config: Sweep configuration
            invoker: Runs the workload binary for one grid point
            sink: Results table; opened at sweep start, closed at the end
            console: Console receiving the workloads' raw output (defaults to stdout)
            sleep: Cooldown function, replaceable in tests
        """
        self.config = config
        self.invoker = invoker
        self.sink = sink
        self.console = console or Console()
        self._sleep = sleep

    def execute(self) -> SweepSummary:
        """Run every grid point in order.

        Returns:
            SweepSummary describing the completed sweep

        Raises:
            WorkloadLaunchError: If the workload binary cannot be started
            ResultSinkError: If the results table cannot be written
        """
        total = self.config.grid_size
        failed_runs: list[FailedRun] = []

        started_at = datetime.now()
        logger.info(f"Starting sweep at {started_at:%Y-%m-%d %H:%M:%S}")
        logger.info(f"Writing results to {self.sink.path}")

        self.sink.open()
        try:
            for index, run_config in enumerate(generate_grid(self.config)):
                failure = self._execute_single_run(run_config, index, total)
                if failure is not None:
                    failed_runs.append(failure)

                if index + 1 < total and self.config.cooldown_seconds > 0:
                    logger.debug(f"Applying cooldown: {self.config.cooldown_seconds}s")
                    self._sleep(self.config.cooldown_seconds)
        finally:
            self.sink.close()

        summary = SweepSummary(
            started_at=started_at,
            finished_at=datetime.now(),
            total_points=total,
            successful_runs=self.sink.rows_written,
            failed_runs=failed_runs,
            results_path=self.sink.path,
        )
        self._log_summary(summary)
        return summary

    def _execute_single_run(
        self, run_config: RunConfig, index: int, total: int
    ) -> FailedRun | None:
        """Invoke, parse and record one grid point.

        Returns:
            None if a row was written, otherwise the FailedRun describing why not
        """
        logger.info(
            f"[{index + 1}/{total}] === workload={run_config.workload.value} "
            f"threads={run_config.threads} ==="
        )

        execution = self.invoker.invoke(run_config)
        self._forward_output(execution.stdout)

        if not execution.success:
            return self._record_execution_failure(execution)

        try:
            result = build_run_result(run_config, execution.stdout)
        except OutputParseError as e:
            logger.warning(
                f"{run_config.label}: could not parse workload output, no row written. "
                f"{e}\nRaw output:\n{execution.stdout}"
            )
            return FailedRun(
                label=run_config.label,
                category=FailureCategory.PARSE,
                reason=str(e),
            )

        self.sink.append(result)
        logger.info(
            f"→ {run_config.workload.mix_name} threads={run_config.threads}: "
            f"elapsed={format_number(result.elapsed_seconds)}s "
            f"throughput={format_number(result.throughput_mops)} Mops/s"
        )
        return None

    def _record_execution_failure(self, execution: RunExecution) -> FailedRun:
        label = execution.config.label
        if execution.timed_out:
            category = FailureCategory.TIMEOUT
            reason = (
                f"Run exceeded the {format_number(self.invoker.timeout_seconds)}s "
                f"deadline and was killed"
            )
        else:
            category = FailureCategory.EXECUTION
            reason = f"Workload exited with code {execution.returncode}"

        message = f"{label}: {reason}, no row written"
        stderr = tail(execution.stderr, SweepDefaults.STDERR_TAIL_CHARS)
        if stderr.strip():
            message += f"\nStderr: {stderr}"
        logger.error(message)
        return FailedRun(label=label, category=category, reason=reason)

    def _forward_output(self, output: str) -> None:
        if not output:
            return
        self.console.out(output, end="" if output.endswith("\n") else "\n", highlight=False)

    def _log_summary(self, summary: SweepSummary) -> None:
        logger.info(f"Sweep finished at {summary.finished_at:%Y-%m-%d %H:%M:%S}")
        logger.info(
            f"All runs complete: {summary.successful_runs}/{summary.total_points} "
            f"successful ({summary.duration_seconds:.1f}s)"
        )
        if summary.failed_runs:
            logger.warning(
                "Failed runs: "
                + ", ".join(f"{f.label} ({f.category})" for f in summary.failed_runs)
            )
        logger.info(f"CSV written to {summary.results_path}")
