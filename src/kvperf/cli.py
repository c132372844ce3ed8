# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line entry point for kvperf."""

import logging
import shlex
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from kvperf import __version__
from kvperf.common.config import SweepConfig, load_sweep_config
from kvperf.common.enums import Distribution
from kvperf.common.exceptions import (
    ConfigurationError,
    ResultSinkError,
    WorkloadLaunchError,
)
from kvperf.common.logging import setup_rich_logging
from kvperf.exporters import ResultsCsvWriter, SweepSummaryJsonExporter
from kvperf.orchestrator.controller import SweepController
from kvperf.orchestrator.grid import generate_grid
from kvperf.orchestrator.invoker import WorkloadInvoker

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_CONFIG_ERROR = 2

app = App(
    name="kvperf",
    help="Sweep a concurrent key-value map benchmark across workloads and thread counts.",
    version=__version__,
)


@app.default
def sweep(
    *,
    binary: Annotated[
        Path | None,
        Parameter(help="Workload benchmark executable."),
    ] = None,
    workloads: Annotated[
        str | None,
        Parameter(help="Comma-separated workload mixes to sweep, e.g. 'a,b,c'."),
    ] = None,
    threads: Annotated[
        str | None,
        Parameter(help="Comma-separated thread counts to sweep, e.g. '1,2,4,8'."),
    ] = None,
    record_count: Annotated[
        int | None,
        Parameter(name=("--recordcount", "--record-count"), help="Records pre-loaded per run."),
    ] = None,
    operation_count: Annotated[
        int | None,
        Parameter(
            name=("--operationcount", "--operation-count"),
            help="Measured operations per run.",
        ),
    ] = None,
    distribution: Annotated[
        Distribution | None,
        Parameter(help="Key access distribution."),
    ] = None,
    zipf_s: Annotated[
        float | None,
        Parameter(name="--zipf-s", help="Zipfian skew parameter."),
    ] = None,
    output: Annotated[
        Path | None,
        Parameter(name=("--output", "-o"), help="Results CSV (truncated at start)."),
    ] = None,
    summary_json: Annotated[
        Path | None,
        Parameter(help="Write a JSON sweep summary to this path."),
    ] = None,
    cooldown_seconds: Annotated[
        float | None,
        Parameter(help="Pause between consecutive runs in seconds."),
    ] = None,
    run_timeout_seconds: Annotated[
        float | None,
        Parameter(help="Kill and skip a run that takes longer than this."),
    ] = None,
    config_file: Annotated[
        Path | None,
        Parameter(help="JSON file with sweep settings; flags override it."),
    ] = None,
    dry_run: Annotated[
        bool,
        Parameter(help="Print the planned runs without executing them."),
    ] = False,
    log_level: Annotated[
        str,
        Parameter(help="Logging level."),
    ] = "INFO",
    verbose: Annotated[
        bool,
        Parameter(name=("--verbose", "-v"), help="Shortcut for --log-level DEBUG."),
    ] = False,
) -> int:
    """Run the benchmark sweep.

    Every flag is optional. Without flags the sweep covers workloads a-f at
    1, 2, 4, 8, 16 and 32 threads with a zipfian (s=1.03) distribution.
    """
    try:
        setup_rich_logging("DEBUG" if verbose else log_level)
    except ValueError as e:
        setup_rich_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        config = load_sweep_config(
            config_file,
            {
                "binary": binary,
                "workloads": workloads,
                "threads": threads,
                "record_count": record_count,
                "operation_count": operation_count,
                "distribution": distribution,
                "zipf_s": zipf_s,
                "output_file": output,
                "summary_file": summary_json,
                "cooldown_seconds": cooldown_seconds,
                "run_timeout_seconds": run_timeout_seconds,
            },
        )
    except (ConfigurationError, ValidationError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    if dry_run:
        print_plan(config)
        return EXIT_SUCCESS

    return run_sweep(config)


def run_sweep(config: SweepConfig, console: Console | None = None) -> int:
    """Execute a sweep and map its outcome to a process exit code.

    Per-run failures are reported but still exit with 0; launch and sink
    errors exit with 1.
    """
    _log_banner(config)

    try:
        invoker = WorkloadInvoker(config.binary, timeout_seconds=config.run_timeout_seconds)
        # Checked before the results file is truncated.
        invoker.validate_binary()

        controller = SweepController(
            config=config,
            invoker=invoker,
            sink=ResultsCsvWriter(config.output_file),
            console=console,
        )
        summary = controller.execute()

        if config.summary_file is not None:
            path = SweepSummaryJsonExporter(summary, config, config.summary_file).export()
            logger.info(f"Summary JSON written to {path}")
    except WorkloadLaunchError as e:
        logger.error(f"Cannot launch workload binary, aborting sweep: {e}")
        return EXIT_FATAL
    except ResultSinkError as e:
        logger.error(f"Cannot write results, aborting sweep: {e}")
        return EXIT_FATAL

    return EXIT_SUCCESS


def print_plan(config: SweepConfig, console: Console | None = None) -> None:
    """Print the grid and the exact command for every run."""
    console = console or Console()
    invoker = WorkloadInvoker(config.binary)

    table = Table(title=f"Sweep plan ({config.grid_size} runs)")
    table.add_column("#", justify="right")
    table.add_column("workload")
    table.add_column("threads", justify="right")
    table.add_column("command", overflow="fold")
    for index, run_config in enumerate(generate_grid(config), start=1):
        table.add_row(
            str(index),
            run_config.workload.value,
            str(run_config.threads),
            shlex.join(invoker.build_command(run_config)),
        )
    console.print(table)
    console.print(f"Results would be written to {config.output_file}")


def _log_banner(config: SweepConfig) -> None:
    logger.info("=" * 80)
    logger.info("Starting Workload Sweep")
    logger.info(f"  Binary: {config.binary}")
    logger.info(f"  Workloads: {', '.join(w.value for w in config.workloads)}")
    logger.info(f"  Threads: {', '.join(str(t) for t in config.threads)}")
    logger.info(
        f"  Records: {config.record_count}  Operations: {config.operation_count}"
    )
    if config.skew is not None:
        logger.info(f"  Distribution: {config.distribution} (zipf-s={config.zipf_s})")
    else:
        logger.info(f"  Distribution: {config.distribution}")
    logger.info(f"  Cooldown between runs: {config.cooldown_seconds}s")
    logger.info("=" * 80)


def main() -> None:
    sys.exit(app())


if __name__ == "__main__":
    main()
