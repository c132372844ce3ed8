# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for kvperf tests."""

import stat
import sys
import textwrap
from pathlib import Path

import pytest

from kvperf.common.config import SweepConfig
from kvperf.common.enums import Distribution, Workload
from kvperf.orchestrator.models import RunConfig

FAKE_WORKLOAD_SOURCE = textwrap.dedent(
    """\
    import argparse
    import os
    import sys

    parser = argparse.ArgumentParser()
    parser.add_argument("--workload", required=True)
    parser.add_argument("--threads", type=int, required=True)
    parser.add_argument("--recordcount", type=int, required=True)
    parser.add_argument("--operationcount", type=int, required=True)
    parser.add_argument("--zipfian", action="store_true")
    parser.add_argument("--zipf-s", type=float)
    args = parser.parse_args()

    point = f"{args.workload}:{args.threads}"

    log_path = os.environ.get("FAKE_WORKLOAD_LOG")
    if log_path:
        with open(log_path, "a") as f:
            f.write(" ".join(sys.argv[1:]) + "\\n")

    dist = "zipfian" if args.zipfian else "uniform"
    print(
        f"Running workload{args.workload} | threads={args.threads} | "
        f"records={args.recordcount} | ops={args.operationcount} | dist={dist}"
    )

    if point in os.environ.get("FAKE_WORKLOAD_FAIL", "").split(","):
        print("thread panicked", file=sys.stderr)
        sys.exit(3)

    if point in os.environ.get("FAKE_WORKLOAD_GARBLE", "").split(","):
        print("no measurement for this run")
        sys.exit(0)

    print(
        f"Completed workload{args.workload} in {args.threads}.250s | "
        f"throughput = {args.threads * 10}.5 Mops/s"
    )
    print()
    """
)


def make_run_config(
    workload: Workload | str = Workload.A,
    threads: int = 1,
    distribution: Distribution = Distribution.ZIPFIAN,
    zipf_s: float | None = 1.03,
    record_count: int = 1000,
    operation_count: int = 10000,
) -> RunConfig:
    """Create a RunConfig with sensible defaults for testing."""
    if distribution == Distribution.UNIFORM:
        zipf_s = None
    return RunConfig(
        workload=Workload(workload),
        threads=threads,
        record_count=record_count,
        operation_count=operation_count,
        distribution=distribution,
        zipf_s=zipf_s,
    )


@pytest.fixture
def run_config() -> RunConfig:
    return make_run_config()


@pytest.fixture
def fake_workload_binary(tmp_path: Path) -> Path:
    """Executable that mimics the workload binary's CLI and output.

    Behaviour is steered through inherited environment variables:
    FAKE_WORKLOAD_FAIL / FAKE_WORKLOAD_GARBLE take comma-separated
    "<workload>:<threads>" points that exit non-zero / print no completion
    line, and FAKE_WORKLOAD_LOG collects the received arguments.
    """
    path = tmp_path / "fake_workload"
    path.write_text(f"#!{sys.executable}\n{FAKE_WORKLOAD_SOURCE}")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def sweep_config(tmp_path: Path, fake_workload_binary: Path) -> SweepConfig:
    """Small 2x2 zipfian sweep without cooldown."""
    return SweepConfig(
        binary=fake_workload_binary,
        workloads="a,b",
        threads="1,2",
        record_count=1000,
        operation_count=10000,
        distribution=Distribution.ZIPFIAN,
        zipf_s=1.03,
        output_file=tmp_path / "results.csv",
        cooldown_seconds=0,
    )
