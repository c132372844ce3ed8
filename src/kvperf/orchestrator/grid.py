# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parameter grid generation for sweeps.

Expands the workload and thread-count axes of a SweepConfig into one RunConfig
per grid point.
"""

import itertools
from collections.abc import Iterator

from kvperf.common.config import SweepConfig
from kvperf.orchestrator.models import RunConfig

__all__ = [
    "generate_grid",
    "grid_size",
]


def generate_grid(config: SweepConfig) -> Iterator[RunConfig]:
    """Lazily yield the RunConfig for every grid point.

    Workloads form the outer loop and thread counts the inner loop, so all
    thread counts of the first workload are produced before the second
    workload. Both axes keep the order in which they were configured.

    Args:
        config: Sweep configuration

    Yields:
        RunConfig for each (workload, threads) combination
    """
    for workload, threads in itertools.product(config.workloads, config.threads):
        yield config.run_config_for(workload, threads)


def grid_size(config: SweepConfig) -> int:
    """Number of grid points generate_grid() yields for this config."""
    return config.grid_size
