# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Enumerations shared across the sweep driver."""

from enum import Enum


class Workload(str, Enum):
    """YCSB-style workload mix understood by the workload binary.

    The value is the identifier passed on the command line (``--workload a``).
    """

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"

    @property
    def mix_name(self) -> str:
        """Name the workload binary reports for this mix (e.g. "workloada")."""
        return f"workload{self.value}"

    def __str__(self) -> str:
        return self.value


class Distribution(str, Enum):
    """Key access distribution."""

    UNIFORM = "uniform"
    ZIPFIAN = "zipfian"

    def __str__(self) -> str:
        return self.value


class FailureCategory(str, Enum):
    """Why a grid point produced no result row."""

    EXECUTION = "execution"  # non-zero exit status
    TIMEOUT = "timeout"
    PARSE = "parse"

    def __str__(self) -> str:
        return self.value
