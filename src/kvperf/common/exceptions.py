# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the sweep driver.

Fatal errors (the sweep cannot make progress) and per-run errors (the sweep
skips one grid point) share a common base so the CLI can report either.
"""

from pathlib import Path


class KVPerfError(Exception):
    """Base class for all kvperf errors."""


class ConfigurationError(KVPerfError):
    """The sweep configuration could not be loaded."""


class WorkloadLaunchError(KVPerfError):
    """The workload binary could not be started at all. Fatal for the sweep."""

    def __init__(self, message: str, binary: Path | str | None = None) -> None:
        super().__init__(message)
        self.binary = binary


class ResultSinkError(KVPerfError):
    """The results table could not be created or appended to. Fatal for the sweep."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class OutputParseError(KVPerfError):
    """Captured workload output did not contain a usable completion line.

    Attributes:
        output: The raw captured output that failed to parse
        line: The completion line, if one was found but was malformed
    """

    def __init__(self, message: str, output: str = "", line: str | None = None) -> None:
        super().__init__(message)
        self.output = output
        self.line = line
