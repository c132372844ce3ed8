# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parsers for workload binary output."""

from kvperf.parsing.completion_parser import (
    COMPLETION_MARKER,
    COMPLETION_PATTERN,
    build_run_result,
    find_completion_line,
    parse_completion_line,
    parse_completion_output,
)

__all__ = [
    "COMPLETION_MARKER",
    "COMPLETION_PATTERN",
    "build_run_result",
    "find_completion_line",
    "parse_completion_line",
    "parse_completion_output",
]
