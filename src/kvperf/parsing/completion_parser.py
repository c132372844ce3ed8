# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parser for the workload binary's completion line.

The workload prints one line per finished run, for example::

    Completed workloada in 8.701s | throughput = 22.99 Mops/s

Only the tokens ``in``, the elapsed unit, ``throughput = `` and ``Mops/s``
anchor the two numbers; everything around them is ignored. The elapsed value
uses adaptive duration formatting, so short runs are printed in ms, µs or ns
and are normalised to seconds here.
"""

import re
from decimal import Decimal

from kvperf.common.exceptions import OutputParseError
from kvperf.orchestrator.models import CompletionMetrics, RunConfig, RunResult

__all__ = [
    "COMPLETION_MARKER",
    "COMPLETION_PATTERN",
    "build_run_result",
    "find_completion_line",
    "parse_completion_line",
    "parse_completion_output",
]

COMPLETION_MARKER = "Completed"

# Unsigned decimal, optional fractional part, no exponent.
_NUMBER = r"\d+(?:\.\d+)?"

COMPLETION_PATTERN = re.compile(
    rf".*\bin (?P<elapsed>{_NUMBER})(?P<unit>ns|us|µs|μs|ms|s)(?![\w.])"
    rf".*?\bthroughput = (?P<throughput>{_NUMBER}) Mops/s"
)

_SECONDS_PER_UNIT = {
    "s": Decimal(1),
    "ms": Decimal("0.001"),
    "us": Decimal("0.000001"),
    "µs": Decimal("0.000001"),
    "μs": Decimal("0.000001"),
    "ns": Decimal("0.000000001"),
}


def find_completion_line(output: str) -> str | None:
    """Return the first line of output containing the completion marker."""
    for line in output.splitlines():
        if COMPLETION_MARKER in line:
            return line
    return None


def parse_completion_line(line: str) -> CompletionMetrics:
    """Extract elapsed seconds and throughput from a completion line.

    Args:
        line: A single line containing the completion marker

    Returns:
        CompletionMetrics with elapsed time in seconds and throughput in Mops/s

    Raises:
        OutputParseError: If the line does not match the completion grammar
    """
    match = COMPLETION_PATTERN.search(line)
    if match is None:
        raise OutputParseError(
            f"Completion line does not match the expected format "
            f"'... in <elapsed>s ... throughput = <value> Mops/s': {line.strip()!r}",
            output=line,
            line=line,
        )

    elapsed = Decimal(match.group("elapsed")) * _SECONDS_PER_UNIT[match.group("unit")]
    return CompletionMetrics(
        elapsed_seconds=float(elapsed),
        throughput_mops=float(match.group("throughput")),
    )


def parse_completion_output(output: str) -> CompletionMetrics:
    """Locate the first completion line in captured output and parse it.

    If several lines contain the marker, only the first one is used, even if
    it is malformed and a later one is not.

    Raises:
        OutputParseError: If no completion line exists or it is malformed
    """
    line = find_completion_line(output)
    if line is None:
        raise OutputParseError(
            f"No line containing '{COMPLETION_MARKER}' found in workload output",
            output=output,
        )
    try:
        return parse_completion_line(line)
    except OutputParseError as e:
        e.output = output
        raise


def build_run_result(config: RunConfig, output: str) -> RunResult:
    """Parse captured output into the RunResult for one grid point.

    Raises:
        OutputParseError: If the output has no usable completion line
    """
    metrics = parse_completion_output(output)
    return RunResult(
        config=config,
        elapsed_seconds=metrics.elapsed_seconds,
        throughput_mops=metrics.throughput_mops,
    )
