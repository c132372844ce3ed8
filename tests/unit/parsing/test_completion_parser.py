# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the completion line parser."""

import pytest

from kvperf.common.exceptions import OutputParseError
from kvperf.parsing import (
    build_run_result,
    find_completion_line,
    parse_completion_line,
    parse_completion_output,
)

SAMPLE_OUTPUT = """\
Running workloada | threads=4 | records=6500000 | ops=200000000 | dist=zipfian
Completed workloada in 8.701s | throughput = 22.99 Mops/s

"""


class TestFindCompletionLine:
    """Tests for locating the completion line."""

    def test_finds_line(self):
        assert (
            find_completion_line(SAMPLE_OUTPUT)
            == "Completed workloada in 8.701s | throughput = 22.99 Mops/s"
        )

    def test_returns_none_without_marker(self):
        assert find_completion_line("Running workloada\nDone\n") is None

    def test_returns_first_of_several(self):
        output = (
            "Completed workloada in 1.000s | throughput = 1.00 Mops/s\n"
            "Completed workloadb in 2.000s | throughput = 2.00 Mops/s\n"
        )

        assert find_completion_line(output).startswith("Completed workloada")


class TestParseCompletionLine:
    """Tests for extracting numbers from a completion line."""

    def test_reference_line(self):
        metrics = parse_completion_line(
            "Completed workloada in 8.701s | throughput = 22.99 Mops/s"
        )

        assert metrics.elapsed_seconds == 8.701
        assert metrics.throughput_mops == 22.99

    @pytest.mark.parametrize(
        "line,elapsed,throughput",
        [
            ("Completed workloadf in 12s | throughput = 16 Mops/s", 12.0, 16.0),
            ("[x] Completed run in 0.5s, throughput = 400.25 Mops/s (ok)", 0.5, 400.25),
            ("Completed workloadc in 100.000s|throughput = 2.00 Mops/s|", 100.0, 2.0),
            ("noise Completed workloadd in 3.250s anything throughput = 61.54 Mops/s!", 3.25, 61.54),
        ],
    )
    def test_tolerates_surrounding_text(self, line, elapsed, throughput):
        metrics = parse_completion_line(line)

        assert metrics.elapsed_seconds == elapsed
        assert metrics.throughput_mops == throughput

    @pytest.mark.parametrize(
        "line,elapsed",
        [
            ("Completed workloada in 870.123ms | throughput = 229.85 Mops/s", 0.870123),
            ("Completed workloada in 250.5µs | throughput = 0.40 Mops/s", 0.0002505),
            ("Completed workloada in 250.5us | throughput = 0.40 Mops/s", 0.0002505),
            ("Completed workloada in 999ns | throughput = 0.00 Mops/s", 0.000000999),
        ],
    )
    def test_sub_second_units_normalised_to_seconds(self, line, elapsed):
        assert parse_completion_line(line).elapsed_seconds == pytest.approx(elapsed)

    @pytest.mark.parametrize(
        "line",
        [
            "Completed workloada",
            "Completed workloada in 8.701s",
            "Completed workloada | throughput = 22.99 Mops/s",
            "Completed workloada in abcs | throughput = 22.99 Mops/s",
            "Completed workloada in 8.701s | throughput = fast Mops/s",
            "Completed workloada in -8.701s | throughput = 22.99 Mops/s",
            "Completed workloada in 8.701s | throughput = -22.99 Mops/s",
            "Completed workloada in 8.7.1s | throughput = 22.99 Mops/s",
            "Completed workloada in 1e3s | throughput = 22.99 Mops/s",
            "Completed workloada in 8.701min | throughput = 22.99 Mops/s",
            "Completed workloada in 8.701s | throughput = 22.99 ops/s",
        ],
    )
    def test_malformed_lines_raise(self, line):
        with pytest.raises(OutputParseError) as exc_info:
            parse_completion_line(line)

        assert exc_info.value.line == line


class TestParseCompletionOutput:
    """Tests for parsing whole captured outputs."""

    def test_parses_captured_output(self):
        metrics = parse_completion_output(SAMPLE_OUTPUT)

        assert metrics.elapsed_seconds == 8.701
        assert metrics.throughput_mops == 22.99

    @pytest.mark.parametrize("output", ["", "\n", "Running workloada\nsegfault\n"])
    def test_missing_completion_line_raises(self, output):
        with pytest.raises(OutputParseError, match="No line containing 'Completed'") as exc_info:
            parse_completion_output(output)

        assert exc_info.value.output == output
        assert exc_info.value.line is None

    def test_first_line_wins_even_if_malformed(self):
        output = (
            "Completed warmup\n"
            "Completed workloada in 8.701s | throughput = 22.99 Mops/s\n"
        )

        with pytest.raises(OutputParseError) as exc_info:
            parse_completion_output(output)

        assert exc_info.value.line == "Completed warmup"
        assert exc_info.value.output == output

    def test_first_of_several_valid_lines_is_used(self):
        output = (
            "Completed workloada in 1.5s | throughput = 10.00 Mops/s\n"
            "Completed workloadb in 2.5s | throughput = 20.00 Mops/s\n"
        )

        assert parse_completion_output(output).elapsed_seconds == 1.5


class TestBuildRunResult:
    """Tests for combining parsed numbers with the grid point."""

    def test_builds_result(self, run_config):
        result = build_run_result(run_config, SAMPLE_OUTPUT)

        assert result.config == run_config
        assert result.elapsed_seconds == 8.701
        assert result.throughput_mops == 22.99

    def test_propagates_parse_failure(self, run_config):
        with pytest.raises(OutputParseError):
            build_run_result(run_config, "no measurement")
