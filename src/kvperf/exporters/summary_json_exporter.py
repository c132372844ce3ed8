# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for the sweep summary."""

from pathlib import Path

import orjson

from kvperf.common.config import SweepConfig
from kvperf.common.exceptions import ResultSinkError
from kvperf.orchestrator.models import SweepSummary


class SweepSummaryJsonExporter:
    """Exports the sweep summary and the configuration that produced it.

    Output structure:
    {
        "started_at": "2026-01-01T10:00:00",
        "finished_at": "2026-01-01T10:05:00",
        "duration_seconds": 300.0,
        "total_points": 4,
        "successful_runs": 3,
        "failed_runs": [{"label": ..., "category": ..., "reason": ...}],
        "results_path": "results.csv",
        "config": {...}
    }
    """

    def __init__(
        self, summary: SweepSummary, config: SweepConfig, output_path: Path
    ) -> None:
        self._summary = summary
        self._config = config
        self._output_path = Path(output_path)

    def _generate_content(self) -> bytes:
        output = self._summary.model_dump(mode="json")
        output["duration_seconds"] = self._summary.duration_seconds
        output["config"] = self._config.model_dump(mode="json")
        return orjson.dumps(output, option=orjson.OPT_INDENT_2)

    def export(self) -> Path:
        """Write the summary file.

        Returns:
            Path of the written file

        Raises:
            ResultSinkError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_bytes(self._generate_content())
        except OSError as e:
            raise ResultSinkError(
                f"Cannot write summary file {self._output_path}: {e}",
                self._output_path,
            ) from e
        return self._output_path
