# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exporters for sweep results."""

from kvperf.exporters.results_csv_exporter import RESULT_COLUMNS, ResultsCsvWriter
from kvperf.exporters.summary_json_exporter import SweepSummaryJsonExporter

__all__ = [
    "RESULT_COLUMNS",
    "ResultsCsvWriter",
    "SweepSummaryJsonExporter",
]
