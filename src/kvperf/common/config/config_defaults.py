# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

from kvperf.common.enums import Distribution, Workload


class SweepDefaults:
    BINARY = Path("./target/release/dashmap_ycsb")
    WORKLOADS = [
        Workload.A,
        Workload.B,
        Workload.C,
        Workload.D,
        Workload.E,
        Workload.F,
    ]
    THREADS = [1, 2, 4, 8, 16, 32]
    RECORD_COUNT = 6_500_000
    OPERATION_COUNT = 200_000_000
    DISTRIBUTION = Distribution.ZIPFIAN
    ZIPF_S = 1.03
    OUTPUT_FILE = Path("results.csv")
    COOLDOWN_SECONDS = 2.0
    RUN_TIMEOUT_SECONDS = None
    STDERR_TAIL_CHARS = 2000
