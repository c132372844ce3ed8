# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from kvperf.common.config.base_config import BaseConfig
from kvperf.common.config.config_defaults import SweepDefaults
from kvperf.common.config.sweep_config import SweepConfig, load_sweep_config

__all__ = [
    "BaseConfig",
    "SweepConfig",
    "SweepDefaults",
    "load_sweep_config",
]
