# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


def format_number(value: int | float | None) -> str:
    """Format a number for command lines and CSV cells.

    Integers are written as-is and floats in their shortest round-trip form
    (1.03 -> "1.03", 22.990 -> "22.99"). None becomes an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if value == float("inf"):
        return "inf"
    if value == float("-inf"):
        return "-inf"
    return repr(float(value))


def tail(text: str, max_chars: int) -> str:
    """Return at most the last max_chars characters of text."""
    if max_chars <= 0:
        return ""
    return text[-max_chars:]
