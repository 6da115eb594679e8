# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pluggable validation of raw input ahead of hydration."""

from dtokit.validation.gate import (
    PydanticRuleGate,
    ValidationGate,
    run_gate,
)

__all__ = [
    "PydanticRuleGate",
    "ValidationGate",
    "run_gate",
]
