# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for dtokit."""

from dtokit.config.settings import (
    DEFAULT_SETTINGS,
    HydrationSettings,
    load_settings,
    parse_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "HydrationSettings",
    "load_settings",
    "parse_settings",
]
