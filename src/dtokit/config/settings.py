# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Engine settings and their YAML loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from dtokit.errors import SettingsError

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class HydrationSettings:
    """Tunable limits and output options for hydration and serialization.

    Attributes:
        max_depth: Maximum nesting depth of DTOs built by one hydrate call.
        json_indent: Indentation passed to the JSON encoder (None is compact).
        json_ensure_ascii: Escape non-ASCII characters in JSON output.
        json_sort_keys: Sort keys in JSON output instead of declaration order.
    """

    max_depth: int = 64
    json_indent: int | None = None
    json_ensure_ascii: bool = False
    json_sort_keys: bool = False


DEFAULT_SETTINGS = HydrationSettings()


def load_settings(path: Path) -> HydrationSettings:
    """Load hydration settings from a YAML file.

    Args:
        path: Path to a YAML mapping, e.g. ``dtokit.yaml``.

    Returns:
        The parsed settings. Keys absent from the file keep their defaults.

    Raises:
        SettingsError: If the file cannot be read or holds invalid settings.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}") from None
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file: {exc}") from exc

    return parse_settings(text, source_label=str(path))


def parse_settings(text: str, source_label: str = "<string>") -> HydrationSettings:
    """Parse YAML settings text into a :class:`HydrationSettings`.

    Raises:
        SettingsError: If the YAML is malformed or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        raise SettingsError(f"{source_label}: settings must be a YAML mapping")

    unknown = sorted(set(data) - set(_KEYS))
    if unknown:
        raise SettingsError(f"{source_label}: unknown setting(s): {', '.join(unknown)}")

    values: dict[str, object] = {}
    for key, attr in _KEYS.items():
        if key in data:
            values[attr] = _check(data[key], key, source_label)
    return HydrationSettings(**values)  # type: ignore[arg-type]


# ################
# Implementation
# ################

_KEYS = {
    "max-depth": "max_depth",
    "json-indent": "json_indent",
    "json-ensure-ascii": "json_ensure_ascii",
    "json-sort-keys": "json_sort_keys",
}


def _check(value: object, key: str, source_label: str) -> object:
    """Type-check a single settings value."""
    if key == "max-depth":
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise SettingsError(f"{source_label}: '{key}' must be a positive integer")
    elif key == "json-indent":
        if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
            raise SettingsError(f"{source_label}: '{key}' must be a non-negative integer or null")
    elif not isinstance(value, bool):
        raise SettingsError(f"{source_label}: '{key}' must be a boolean")
    return value
