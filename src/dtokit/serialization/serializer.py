# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of DTO instances to plain data and JSON text.

Plain output uses field declaration order (inherited fields first). Nested
DTOs become dicts, enum members become their values and lists or
collections become lists with the same substitution applied per element.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from dtokit.config.settings import DEFAULT_SETTINGS, HydrationSettings
from dtokit.errors import CyclicReferenceError
from dtokit.model.collection import DTOCollection
from dtokit.model.dto import DTO
from dtokit.schema.registry import TypeMetadataRegistry, default_registry

# ###############
# Public Interface
# ###############


def to_plain(
    instance: DTO,
    elide_nulls: bool = False,
    *,
    registry: TypeMetadataRegistry | None = None,
) -> dict[str, Any]:
    """Return *instance* as a plain dict.

    Args:
        instance: The DTO to serialize.
        elide_nulls: Drop entries whose value is None; nested DTOs apply the
            same rule to their own entries.
        registry: Metadata registry to use (defaults to the process-wide one).

    Raises:
        CyclicReferenceError: If an instance is reachable from itself.
    """
    return _Serializer(registry or default_registry, elide_nulls).plain(instance)


def to_json(
    instance: DTO,
    settings: HydrationSettings | None = None,
    *,
    registry: TypeMetadataRegistry | None = None,
) -> str:
    """Encode ``to_plain(instance)`` (nulls kept) as JSON text."""
    settings = settings or DEFAULT_SETTINGS
    return json.dumps(
        to_plain(instance, False, registry=registry),
        indent=settings.json_indent,
        ensure_ascii=settings.json_ensure_ascii,
        sort_keys=settings.json_sort_keys,
    )


# ################
# Implementation
# ################


class _Serializer:
    """Walks one object graph, tracking the instances currently being serialized."""

    def __init__(self, registry: TypeMetadataRegistry, elide_nulls: bool) -> None:
        self._registry = registry
        self._elide_nulls = elide_nulls
        self._active: set[int] = set()

    def plain(self, instance: DTO) -> dict[str, Any]:
        marker = id(instance)
        if marker in self._active:
            raise CyclicReferenceError(f"{type(instance).__name__} instance is reachable from itself")
        self._active.add(marker)
        try:
            metadata = self._registry.get_metadata(type(instance))
            data = {name: getattr(instance, name, None) for name in metadata.field_names()}
            if self._elide_nulls:
                data = {name: value for name, value in data.items() if value is not None}
            return {name: self._value(value) for name, value in data.items()}
        finally:
            self._active.discard(marker)

    def _value(self, value: Any) -> Any:
        if isinstance(value, (list, tuple, DTOCollection)):
            return [self._element(item) for item in value]
        return self._element(value)

    def _element(self, value: Any) -> Any:
        if isinstance(value, DTO):
            return self.plain(value)
        if isinstance(value, Enum):
            return value.value
        return value
