# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide cache of DTO type metadata.

Entries are keyed by the concrete class object, never by a base class, so
that a subclass never sees (or leaks) the fields, casts or rules of its
parent. Each entry is built at most once; building happens under a reentrant
lock, so declaration hooks may look up other classes, and reading a cached
entry does not take it.
"""

from __future__ import annotations

import logging
import threading

from dtokit.model.dto import DTO
from dtokit.model.types import TypeMetadata
from dtokit.schema.introspection import build_metadata

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TypeMetadataRegistry:
    """Compute-if-absent map from DTO class to :class:`TypeMetadata`."""

    def __init__(self) -> None:
        self._entries: dict[type, TypeMetadata] = {}
        self._lock = threading.RLock()

    def get_metadata(self, type_id: type[DTO]) -> TypeMetadata:
        """Return the metadata for *type_id*, building it on first use.

        Raises:
            SchemaError: If the class declarations cannot be described.
            TypeError: If *type_id* is not a DTO subclass.
        """
        entry = self._entries.get(type_id)
        if entry is not None:
            return entry

        if not isinstance(type_id, type) or not issubclass(type_id, DTO) or type_id is DTO:
            raise TypeError(f"Expected a DTO subclass, got {type_id!r}")

        with self._lock:
            entry = self._entries.get(type_id)
            if entry is None:
                entry = build_metadata(type_id)
                self._entries[type_id] = entry
                logger.debug("Built metadata for %s: %s", type_id.__qualname__, ", ".join(entry.field_names()))
        return entry

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop every cached entry. Intended for tests."""
        with self._lock:
            self._entries.clear()


default_registry = TypeMetadataRegistry()


def get_metadata(type_id: type[DTO]) -> TypeMetadata:
    """Return metadata for *type_id* from the default registry."""
    return default_registry.get_metadata(type_id)
