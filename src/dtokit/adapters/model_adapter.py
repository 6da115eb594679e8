# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model adapters: turning external records into raw mappings for hydration.

Key naming conventions belong to the adapter. The engine only ever sees the
mapping an adapter returns.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from dtokit.hydration.hydrator import hydrate
from dtokit.model.dto import DTO

D = TypeVar("D", bound=DTO)

# ###############
# Public Interface
# ###############


class ModelAdapter(Protocol):
    """Extracts a raw key-value mapping from an external record."""

    def extract_fields(self, record: Any) -> dict[str, Any]: ...


class AttributeAdapter:
    """Reads mappings, pydantic models, dataclasses and plain objects.

    Plain objects contribute their public instance attributes. An optional
    *key_transform* renames every key, e.g. :func:`snake_to_camel` for DTOs
    declared with camelCase fields.
    """

    def __init__(self, key_transform: Callable[[str], str] | None = None) -> None:
        self.key_transform = key_transform

    def extract_fields(self, record: Any) -> dict[str, Any]:
        fields = _record_fields(record)
        if self.key_transform is None:
            return fields
        return {self.key_transform(key): value for key, value in fields.items()}


def snake_to_camel(name: str) -> str:
    """Convert ``snake_case_name`` to ``snakeCaseName``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camel_to_snake(name: str) -> str:
    """Convert ``camelCaseName`` to ``camel_case_name``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def from_model(type_id: type[D], record: Any, adapter: ModelAdapter | None = None) -> D:
    """Hydrate *type_id* from an external record.

    Args:
        type_id: DTO class to build.
        record: The external record (ORM row, pydantic model, dataclass, ...).
        adapter: Adapter extracting the raw mapping; defaults to an
            :class:`AttributeAdapter` without key conversion.
    """
    extracted = (adapter or AttributeAdapter()).extract_fields(record)
    return hydrate(type_id, extracted)


# ################
# Implementation
# ################

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _record_fields(record: Any) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    if isinstance(record, BaseModel):
        return record.model_dump()
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    try:
        attributes = vars(record)
    except TypeError:
        raise TypeError(f"Cannot extract fields from {type(record).__name__}") from None
    return {key: value for key, value in attributes.items() if not key.startswith("_")}
