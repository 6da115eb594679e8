# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Application of cast rules, which rebuild a field as nested DTO(s)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dtokit.errors import CastExpectedSequence, CastExpectedStructure
from dtokit.hydration.resolution import NestedBuilder
from dtokit.model.collection import DTOCollection
from dtokit.model.types import CastMode, CastSpec, raw_kind_name

# ###############
# Public Interface
# ###############


def apply_cast(spec: CastSpec, raw: Any, *, path: str, build_nested: NestedBuilder) -> Any:
    """Return the value of a cast field.

    A cast replaces the resolution of the field's declared type entirely.

    Args:
        spec: The cast rule for the field.
        raw: The raw input value for the field.
        path: Field path used in error messages.
        build_nested: Callback that hydrates a mapping into a DTO.

    Raises:
        CastExpectedStructure: A single-object cast got a non-mapping.
        CastExpectedSequence: A sequence or collection cast got a non-list.
    """
    if raw is None:
        return None

    if spec.mode is CastMode.SINGLE:
        if isinstance(raw, spec.target):
            return raw
        if not isinstance(raw, Mapping):
            raise CastExpectedStructure(
                f"expected a mapping to cast to {spec.target.__name__}, got {raw_kind_name(raw)}", path
            )
        return build_nested(spec.target, raw, path)

    if not isinstance(raw, (list, tuple, DTOCollection)):
        kind = "collection" if spec.mode is CastMode.COLLECTION else "sequence"
        raise CastExpectedSequence(
            f"expected a list to cast to {kind} of {spec.target.__name__}, got {raw_kind_name(raw)}", path
        )

    items = [_cast_item(spec, item, f"{path}[{position}]", build_nested) for position, item in enumerate(raw)]
    if spec.mode is CastMode.COLLECTION:
        return DTOCollection(items)
    return items


# ################
# Implementation
# ################


def _cast_item(spec: CastSpec, item: Any, path: str, build_nested: NestedBuilder) -> Any:
    if isinstance(item, spec.target):
        return item
    if not isinstance(item, Mapping):
        raise CastExpectedStructure(
            f"expected a mapping to cast to {spec.target.__name__}, got {raw_kind_name(item)}", path
        )
    return build_nested(spec.target, item, path)
