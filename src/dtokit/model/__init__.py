# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""DTO base class, collections and type descriptors."""

from dtokit.model.collection import DTOCollection
from dtokit.model.dto import DTO
from dtokit.model.types import (
    CastMode,
    CastSpec,
    EnumDescriptor,
    FieldSpec,
    NestedDescriptor,
    ScalarDescriptor,
    ScalarKind,
    TypeDescriptor,
    TypeMetadata,
    UnionDescriptor,
)

__all__ = [
    # Objects
    "DTO",
    "DTOCollection",
    # Descriptors
    "ScalarKind",
    "ScalarDescriptor",
    "NestedDescriptor",
    "EnumDescriptor",
    "UnionDescriptor",
    "TypeDescriptor",
    # Metadata
    "FieldSpec",
    "CastMode",
    "CastSpec",
    "TypeMetadata",
]
