# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors and per-type metadata for the dtokit hydration engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from dtokit.validation.gate import ValidationGate

# ###############
# Public Interface
# ###############


class ScalarKind(Enum):
    """Scalar kinds a field can be coerced to with a native conversion."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    FLOAT = "float"
    ARRAY = "array"
    MAP = "map"
    COLLECTION = "collection"
    ANY = "any"


class CastMode(Enum):
    """How a cast rebuilds a field from raw data."""

    SINGLE = "single"
    SEQUENCE = "sequence"
    COLLECTION = "collection"


class ScalarDescriptor(BaseModel):
    """A field of a scalar kind."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    scalar: ScalarKind
    nullable: bool = False

    @property
    def display_name(self) -> str:
        return self.scalar.value


class NestedDescriptor(BaseModel):
    """A field holding another DTO."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["nested"] = "nested"
    target: type
    nullable: bool = False

    @property
    def display_name(self) -> str:
        return self.target.__name__


class EnumDescriptor(BaseModel):
    """A field holding a member of an :class:`enum.Enum`."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["enum"] = "enum"
    target: type[Enum]
    nullable: bool = False

    @property
    def display_name(self) -> str:
        return self.target.__name__


class UnionDescriptor(BaseModel):
    """A field accepting any of several alternatives, tried in declaration order."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["union"] = "union"
    alternatives: list[TypeDescriptor]
    nullable: bool = False

    @property
    def display_name(self) -> str:
        names = [alt.display_name for alt in self.alternatives]
        if self.accepts_null:
            names.append("null")
        return "|".join(names)

    @property
    def accepts_null(self) -> bool:
        """Return True if the union itself or any alternative is nullable."""
        return self.nullable or any(alt.nullable for alt in self.alternatives)


# A declared field type. The `kind` discriminator keeps the variants unambiguous.
TypeDescriptor = Annotated[
    ScalarDescriptor | NestedDescriptor | EnumDescriptor | UnionDescriptor,
    _Field(discriminator="kind"),
]


class FieldSpec(BaseModel):
    """One declared field of a DTO class."""

    model_config = ConfigDict(frozen=True)

    name: str
    descriptor: TypeDescriptor
    declared_nullable: bool = False


class CastSpec(BaseModel):
    """A declarative rule that rebuilds a field as nested DTO(s) of *target*."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field: str
    mode: CastMode
    target: type


@dataclass(frozen=True)
class TypeMetadata:
    """Everything the engine needs to know about one concrete DTO class.

    Attributes:
        type_id: The DTO class the metadata describes.
        fields: Declared fields in declaration order, base-class fields first.
        index: Field lookup by name.
        casts: Cast rules by field name.
        gate: Validation gate for raw input, or None when the class has no rules.
    """

    type_id: type
    fields: tuple[FieldSpec, ...]
    index: Mapping[str, FieldSpec] = field(default_factory=dict)
    casts: Mapping[str, CastSpec] = field(default_factory=dict)
    gate: ValidationGate | None = None

    def field_names(self) -> list[str]:
        """Return the declared field names in order."""
        return [f.name for f in self.fields]


def describe_nullable(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Return a copy of *descriptor* that accepts ``None``."""
    return descriptor.model_copy(update={"nullable": True})


def raw_kind_name(value: Any) -> str:
    """Return a short type name for error messages."""
    return type(value).__name__


# Resolve the forward reference of the recursive union variant.
UnionDescriptor.model_rebuild()
FieldSpec.model_rebuild()
