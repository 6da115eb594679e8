# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""dtokit: typed data transfer objects hydrated from untyped key-value data."""

from dtokit.adapters import AttributeAdapter, ModelAdapter, camel_to_snake, from_model, snake_to_camel
from dtokit.config import DEFAULT_SETTINGS, HydrationSettings, load_settings
from dtokit.errors import (
    CastExpectedSequence,
    CastExpectedStructure,
    CyclicReferenceError,
    DTOError,
    DTOTypeError,
    EnumValueNotFound,
    ExpectedStructuredValue,
    FieldError,
    NonNullableField,
    NonNullableUnion,
    RecursionLimitExceeded,
    ScalarCoercionError,
    SchemaError,
    SettingsError,
    UnionResolutionFailure,
    ValidationError,
)
from dtokit.hydration import Hydrator, from_plain, hydrate
from dtokit.model import DTO, CastMode, CastSpec, DTOCollection
from dtokit.schema import TypeMetadataRegistry, get_metadata
from dtokit.serialization import to_json, to_plain
from dtokit.validation import PydanticRuleGate, ValidationGate

__all__ = [
    # Objects
    "DTO",
    "DTOCollection",
    "CastMode",
    "CastSpec",
    # Operations
    "Hydrator",
    "hydrate",
    "from_plain",
    "from_model",
    "to_plain",
    "to_json",
    "get_metadata",
    "TypeMetadataRegistry",
    # Collaborators
    "ValidationGate",
    "PydanticRuleGate",
    "ModelAdapter",
    "AttributeAdapter",
    "snake_to_camel",
    "camel_to_snake",
    # Configuration
    "HydrationSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    # Errors
    "DTOError",
    "DTOTypeError",
    "FieldError",
    "ValidationError",
    "SchemaError",
    "SettingsError",
    "RecursionLimitExceeded",
    "CyclicReferenceError",
    "ExpectedStructuredValue",
    "CastExpectedStructure",
    "CastExpectedSequence",
    "EnumValueNotFound",
    "NonNullableField",
    "NonNullableUnion",
    "ScalarCoercionError",
    "UnionResolutionFailure",
]
