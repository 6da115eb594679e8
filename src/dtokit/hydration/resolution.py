# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of a raw value against a field's type descriptor.

Nested DTOs are built through a caller-supplied callback so that this module
stays free of hydration state (depth tracking, validation, the registry).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from dtokit.errors import (
    DTOError,
    DTOTypeError,
    EnumValueNotFound,
    ExpectedStructuredValue,
    NonNullableField,
    NonNullableUnion,
    ScalarCoercionError,
    UnionResolutionFailure,
    ValidationError,
)
from dtokit.model.collection import DTOCollection
from dtokit.model.dto import DTO
from dtokit.model.types import (
    EnumDescriptor,
    NestedDescriptor,
    ScalarDescriptor,
    ScalarKind,
    TypeDescriptor,
    UnionDescriptor,
    raw_kind_name,
)

logger = logging.getLogger(__name__)

# Builds a DTO of the given class from a mapping; the last argument is the field path.
NestedBuilder = Callable[[type, Mapping[str, Any], str], Any]

# ###############
# Public Interface
# ###############


def resolve(descriptor: TypeDescriptor, value: Any, *, path: str, build_nested: NestedBuilder) -> Any:
    """Convert *value* to the type described by *descriptor*.

    Raises:
        DTOTypeError: If the value cannot be converted.
        ValidationError: If a nested DTO rejects its input.
    """
    if value is None:
        return _resolve_null(descriptor, path)
    if isinstance(descriptor, UnionDescriptor):
        return _resolve_union(descriptor, value, path, build_nested)
    if isinstance(descriptor, ScalarDescriptor):
        return coerce_scalar(descriptor.scalar, value, path)
    if isinstance(descriptor, EnumDescriptor):
        return resolve_enum(descriptor.target, value, path)
    return _resolve_nested(descriptor, value, path, build_nested)


def accepts_as_is(descriptor: TypeDescriptor, value: Any) -> bool:
    """Return True if *value* already has the runtime kind *descriptor* describes."""
    if isinstance(descriptor, ScalarDescriptor):
        return _matches_kind(descriptor.scalar, value)
    if isinstance(descriptor, (NestedDescriptor, EnumDescriptor)):
        return isinstance(value, descriptor.target)
    return any(accepts_as_is(alt, value) for alt in descriptor.alternatives)


def coerce_scalar(kind: ScalarKind, value: Any, path: str = "") -> Any:
    """Apply the native conversion for *kind* to a non-null *value*.

    Raises:
        ScalarCoercionError: If the conversion is not possible.
    """
    if kind is ScalarKind.ANY:
        return value
    if kind is ScalarKind.ARRAY:
        if isinstance(value, (list, tuple, DTOCollection)):
            return list(value)
        return [value]
    if kind is ScalarKind.COLLECTION:
        if isinstance(value, DTOCollection):
            return value
        if isinstance(value, (list, tuple)):
            return DTOCollection(value)
        return DTOCollection([value])
    if kind is ScalarKind.MAP:
        if isinstance(value, Mapping):
            return dict(value)
        raise ScalarCoercionError(f"expected a mapping, got {raw_kind_name(value)}", path)

    if isinstance(value, _STRUCTURED_TYPES):
        raise ScalarCoercionError(f"cannot convert {raw_kind_name(value)} to {kind.value}", path)
    if isinstance(value, Enum):
        value = value.value
    try:
        return _CONVERTERS[kind](value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ScalarCoercionError(f"cannot convert {value!r} to {kind.value}", path) from exc


def resolve_enum(enum_cls: type[Enum], value: Any, path: str = "") -> Enum:
    """Return the member of *enum_cls* whose value equals *value*.

    Raises:
        EnumValueNotFound: If no member has that value.
    """
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    raise EnumValueNotFound(f"{value!r} is not a valid {enum_cls.__name__} value", path)


# ################
# Implementation
# ################

_STRUCTURED_TYPES = (Mapping, list, tuple, set, frozenset, DTOCollection, DTO)

_CONVERTERS: dict[ScalarKind, Callable[[Any], Any]] = {
    ScalarKind.STRING: str,
    ScalarKind.INT: int,
    ScalarKind.BOOL: bool,
    ScalarKind.FLOAT: float,
}


def _matches_kind(kind: ScalarKind, value: Any) -> bool:
    """Native runtime kind check used by the first union pass."""
    if kind is ScalarKind.STRING:
        return isinstance(value, str)
    if kind is ScalarKind.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is ScalarKind.BOOL:
        return isinstance(value, bool)
    if kind is ScalarKind.FLOAT:
        return isinstance(value, float)
    if kind is ScalarKind.ARRAY:
        return isinstance(value, list)
    if kind is ScalarKind.MAP:
        return isinstance(value, Mapping)
    if kind is ScalarKind.COLLECTION:
        return isinstance(value, DTOCollection)
    return True


def _resolve_null(descriptor: TypeDescriptor, path: str) -> None:
    if isinstance(descriptor, UnionDescriptor):
        if descriptor.accepts_null:
            return None
        raise NonNullableUnion(f"null is not one of {descriptor.display_name}", path)
    if descriptor.nullable:
        return None
    raise NonNullableField(f"{descriptor.display_name} field does not accept null", path)


def _resolve_nested(descriptor: NestedDescriptor, value: Any, path: str, build_nested: NestedBuilder) -> Any:
    if isinstance(value, descriptor.target):
        return value
    if not isinstance(value, Mapping):
        raise ExpectedStructuredValue(
            f"expected a mapping to build {descriptor.target.__name__}, got {raw_kind_name(value)}", path
        )
    return build_nested(descriptor.target, value, path)


def _resolve_union(descriptor: UnionDescriptor, value: Any, path: str, build_nested: NestedBuilder) -> Any:
    """Try alternatives in declared order: as-is first, then with conversion."""
    for alternative in descriptor.alternatives:
        if accepts_as_is(alternative, value):
            return value

    logger.debug("%s: no union alternative accepts %s as-is, trying conversion", path, raw_kind_name(value))
    causes: list[DTOError] = []
    for alternative in descriptor.alternatives:
        try:
            return resolve(alternative, value, path=path, build_nested=build_nested)
        except (DTOTypeError, ValidationError) as exc:
            causes.append(exc)

    raise UnionResolutionFailure([alt.display_name for alt in descriptor.alternatives], causes, path)
