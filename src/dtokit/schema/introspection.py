# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Builds :class:`~dtokit.model.types.TypeMetadata` from DTO class declarations.

Field order follows the method resolution order from the root base class down,
so inherited fields always precede the fields a subclass adds. A subclass that
re-annotates an inherited field changes its type but keeps its position.
"""

from __future__ import annotations

import inspect
import sys
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from enum import Enum
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from dtokit.errors import SchemaError
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
    describe_nullable,
)

# ###############
# Public Interface
# ###############


def build_metadata(cls: type[DTO]) -> TypeMetadata:
    """Introspect *cls* and return its immutable metadata.

    Raises:
        SchemaError: If an annotation or cast declaration is not supported.
    """
    hints = _resolve_hints(cls)
    fields: list[FieldSpec] = []
    for name in _field_names(cls):
        descriptor = describe(hints[name], where=f"{cls.__name__}.{name}")
        fields.append(FieldSpec(name=name, descriptor=descriptor, declared_nullable=_accepts_null(descriptor)))

    index = {f.name: f for f in fields}
    casts = _build_casts(cls, index)
    return TypeMetadata(
        type_id=cls,
        fields=tuple(fields),
        index=types.MappingProxyType(index),
        casts=types.MappingProxyType(casts),
        gate=cls.dto_gate(),
    )


def describe(annotation: Any, *, where: str = "<annotation>") -> TypeDescriptor:
    """Translate a resolved type annotation into a type descriptor.

    Raises:
        SchemaError: If the annotation has no descriptor equivalent.
    """
    if annotation is Any:
        return ScalarDescriptor(scalar=ScalarKind.ANY, nullable=True)

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        nullable = type(None) in args
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            inner = describe(members[0], where=where)
            return describe_nullable(inner) if nullable else inner
        return UnionDescriptor(
            alternatives=[describe(member, where=where) for member in members],
            nullable=nullable,
        )

    target = origin if origin is not None else annotation
    if not isinstance(target, type) or target is type(None):
        raise SchemaError(f"{where}: unsupported type annotation {annotation!r}")

    if issubclass(target, DTOCollection):
        return ScalarDescriptor(scalar=ScalarKind.COLLECTION)
    if target in _SCALAR_KINDS:
        return ScalarDescriptor(scalar=_SCALAR_KINDS[target])
    if issubclass(target, Enum):
        return EnumDescriptor(target=target)
    if issubclass(target, DTO):
        return NestedDescriptor(target=target)

    raise SchemaError(f"{where}: unsupported type annotation {annotation!r}")


# ################
# Implementation
# ################

_SCALAR_KINDS: dict[type, ScalarKind] = {
    str: ScalarKind.STRING,
    int: ScalarKind.INT,
    bool: ScalarKind.BOOL,
    float: ScalarKind.FLOAT,
    list: ScalarKind.ARRAY,
    tuple: ScalarKind.ARRAY,
    Sequence: ScalarKind.ARRAY,
    MutableSequence: ScalarKind.ARRAY,
    dict: ScalarKind.MAP,
    Mapping: ScalarKind.MAP,
    MutableMapping: ScalarKind.MAP,
}

_CAST_MODE_ALIASES = {
    None: CastMode.SINGLE,
    "array": CastMode.SEQUENCE,
}


def _resolve_hints(cls: type) -> dict[str, Any]:
    """Evaluate all annotations of *cls*, including string forward references."""
    try:
        return get_type_hints(cls, localns={cls.__name__: cls})
    except (NameError, TypeError) as exc:
        raise SchemaError(f"{cls.__name__}: cannot resolve field annotations: {exc}") from exc


def _field_names(cls: type) -> list[str]:
    """Return declared field names, base classes first."""
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is DTO or not issubclass(klass, DTO):
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            if name.startswith("_") or _is_class_var(annotation):
                continue
            names.setdefault(name, None)
    return list(names)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _accepts_null(descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, UnionDescriptor):
        return descriptor.accepts_null
    return descriptor.nullable


def _build_casts(cls: type[DTO], index: Mapping[str, FieldSpec]) -> dict[str, CastSpec]:
    """Normalize the class's cast declarations into CastSpec objects."""
    casts: dict[str, CastSpec] = {}
    for name, rule in cls.dto_casts().items():
        where = f"{cls.__name__}.{name}"
        if name not in index:
            raise SchemaError(f"{where}: cast declared for an undeclared field")
        if isinstance(rule, CastSpec):
            mode, target = rule.mode, rule.target
        else:
            try:
                raw_mode, target = rule
            except (TypeError, ValueError):
                raise SchemaError(f"{where}: cast must be a (mode, target) pair, got {rule!r}") from None
            mode = _cast_mode(raw_mode, where)
        target = _resolve_target(cls, target, where)
        casts[name] = CastSpec(field=name, mode=mode, target=target)
    return casts


def _cast_mode(raw_mode: Any, where: str) -> CastMode:
    if isinstance(raw_mode, CastMode):
        return raw_mode
    if raw_mode in _CAST_MODE_ALIASES:
        return _CAST_MODE_ALIASES[raw_mode]
    try:
        return CastMode(raw_mode)
    except ValueError:
        raise SchemaError(f"{where}: unknown cast mode {raw_mode!r}") from None


def _resolve_target(cls: type, target: Any, where: str) -> type[DTO]:
    """Resolve a cast target, which may be given as a class name.

    Names are looked up as the class itself, then in the class and module
    namespaces, then among DTO subclasses of the same module, which covers
    classes defined inside functions.
    """
    if isinstance(target, str):
        target = _lookup_target(cls, target, where)
    if not isinstance(target, type) or not issubclass(target, DTO):
        raise SchemaError(f"{where}: cast target must be a DTO subclass, got {target!r}")
    return target


def _lookup_target(cls: type, name: str, where: str) -> Any:
    if name == cls.__name__:
        return cls
    module = sys.modules.get(cls.__module__)
    for namespace in (vars(cls), vars(module) if module is not None else {}):
        if name in namespace:
            return namespace[name]

    candidates = {sub for sub in _dto_subclasses() if sub.__name__ == name and sub.__module__ == cls.__module__}
    if len(candidates) == 1:
        return candidates.pop()
    if candidates:
        raise SchemaError(f"{where}: cast target name {name!r} is ambiguous, pass the class instead")
    raise SchemaError(f"{where}: cast target {name!r} not found in module {cls.__module__}")


def _dto_subclasses() -> list[type[DTO]]:
    found: list[type[DTO]] = []
    pending = list(DTO.__subclasses__())
    while pending:
        sub = pending.pop()
        found.append(sub)
        pending.extend(sub.__subclasses__())
    return found
