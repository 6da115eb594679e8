# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Hydration: building typed DTO instances from untyped mappings.

For every hydrate call with a non-empty mapping the target class's validation
gate runs once on the whole raw mapping. Each present key with a declared
field is then resolved against the field's type descriptor, or, when the field
has a cast rule, rebuilt by that rule instead. A null for a non-nullable,
non-union field leaves the field unset, which is how serialization reports
it. All values are computed before anything is assigned, so a failure
anywhere in the tree leaves no instance behind.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from dtokit.config.settings import DEFAULT_SETTINGS, HydrationSettings
from dtokit.errors import ExpectedStructuredValue, FieldError, RecursionLimitExceeded, ValidationError
from dtokit.hydration.casts import apply_cast
from dtokit.hydration.resolution import resolve
from dtokit.model.dto import DTO
from dtokit.model.types import TypeDescriptor, UnionDescriptor, raw_kind_name
from dtokit.schema.registry import TypeMetadataRegistry, default_registry
from dtokit.validation.gate import run_gate

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=DTO)

# ###############
# Public Interface
# ###############


class Hydrator:
    """Builds DTO instances using one registry and one set of settings."""

    def __init__(
        self,
        registry: TypeMetadataRegistry | None = None,
        settings: HydrationSettings | None = None,
    ) -> None:
        self.registry = registry or default_registry
        self.settings = settings or DEFAULT_SETTINGS

    def hydrate(self, type_id: type[D], data: Any) -> D:
        """Return a new instance of *type_id* built from *data*.

        Raises:
            ValidationError: If the validation gate of any DTO in the tree rejects its input.
            DTOTypeError: If a value does not fit its declared type or cast.
            RecursionLimitExceeded: If the input nests deeper than ``settings.max_depth``.
        """
        return self._build(type_id, data, "", 1)

    def populate(self, instance: DTO, data: Any) -> None:
        """Hydrate *data* into an already allocated *instance*."""
        values = self._field_values(type(instance), data, "", 1)
        vars(instance).update(values)

    def _build(self, type_id: type[D], data: Any, path: str, depth: int) -> D:
        values = self._field_values(type_id, data, path, depth)
        instance = type_id.__new__(type_id)
        vars(instance).update(values)
        return instance

    def _field_values(self, type_id: type[DTO], data: Any, path: str, depth: int) -> dict[str, Any]:
        if depth > self.settings.max_depth:
            raise RecursionLimitExceeded(
                f"{path or type_id.__name__}: nesting deeper than {self.settings.max_depth} levels"
            )
        if not isinstance(data, Mapping):
            raise ExpectedStructuredValue(
                f"expected a mapping to build {type_id.__name__}, got {raw_kind_name(data)}", path
            )

        metadata = self.registry.get_metadata(type_id)
        errors = run_gate(metadata.gate, data) if data else []
        if errors:
            logger.debug("Validation rejected input for %s with %d error(s)", type_id.__name__, len(errors))
            raise ValidationError(type_id.__name__, [_prefixed(error, path) for error in errors])

        def build_nested(target: type, raw: Mapping[str, Any], field_path: str) -> Any:
            return self._build(target, raw, field_path, depth + 1)

        values: dict[str, Any] = {}
        for key, raw in data.items():
            spec = metadata.index.get(key)
            if spec is None:
                continue
            field_path = f"{path}.{key}" if path else str(key)
            cast = metadata.casts.get(key)
            if cast is not None:
                values[key] = apply_cast(cast, raw, path=field_path, build_nested=build_nested)
            elif raw is None and _unset_on_null(spec.descriptor):
                continue
            else:
                values[key] = resolve(spec.descriptor, raw, path=field_path, build_nested=build_nested)
        return values


def hydrate(
    type_id: type[D],
    data: Any,
    *,
    settings: HydrationSettings | None = None,
    registry: TypeMetadataRegistry | None = None,
) -> D:
    """Build an instance of *type_id* from a raw mapping.

    See :meth:`Hydrator.hydrate` for the errors raised.
    """
    return Hydrator(registry, settings).hydrate(type_id, data)


def from_plain(
    type_id: type[D],
    data: Any,
    *,
    settings: HydrationSettings | None = None,
    registry: TypeMetadataRegistry | None = None,
) -> D:
    """Alias of :func:`hydrate` for symmetry with :func:`~dtokit.serialization.to_plain`."""
    return hydrate(type_id, data, settings=settings, registry=registry)


def populate(instance: DTO, data: Any) -> None:
    """Hydrate *data* into *instance* with the default registry and settings."""
    Hydrator().populate(instance, data)


# ################
# Implementation
# ################


def _unset_on_null(descriptor: TypeDescriptor) -> bool:
    """Unions keep their own null handling; other non-nullable fields stay unset."""
    return not isinstance(descriptor, UnionDescriptor) and not descriptor.nullable


def _prefixed(error: FieldError, path: str) -> FieldError:
    if not path:
        return error
    return FieldError(field=f"{path}.{error.field}", message=error.message, code=error.code)
