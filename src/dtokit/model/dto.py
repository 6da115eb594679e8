# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The :class:`DTO` base class that typed objects derive from."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from dtokit.validation.gate import PydanticRuleGate, ValidationGate

if TYPE_CHECKING:
    from dtokit.adapters.model_adapter import ModelAdapter
    from dtokit.config.settings import HydrationSettings

D = TypeVar("D", bound="DTO")

# ###############
# Public Interface
# ###############


class DTO:
    """Base class for typed objects hydrated from untyped key-value data.

    Fields are declared as class annotations::

        class Address(DTO):
            street: str
            number: int

        class Person(DTO):
            name: str
            age: int
            address: Address | None
            pets: list

            @classmethod
            def dto_casts(cls):
                return {"pets": (CastMode.SEQUENCE, Pet)}

    Constructing ``Person(data)`` validates a non-empty *data*, converts every
    present field to its declared type and raises if anything does not fit.
    Fields missing from *data*, or null for a type that does not admit null,
    stay unset; reading them raises ``AttributeError``
    and serialization reports them as ``None``.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        from dtokit.hydration.hydrator import populate

        populate(self, {} if data is None else data)

    # -------- declarations (override in subclasses) --------

    @classmethod
    def dto_casts(cls) -> Mapping[str, Any]:
        """Return cast rules as ``{field: (CastMode, target)}``.

        *target* is a DTO class or its name. Names resolve to the class itself,
        a nested class, a module global, or a DTO defined elsewhere in the same
        module (e.g. inside a function) when exactly one has that name.
        """
        return {}

    @classmethod
    def dto_rules(cls) -> type[BaseModel] | None:
        """Return a pydantic model that raw input must satisfy, if any."""
        return None

    @classmethod
    def dto_messages(cls) -> Mapping[str, str]:
        """Return validation message overrides keyed by ``field.code`` or ``field``."""
        return {}

    @classmethod
    def dto_gate(cls) -> ValidationGate | None:
        """Return the validation gate for this class.

        The default wraps :meth:`dto_rules` in a :class:`PydanticRuleGate`.
        Override to plug in any other callable.
        """
        rules = cls.dto_rules()
        if rules is None:
            return None
        return PydanticRuleGate(rules, cls.dto_messages())

    # -------- construction --------

    @classmethod
    def from_plain(cls: type[D], data: Mapping[str, Any]) -> D:
        """Build an instance from a plain mapping (same as calling the class)."""
        from dtokit.hydration.hydrator import from_plain

        return from_plain(cls, data)

    @classmethod
    def from_json(cls: type[D], text: str | bytes) -> D:
        """Build an instance from JSON text holding an object."""
        return cls.from_plain(json.loads(text))

    @classmethod
    def from_model(cls: type[D], record: Any, adapter: ModelAdapter | None = None) -> D:
        """Build an instance from an external record through a model adapter."""
        from dtokit.adapters.model_adapter import from_model

        return from_model(cls, record, adapter)

    # -------- output --------

    def to_plain(self, elide_nulls: bool = False) -> dict[str, Any]:
        """Return the instance as a plain dict in field declaration order."""
        from dtokit.serialization.serializer import to_plain

        return to_plain(self, elide_nulls)

    def to_json(self, settings: HydrationSettings | None = None) -> str:
        """Return the instance encoded as JSON text."""
        from dtokit.serialization.serializer import to_json

        return to_json(self, settings)

    # -------- comparison --------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return _field_values(self) == _field_values(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={value!r}" for name, value in _field_values(self).items())
        return f"{type(self).__name__}({parts})"


# ################
# Implementation
# ################


def _field_values(instance: DTO) -> dict[str, Any]:
    """Return declared field values, treating unset fields as None."""
    from dtokit.schema.registry import get_metadata

    metadata = get_metadata(type(instance))
    return {name: getattr(instance, name, None) for name in metadata.field_names()}
