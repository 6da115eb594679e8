# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation gates: the pass/fail check run on raw input before hydration.

dtokit does not define a rule language of its own. A gate is any callable
taking the raw mapping and returning either ``None`` (accept) or a list of
:class:`~dtokit.errors.FieldError` (reject). The bundled
:class:`PydanticRuleGate` uses a pydantic model as the rule set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dtokit.errors import FieldError

# ###############
# Public Interface
# ###############


class ValidationGate(Protocol):
    """Callable contract for checking raw input."""

    def __call__(self, data: Mapping[str, Any]) -> list[FieldError] | None: ...


class PydanticRuleGate:
    """A gate that validates raw input against a pydantic model.

    Keys not declared on the model are ignored by pydantic, so unknown input
    keys never cause a rejection on their own.

    Args:
        rules: The pydantic model describing acceptable input.
        messages: Optional message overrides keyed by ``"field.code"`` or
            ``"field"`` (e.g. ``{"age.greater_than_equal": "Too young"}``).
    """

    def __init__(self, rules: type[BaseModel], messages: Mapping[str, str] | None = None) -> None:
        self.rules = rules
        self.messages = dict(messages or {})

    def __call__(self, data: Mapping[str, Any]) -> list[FieldError] | None:
        try:
            self.rules.model_validate(dict(data))
        except PydanticValidationError as exc:
            return [self._to_field_error(err) for err in exc.errors()]
        return None

    def __repr__(self) -> str:
        return f"PydanticRuleGate({self.rules.__name__})"

    def _to_field_error(self, err: Mapping[str, Any]) -> FieldError:
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        code = str(err.get("type", "invalid"))
        message = self.messages.get(f"{field}.{code}") or self.messages.get(field) or str(err.get("msg", code))
        return FieldError(field=field, message=message, code=code)


def run_gate(gate: ValidationGate | None, data: Mapping[str, Any]) -> list[FieldError]:
    """Run *gate* on *data* and normalize its result to a (possibly empty) list."""
    if gate is None:
        return []
    return list(gate(data) or [])
