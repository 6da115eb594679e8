# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy raised by hydration, serialization and schema building."""

from __future__ import annotations

from dataclasses import dataclass

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class FieldError:
    """A single field-level rejection reported by a validation gate.

    Attributes:
        field: Dotted name of the offending input key.
        message: Human-readable description of the problem.
        code: Machine-readable error code (e.g. ``string_too_short``).
    """

    field: str
    message: str
    code: str = "invalid"


class DTOError(Exception):
    """Base class for every error raised by dtokit."""


class SchemaError(DTOError):
    """Raised when a DTO class declares a field or cast that cannot be described."""


class SettingsError(DTOError):
    """Raised when a settings file cannot be loaded or is invalid."""


class RecursionLimitExceeded(DTOError):
    """Raised when nested input is deeper than the configured hydration limit."""


class CyclicReferenceError(DTOError):
    """Raised when serialization meets an instance that contains itself."""


class ValidationError(DTOError):
    """Raised when the validation gate rejects raw input.

    No instance is constructed when this is raised.
    """

    def __init__(self, type_name: str, errors: list[FieldError]) -> None:
        self.type_name = type_name
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid data for {type_name}: {details}")

    def messages(self) -> dict[str, list[str]]:
        """Return error messages grouped by field name."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class DTOTypeError(DTOError, TypeError):
    """Base class for raw values that do not fit a declared field type.

    Attributes:
        path: Dotted path of the field being resolved, or ``""`` at the top level.
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        self.reason = message
        super().__init__(f"{path}: {message}" if path else message)


class ExpectedStructuredValue(DTOTypeError):
    """A nested DTO was declared but the raw value is not a mapping."""


class CastExpectedStructure(DTOTypeError):
    """A single-object cast received something other than a mapping."""


class CastExpectedSequence(DTOTypeError):
    """A sequence or collection cast received something other than a list."""


class EnumValueNotFound(DTOTypeError):
    """No enum member has a value equal to the raw value."""


class NonNullableField(DTOTypeError):
    """``None`` was given for a field whose type does not allow it."""


class NonNullableUnion(DTOTypeError):
    """``None`` was given for a union with no nullable alternative."""


class ScalarCoercionError(DTOTypeError):
    """The native conversion for a scalar kind failed."""


class UnionResolutionFailure(DTOTypeError):
    """No union alternative accepted or could be resolved from the raw value.

    Attributes:
        alternatives: Display names of every attempted alternative, in order.
        causes: The error raised by each alternative during the coercion pass.
    """

    def __init__(
        self,
        alternatives: list[str],
        causes: list[DTOError],
        path: str = "",
    ) -> None:
        self.alternatives = list(alternatives)
        self.causes = list(causes)
        message = f"cannot convert value to one of {', '.join(self.alternatives)}"
        if self.causes:
            message += " (" + "; ".join(str(c) for c in self.causes) + ")"
        super().__init__(message, path)
