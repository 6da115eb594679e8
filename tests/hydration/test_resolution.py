# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resolving raw values against type descriptors."""

from enum import Enum

import pytest
from pydantic import BaseModel, Field

from dtokit import (
    DTO,
    DTOCollection,
    EnumValueNotFound,
    NonNullableField,
    NonNullableUnion,
    ScalarCoercionError,
    UnionResolutionFailure,
)
from dtokit.hydration import accepts_as_is, coerce_scalar, hydrate, resolve, resolve_enum
from dtokit.model import (
    EnumDescriptor,
    NestedDescriptor,
    ScalarDescriptor,
    ScalarKind,
    UnionDescriptor,
)

# ###############
# Helpers
# ###############


class Status(Enum):
    ACTIVE = "active"
    DONE = "done"


class Code(Enum):
    ONE = 1
    TWO = 2


class Cat(DTO):
    name: str


class _DogRules(BaseModel):
    bark: str = Field(min_length=1)


class Dog(DTO):
    name: str
    bark: str

    @classmethod
    def dto_rules(cls):
        return _DogRules


class Puppy(Dog):
    age: int


def _build(target: type, raw: dict, path: str):
    return hydrate(target, raw)


def _resolve(descriptor, value):
    return resolve(descriptor, value, path="field", build_nested=_build)


STRING = ScalarDescriptor(scalar=ScalarKind.STRING)
INT = ScalarDescriptor(scalar=ScalarKind.INT)


# ###############
# Scalars
# ###############


@pytest.mark.parametrize(
    ("kind", "raw", "expected"),
    [
        (ScalarKind.STRING, 123, "123"),
        (ScalarKind.INT, "456", 456),
        (ScalarKind.INT, 4.9, 4),
        (ScalarKind.BOOL, 1, True),
        (ScalarKind.BOOL, 0, False),
        (ScalarKind.FLOAT, "78.9", 78.9),
        (ScalarKind.ARRAY, "not_array", ["not_array"]),
        (ScalarKind.ARRAY, (1, 2), [1, 2]),
        (ScalarKind.MAP, {"a": 1}, {"a": 1}),
        (ScalarKind.ANY, object, object),
    ],
)
def test_coerce_scalar(kind: ScalarKind, raw: object, expected: object) -> None:
    assert coerce_scalar(kind, raw) == expected


def test_coerce_scalar_result_types() -> None:
    assert isinstance(coerce_scalar(ScalarKind.STRING, 1), str)
    assert isinstance(coerce_scalar(ScalarKind.INT, "1"), int)
    assert isinstance(coerce_scalar(ScalarKind.FLOAT, 1), float)
    assert isinstance(coerce_scalar(ScalarKind.BOOL, "x"), bool)


def test_array_copies_lists() -> None:
    raw = [1, 2, 3]
    result = coerce_scalar(ScalarKind.ARRAY, raw)

    assert result == raw
    assert result is not raw


def test_collection_wraps_values() -> None:
    assert coerce_scalar(ScalarKind.COLLECTION, [1, 2]) == DTOCollection([1, 2])
    assert coerce_scalar(ScalarKind.COLLECTION, 1) == DTOCollection([1])


def test_enum_member_converts_to_its_value_for_scalars() -> None:
    assert coerce_scalar(ScalarKind.STRING, Status.DONE) == "done"
    assert coerce_scalar(ScalarKind.INT, Code.TWO) == 2


@pytest.mark.parametrize(
    ("kind", "raw"),
    [
        (ScalarKind.INT, "abc"),
        (ScalarKind.FLOAT, "abc"),
        (ScalarKind.INT, float("inf")),
        (ScalarKind.STRING, {"a": 1}),
        (ScalarKind.INT, [1]),
        (ScalarKind.MAP, "a"),
    ],
)
def test_coerce_scalar_failures(kind: ScalarKind, raw: object) -> None:
    with pytest.raises(ScalarCoercionError):
        coerce_scalar(kind, raw)


def test_nullable_scalar_accepts_null_without_coercion() -> None:
    assert _resolve(ScalarDescriptor(scalar=ScalarKind.STRING, nullable=True), None) is None


# ###############
# Enums
# ###############


def test_enum_resolved_by_value() -> None:
    assert resolve_enum(Status, "done") is Status.DONE


def test_enum_resolution_uses_equality() -> None:
    assert resolve_enum(Code, 2.0) is Code.TWO


def test_enum_unknown_value() -> None:
    with pytest.raises(EnumValueNotFound):
        resolve_enum(Status, "archived")


def test_enum_name_is_not_a_value() -> None:
    with pytest.raises(EnumValueNotFound):
        resolve_enum(Status, "DONE")


# ###############
# Unions
# ###############


def test_union_first_as_is_match_wins() -> None:
    union = UnionDescriptor(alternatives=[STRING, INT])

    assert _resolve(union, "42") == "42"


def test_union_order_decides_between_as_is_matches() -> None:
    union = UnionDescriptor(alternatives=[ScalarDescriptor(scalar=ScalarKind.ANY), STRING])
    value = object()

    assert _resolve(union, value) is value


def test_union_bool_is_not_an_int() -> None:
    union = UnionDescriptor(alternatives=[INT, ScalarDescriptor(scalar=ScalarKind.BOOL)])

    assert _resolve(union, True) is True


def test_union_coercion_pass_in_declared_order() -> None:
    union = UnionDescriptor(alternatives=[INT, STRING])

    assert _resolve(union, "12") == "12"
    assert _resolve(union, 1.5) == 1


def test_union_null_with_nullable_alternative() -> None:
    union = UnionDescriptor(alternatives=[STRING, ScalarDescriptor(scalar=ScalarKind.INT, nullable=True)])

    assert _resolve(union, None) is None


def test_null_for_non_nullable_scalar_is_rejected() -> None:
    with pytest.raises(NonNullableField):
        _resolve(INT, None)


def test_union_null_with_nullable_union() -> None:
    union = UnionDescriptor(alternatives=[STRING, INT], nullable=True)

    assert _resolve(union, None) is None


def test_union_null_without_nullable_alternative() -> None:
    union = UnionDescriptor(alternatives=[STRING, INT])

    with pytest.raises(NonNullableUnion):
        _resolve(union, None)


def test_union_nested_instance_accepted_as_is() -> None:
    union = UnionDescriptor(alternatives=[NestedDescriptor(target=Cat), NestedDescriptor(target=Dog)])
    puppy = Puppy({"name": "Rex", "bark": "woof", "age": 1})

    assert _resolve(union, puppy) is puppy


def test_union_nested_declared_order_wins_over_fit() -> None:
    """Both alternatives can be built from the mapping; the first declared one wins."""
    union = UnionDescriptor(alternatives=[NestedDescriptor(target=Cat), NestedDescriptor(target=Dog)])

    result = _resolve(union, {"name": "Rex", "bark": "woof"})

    assert isinstance(result, Cat)


def test_union_skips_alternative_rejected_by_validation() -> None:
    union = UnionDescriptor(alternatives=[NestedDescriptor(target=Dog), NestedDescriptor(target=Cat)])

    result = _resolve(union, {"name": "Tom", "bark": ""})

    assert isinstance(result, Cat)


def test_union_enum_alternative() -> None:
    union = UnionDescriptor(alternatives=[EnumDescriptor(target=Code), EnumDescriptor(target=Status)])

    assert _resolve(union, "active") is Status.ACTIVE
    assert _resolve(union, Status.DONE) is Status.DONE


def test_union_failure_names_all_alternatives() -> None:
    union = UnionDescriptor(alternatives=[INT, EnumDescriptor(target=Status), NestedDescriptor(target=Cat)])

    with pytest.raises(UnionResolutionFailure) as exc_info:
        _resolve(union, "archived")

    error = exc_info.value
    assert error.alternatives == ["int", "Status", "Cat"]
    assert len(error.causes) == 3
    assert error.path == "field"


def test_accepts_as_is() -> None:
    assert accepts_as_is(STRING, "x")
    assert not accepts_as_is(STRING, 1)
    assert accepts_as_is(ScalarDescriptor(scalar=ScalarKind.FLOAT), 1.0)
    assert not accepts_as_is(ScalarDescriptor(scalar=ScalarKind.FLOAT), 1)
    assert accepts_as_is(NestedDescriptor(target=Dog), Puppy({"name": "a", "bark": "b"}))
