# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for cast rules applied during hydration."""

import pytest

from dtokit import (
    DTO,
    CastExpectedSequence,
    CastExpectedStructure,
    CastMode,
    DTOCollection,
)

# ###############
# Helpers
# ###############


class Address(DTO):
    street: str
    number: int


class Item(DTO):
    name: str
    qty: int


class Order(DTO):
    reference: str
    address: Address | None
    items: list
    lines: DTOCollection | None

    @classmethod
    def dto_casts(cls):
        return {
            "address": (CastMode.SINGLE, Address),
            "items": (CastMode.SEQUENCE, Item),
            "lines": (CastMode.COLLECTION, Item),
        }


class TreeNode(DTO):
    label: str
    children: list

    @classmethod
    def dto_casts(cls):
        return {"children": ("array", "TreeNode")}


# ###############
# Single
# ###############


def test_single_cast_builds_nested_dto() -> None:
    order = Order({"address": {"street": "Main", "number": "5"}})

    assert isinstance(order.address, Address)
    assert order.address.number == 5


def test_single_cast_keeps_instance() -> None:
    address = Address({"street": "Main", "number": 5})
    order = Order({"address": address})

    assert order.address is address


def test_single_cast_rejects_non_mapping() -> None:
    with pytest.raises(CastExpectedStructure) as exc_info:
        Order({"address": "Main Street 5"})
    assert exc_info.value.path == "address"


def test_cast_assigns_null_unconditionally() -> None:
    order = Order({"address": None, "items": None, "lines": None})

    assert order.address is None
    assert order.items is None
    assert order.lines is None


# ###############
# Sequence and collection
# ###############


def test_sequence_cast_builds_list_of_dtos() -> None:
    order = Order({"items": [{"name": "pen", "qty": "2"}, {"name": "ink", "qty": 1}]})

    assert isinstance(order.items, list)
    assert [item.name for item in order.items] == ["pen", "ink"]
    assert order.items[0].qty == 2


def test_sequence_cast_keeps_existing_instances_and_order() -> None:
    pen = Item({"name": "pen", "qty": 1})
    order = Order({"items": [pen, {"name": "ink", "qty": 1}, pen]})

    assert order.items[0] is pen
    assert order.items[2] is pen
    assert len(order.items) == 3


def test_empty_sequence_stays_an_empty_list() -> None:
    order = Order({"items": []})

    assert order.items == []
    assert isinstance(order.items, list)


def test_collection_cast_builds_collection() -> None:
    order = Order({"lines": [{"name": "pen", "qty": 1}, {"name": "ink", "qty": 3}]})

    assert isinstance(order.lines, DTOCollection)
    assert order.lines.first().name == "pen"
    assert order.lines.map(lambda line: line.qty).to_list() == [1, 3]


def test_empty_collection_stays_an_empty_collection() -> None:
    order = Order({"lines": []})

    assert isinstance(order.lines, DTOCollection)
    assert len(order.lines) == 0


@pytest.mark.parametrize("raw", ["pen", {"name": "pen", "qty": 1}, 3])
def test_sequence_cast_rejects_non_list(raw: object) -> None:
    with pytest.raises(CastExpectedSequence):
        Order({"items": raw})


def test_collection_cast_rejects_non_list() -> None:
    with pytest.raises(CastExpectedSequence):
        Order({"lines": "pen"})


def test_sequence_element_must_be_mapping() -> None:
    with pytest.raises(CastExpectedStructure) as exc_info:
        Order({"items": [{"name": "pen", "qty": 1}, "ink"]})
    assert exc_info.value.path == "items[1]"


def test_self_referencing_cast_by_name() -> None:
    tree = TreeNode({"label": "root", "children": [{"label": "a", "children": []}, {"label": "b", "children": []}]})

    assert [child.label for child in tree.children] == ["a", "b"]
    assert isinstance(tree.children[0], TreeNode)
    assert tree.children[0].children == []
