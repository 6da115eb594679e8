# Copyright 2026 dtokit Contributors
# SPDX-License-Identifier: Apache-2.0

"""An ordered, homogeneous collection of DTO instances."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, TypeVar, overload

T = TypeVar("T")
U = TypeVar("U")

# ###############
# Public Interface
# ###############


class DTOCollection(Sequence[T]):
    """Immutable ordered wrapper produced by collection casts.

    Behaves like a read-only list. Two collections are equal when they hold
    equal items in the same order; a collection also compares equal to a
    list with the same items.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> DTOCollection[T]: ...

    def __getitem__(self, index: int | slice) -> T | DTOCollection[T]:
        if isinstance(index, slice):
            return DTOCollection(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DTOCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DTOCollection({self._items!r})"

    def first(self, default: Any = None) -> T | Any:
        """Return the first item, or *default* when empty."""
        return self._items[0] if self._items else default

    def map(self, func: Callable[[T], U]) -> DTOCollection[U]:
        """Return a new collection with *func* applied to each item."""
        return DTOCollection(func(item) for item in self._items)

    def filter(self, predicate: Callable[[T], bool]) -> DTOCollection[T]:
        """Return a new collection with the items for which *predicate* is true."""
        return DTOCollection(item for item in self._items if predicate(item))

    def to_list(self) -> list[T]:
        """Return the items as a new list."""
        return list(self._items)
