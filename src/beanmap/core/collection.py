from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from typing import Any, overload


class BeanCollection(MutableSequence[Any]):
    """Ordered element storage produced by the ``collection`` type tag."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = list(items)

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> BeanCollection: ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return BeanCollection(self._items[index])
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self._items[index] = value

    def __delitem__(self, index: Any) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: Any) -> None:
        self._items.insert(index, value)

    def add(self, item: Any) -> BeanCollection:
        self._items.append(item)
        return self

    def first(self, default: Any = None) -> Any:
        return self._items[0] if self._items else default

    def last(self, default: Any = None) -> Any:
        return self._items[-1] if self._items else default

    def count(self, value: Any = ...) -> int:  # type: ignore[override]
        # Without an argument this is the element count; with one it keeps
        # the Sequence meaning.
        if value is ...:
            return len(self._items)
        return self._items.count(value)

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> list[Any]:
        return list(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BeanCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BeanCollection({self._items!r})"


__all__ = ["BeanCollection"]
