from __future__ import annotations

from beanmap.core.collection import BeanCollection


def test_collection_preserves_order_and_exposes_ends() -> None:
    items = BeanCollection(["a", "b", "c"])

    assert len(items) == 3
    assert items.count() == 3
    assert items.first() == "a"
    assert items.last() == "c"
    assert list(items) == ["a", "b", "c"]
    assert items.to_list() == ["a", "b", "c"]


def test_empty_collection_ends_return_default() -> None:
    items = BeanCollection()

    assert items.is_empty()
    assert items.first() is None
    assert items.last("none") == "none"


def test_collection_is_a_mutable_sequence() -> None:
    items = BeanCollection([1])
    items.add(2).add(3)
    items.append(4)
    items.insert(0, 0)
    del items[1]
    items[0] = -1

    assert items == [-1, 2, 3, 4]
    assert items.count(3) == 1
    assert items[1:3] == BeanCollection([2, 3])
    assert isinstance(items[1:3], BeanCollection)


def test_collection_equality() -> None:
    assert BeanCollection([1, 2]) == BeanCollection([1, 2])
    assert BeanCollection([1, 2]) != BeanCollection([2, 1])
    assert BeanCollection([1]) != (1,)
    assert repr(BeanCollection([1])) == "BeanCollection([1])"
