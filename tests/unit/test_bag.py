from __future__ import annotations

import pytest

from beanmap.bag import ParameterBag

NAMED = {"one": "1", "two": "2", "three": "3"}


def test_creation_and_reassignment() -> None:
    assert ParameterBag().is_empty()
    assert ParameterBag({}).count() == 0

    bag = ParameterBag.value_of(NAMED)
    assert bag.count() == 3
    assert bag.size() == 3

    bag.assign({"a": 1, "b": 2, "c": 3, "d": 4, "e": 5})
    assert bag.count() == 5
    bag.replace_all(NAMED)
    assert bag.all() == NAMED


def test_value_of_copies_input() -> None:
    source = dict(NAMED)
    bag = ParameterBag.value_of(source)
    bag.set("four", "4")

    assert "four" not in source
    bag.all()["five"] = "5"
    assert not bag.has("five")


def test_cleaning_up() -> None:
    bag = ParameterBag()
    bag.add({"one": "1"})
    assert not bag.is_empty()

    bag.clear()
    assert bag.is_empty()


def test_using_elements() -> None:
    bag = ParameterBag.value_of(NAMED)
    assert bag.has("one")
    assert bag.exists("one")
    assert not bag.has("test")
    assert not bag.has(None)

    bag.remove("one")
    bag.remove("missing")
    assert not bag.has("one")
    assert bag.count() == 2

    bag.assign(NAMED)
    bag.add({"one": "11"})
    assert bag.count() == 3

    bag.add({"test": "10"})
    bag.add_element("test2", "11").set("test3", "11")
    assert bag.count() == 6

    assert bag.get("one") == "11"
    assert bag.input("one") == "11"
    assert bag.post("one") == "11"
    assert bag.get("not exist") is None
    assert bag.get("not exist", "xxx") == "xxx"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("11", True), ("", False), ("  ", True), (0, True), (None, False), (False, True)],
)
def test_filled(value: object, expected: bool) -> None:
    assert ParameterBag({"one": value}).filled("one") is expected


def test_filled_for_absent_key() -> None:
    assert not ParameterBag().filled("twenty")


def test_keys_of() -> None:
    bag = ParameterBag({"a": 1, "b": 2, "c": 1})
    assert bag.keys_of(1) == ["a", "c"]
    assert bag.keys_of(9) == []


def test_input_default_and_option() -> None:
    bag = ParameterBag({"blank": "", "flag": "yes", "off": "0"})

    assert bag.input_default("missing", "fallback") == "fallback"
    assert bag.input_default("blank", "fallback") is None
    assert bag.input_default("flag") == "yes"

    assert bag.option("flag") is True
    assert bag.option("off") is False
    assert bag.option("missing") is False


SPECIAL = ParameterBag.value_of(
    {
        "one": "1",
        "two": "2_$ax1",
        "three": "testing 300",
        "four": None,
        "5": "1",
        "6": "0",
        "7": "",
        "8": False,
        "9": True,
        "10": "false",
        "11": "true",
        "12": 1,
        "13": 0,
    }
)


@pytest.mark.parametrize(
    ("key", "alpha", "digits", "integer", "alnum"),
    [
        ("one", "", "1", 1, "1"),
        ("two", "ax", "21", 2, "2ax1"),
        ("three", "testing", "300", 0, "testing300"),
        ("four", "", "", 0, ""),
    ],
)
def test_typed_getters(key: str, alpha: str, digits: str, integer: int, alnum: str) -> None:
    assert SPECIAL.get_alpha(key) == alpha
    assert SPECIAL.get_digits(key) == digits
    assert SPECIAL.get_int(key) == integer
    assert SPECIAL.get_alnum(key) == alnum


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("5", True),
        ("12", True),
        ("9", True),
        ("11", True),
        ("6", False),
        ("13", False),
        ("7", False),
        ("four", False),
        ("8", False),
        ("10", False),
        ("999", False),
    ],
)
def test_get_boolean(key: str, expected: bool) -> None:
    assert SPECIAL.get_boolean(key) is expected


def test_get_int_uses_default_for_missing_keys() -> None:
    assert SPECIAL.get_int("missing", 7) == 7
    assert SPECIAL.get_int("missing") == 0


def test_mapping_protocol_and_rendering() -> None:
    bag = ParameterBag({"a": 1})
    bag["b"] = None
    assert list(bag) == ["a", "b"]
    assert dict(bag) == {"a": 1, "b": None}
    assert str(bag) == "a=1, b="
    assert repr(bag) == "ParameterBag({'a': 1, 'b': None})"

    del bag["a"]
    assert len(bag) == 1
    with pytest.raises(KeyError):
        bag["a"]
