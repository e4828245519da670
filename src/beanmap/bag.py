from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

_NON_ALPHA = re.compile(r"[^A-Za-z]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_NON_DIGIT = re.compile(r"\D")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_TRUE_WORDS = {"1", "true", "on", "yes"}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class ParameterBag(MutableMapping[str, Any]):
    """Ordered key/value bag with typed convenience getters.

    >>> bag = ParameterBag.value_of({"one": "123", "four": "2_$ax1"})
    >>> bag.get_alnum("four"), bag.get_digits("four"), bag.get_int("four")
    ('2ax1', '21', 2)
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Mapping[str, Any] | None = None) -> None:
        self._elements: dict[str, Any] = dict(elements or {})

    @classmethod
    def value_of(cls, elements: Mapping[str, Any] | None = None) -> ParameterBag:
        return cls(elements)

    def all(self) -> dict[str, Any]:
        return dict(self._elements)

    def keys_of(self, value: Any) -> list[str]:
        return [key for key, item in self._elements.items() if item == value]

    def replace_all(self, elements: Mapping[str, Any] | None = None) -> ParameterBag:
        self._elements = dict(elements or {})
        return self

    assign = replace_all

    def get(self, key: str, default: Any = None) -> Any:
        return self._elements.get(key, default)

    input = get
    post = get

    def input_default(self, key: str, default: Any = None) -> Any:
        """``default`` when ``key`` is absent, ``None`` when present but not filled."""
        if not self.has(key):
            return default
        return self._elements[key] if self.filled(key) else None

    def option(self, key: str) -> bool:
        if not self.has(key):
            return False
        return self.get_boolean(key, False)

    def has(self, key: str | None) -> bool:
        return key is not None and key in self._elements

    exists = has

    def set(self, key: str, value: Any) -> ParameterBag:
        self._elements[key] = value
        return self

    add_element = set

    def add(self, elements: Mapping[str, Any] | None = None) -> ParameterBag:
        """Merge ``elements`` in, replacing existing keys."""
        if elements:
            self._elements.update(elements)
        return self

    def filled(self, key: str) -> bool:
        value = self._elements.get(key)
        if value is None:
            return False
        if isinstance(value, str):
            return value != ""
        return True

    def remove(self, key: str) -> None:
        self._elements.pop(key, None)

    def clear(self) -> None:
        self._elements.clear()

    def is_empty(self) -> bool:
        return not self._elements

    def count(self) -> int:
        return len(self._elements)

    size = count

    def get_alpha(self, key: str, default: Any = "") -> str:
        return _NON_ALPHA.sub("", _text(self.get(key, default)))

    def get_alnum(self, key: str, default: Any = "") -> str:
        return _NON_ALNUM.sub("", _text(self.get(key, default)))

    def get_digits(self, key: str, default: Any = "") -> str:
        return _NON_DIGIT.sub("", _text(self.get(key, default)))

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, default)
        if value is None:
            return 0
        if isinstance(value, (bool, int, float)):
            return int(value)
        match = _LEADING_INT.match(str(value))
        return int(match.group(1)) if match else 0

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUE_WORDS

    def __getitem__(self, key: str) -> Any:
        return self._elements[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._elements[key] = value

    def __delitem__(self, key: str) -> None:
        del self._elements[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"ParameterBag({self._elements!r})"

    def __str__(self) -> str:
        return ", ".join(f"{key}={_text(value)}" for key, value in self._elements.items())


__all__ = ["ParameterBag"]
