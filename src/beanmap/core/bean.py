from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from types import MappingProxyType, SimpleNamespace
from typing import Any, ClassVar, Protocol, runtime_checkable

from beanmap.constants import BEAN_VERSION, VERSION_FIELD
from beanmap.core.canonical import dumps, to_plain
from beanmap.core.errors import ERROR_CODE_INVALID_SCHEMA, ERROR_CODE_UNDECLARED_ATTRIBUTE, SchemaViolation


@runtime_checkable
class BeanAccessible(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> Any:
        ...

    def has(self, key: str) -> bool:
        ...


def _iter_payload(raw: Any, owner: str) -> Iterable[tuple[str, Any]]:
    if raw is None:
        return ()
    if isinstance(raw, Bean):
        return [(key, value) for key, value in raw.to_map().items()]
    if isinstance(raw, Mapping):
        return [(str(key), value) for key, value in raw.items()]
    if isinstance(raw, SimpleNamespace):
        return [(str(key), value) for key, value in vars(raw).items()]
    raise SchemaViolation(
        f"{owner} expects a mapping of attributes, got {type(raw).__name__}",
        code=ERROR_CODE_INVALID_SCHEMA,
        bean=owner,
    )


class Bean(MutableMapping[str, Any]):
    """Dynamic attribute bag without validation.

    Subclasses declare, at class level:

    * ``available_attributes``: the attribute names the bean knows about,
    * ``attribute_defaults``: default raw values per attribute,
    * ``strict_assignment``: reject undeclared keys at construction,
    * ``version_field`` / ``bean_version``: the version literal injected at
      construction (``version_field = None`` disables it).

    Attributes are reachable as ``bean.get("name")``, ``bean["name"]`` or
    ``bean.name``.  Dot access is a convenience: names that collide with a
    method (``items``, ``keys``...) or start with an underscore are only
    reachable through :meth:`get`.
    """

    __slots__ = ("_attributes",)

    bean_version: ClassVar[str] = BEAN_VERSION
    version_field: ClassVar[str | None] = VERSION_FIELD
    available_attributes: ClassVar[tuple[str, ...]] = ()
    attribute_defaults: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    strict_assignment: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "available_attributes" in cls.__dict__:
            cls.available_attributes = tuple(cls.__dict__["available_attributes"])
        if "attribute_defaults" in cls.__dict__:
            cls.attribute_defaults = MappingProxyType(dict(cls.__dict__["attribute_defaults"]))

    def __init__(self, attributes: Any = None, include_version: bool = True) -> None:
        object.__setattr__(self, "_attributes", {})
        owner = type(self).__name__
        declared = self._declared_keys()
        defaults = self._declared_defaults()
        store = self._attributes

        if defaults:
            if declared:
                for key in declared:
                    store[key] = copy.deepcopy(defaults.get(key))
            else:
                for key, value in defaults.items():
                    store[key] = copy.deepcopy(value)
        else:
            for key in declared:
                store[key] = None

        allowed = set(declared) if self.strict_assignment and declared else None
        for key, value in _iter_payload(attributes, owner):
            if allowed is not None and key not in allowed and key != self.version_field:
                raise SchemaViolation(
                    f"Invalid key '{key}'. Not declared for {owner} while strict assignment is enabled",
                    code=ERROR_CODE_UNDECLARED_ATTRIBUTE,
                    key=key,
                    bean=owner,
                )
            store[key] = value if value is not None else copy.deepcopy(defaults.get(key))

        if include_version and self.version_field and store.get(self.version_field) is None:
            store[self.version_field] = self.bean_version

    @classmethod
    def make(cls, attributes: Any = None, include_version: bool = True) -> Bean:
        return cls(attributes, include_version)

    @classmethod
    def _declared_keys(cls) -> tuple[str, ...]:
        return cls.available_attributes

    @classmethod
    def _declared_defaults(cls) -> Mapping[str, Any]:
        return cls.attribute_defaults

    # Capability interface

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._attributes:
            return self._attributes[key]
        return default

    def has(self, key: str) -> bool:
        return key in self._attributes

    def set(self, key: str, value: Any) -> Bean:
        self._attributes[key] = value
        return self

    def remove(self, key: str) -> None:
        self._attributes.pop(key, None)

    def set_extra(self, key: str, value: Any = True) -> Bean:
        """Store ``value`` verbatim under ``key`` and return the bean."""
        self._attributes[key] = value
        return self

    def assign(self, key: str, value: Any) -> None:
        """Property-set path. Plain beans store the value as given."""
        self._attributes[key] = value

    # Serialization

    def to_map(self) -> dict[str, Any]:
        return self._attributes

    def serialize(self) -> dict[str, Any]:
        return {key: to_plain(value) for key, value in self._attributes.items()}

    def to_json(self, indent: int | None = None) -> str:
        return dumps(self._attributes, indent=indent)

    def has_only_empty_attributes(self) -> bool:
        return all(value is None for key, value in self._attributes.items() if key != self.version_field)

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __delitem__(self, key: str) -> None:
        del self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    # Dynamic property access

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        self.assign(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
            return
        self.remove(name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Bean):
            return type(self) is type(other) and self._attributes == other._attributes
        if isinstance(other, Mapping):
            return self._attributes == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"

    def __str__(self) -> str:
        return self.to_json()


__all__ = ["Bean", "BeanAccessible"]
