from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from beanmap.constants import COUNTABLE_TYPE_TAGS, TYPE_TAG_DEFAULT
from beanmap.core.errors import ERROR_CODE_INVALID_SCHEMA, SchemaViolation

# A reference is either a build function (bean classes qualify) or a
# registered type name resolved at coercion time.
TypeRef = Callable[..., Any] | str

_SPEC_KEYS = {"mandatory", "type", "min_count", "class", "ref"}


@dataclass(slots=True, frozen=True)
class AttributeSpec:
    type_tag: str = TYPE_TAG_DEFAULT
    mandatory: bool = False
    min_count: int | None = None
    ref: TypeRef | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type_tag", self.type_tag.strip().lower() or TYPE_TAG_DEFAULT)

    @property
    def countable(self) -> bool:
        return self.type_tag in COUNTABLE_TYPE_TAGS

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"mandatory": self.mandatory, "type": self.type_tag}
        if self.min_count is not None:
            payload["min_count"] = self.min_count
        if self.ref is not None:
            payload["class"] = self.ref if isinstance(self.ref, str) else _ref_name(self.ref)
        return payload


def _ref_name(ref: Callable[..., Any]) -> str:
    return getattr(ref, "__qualname__", None) or getattr(ref, "__name__", None) or repr(ref)


@dataclass(slots=True, frozen=True)
class AttributeSchema:
    """Immutable per-type attribute declaration.

    ``attributes`` preserves declaration order; that order is the canonical
    attribute list used when populating defaults.  Both mappings are exposed
    as read-only proxies and are shared by every instance of the type.
    """

    attributes: Mapping[str, AttributeSpec] = field(default_factory=dict)
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        attributes = dict(self.attributes)
        defaults = dict(self.defaults)
        for name, spec in attributes.items():
            if not isinstance(spec, AttributeSpec):
                raise SchemaViolation(
                    f"Attribute '{name}' must be declared with an AttributeSpec",
                    code=ERROR_CODE_INVALID_SCHEMA,
                    key=name,
                )
        if attributes and defaults:
            unknown = [key for key in defaults if key not in attributes]
            if unknown:
                joined = ", ".join(sorted(unknown))
                raise SchemaViolation(
                    f"Defaults declared for unknown attributes: {joined}",
                    code=ERROR_CODE_INVALID_SCHEMA,
                    key=unknown[0],
                )
        object.__setattr__(self, "attributes", MappingProxyType(attributes))
        object.__setattr__(self, "defaults", MappingProxyType(defaults))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.attributes)

    def spec_for(self, name: str) -> AttributeSpec | None:
        return self.attributes.get(name)

    def items(self) -> Iterator[tuple[str, AttributeSpec]]:
        return iter(self.attributes.items())

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": {name: spec.to_dict() for name, spec in self.attributes.items()},
            "defaults": dict(self.defaults),
        }


def _invalid(message: str, name: str) -> SchemaViolation:
    return SchemaViolation(message, code=ERROR_CODE_INVALID_SCHEMA, key=name)


def parse_attribute_spec(raw: Any, *, name: str) -> AttributeSpec:
    """Build an :class:`AttributeSpec` from its declarative form.

    Accepts an existing spec, a bare type tag string, or a mapping with the
    keys ``mandatory``, ``type``, ``min_count`` and ``class`` (``ref`` is an
    alias of ``class``).
    """
    if isinstance(raw, AttributeSpec):
        return raw
    if raw is None:
        return AttributeSpec()
    if isinstance(raw, str):
        return AttributeSpec(type_tag=raw)
    if not isinstance(raw, Mapping):
        raise _invalid(f"Attribute '{name}' details must be a mapping or a type tag", name)

    unknown = sorted(str(key) for key in raw if key not in _SPEC_KEYS)
    if unknown:
        raise _invalid(f"Attribute '{name}' has unsupported keys: {', '.join(unknown)}", name)

    mandatory = raw.get("mandatory", False)
    if not isinstance(mandatory, bool):
        raise _invalid(f"Attribute '{name}' field `mandatory` must be a boolean", name)

    type_tag = raw.get("type", TYPE_TAG_DEFAULT)
    if not isinstance(type_tag, str):
        raise _invalid(f"Attribute '{name}' field `type` must be a string", name)

    min_count = raw.get("min_count")
    if min_count is not None and (isinstance(min_count, bool) or not isinstance(min_count, int) or min_count < 0):
        raise _invalid(f"Attribute '{name}' field `min_count` must be a non-negative integer", name)

    ref = raw.get("class", raw.get("ref"))
    if ref is not None and not (isinstance(ref, str) or callable(ref)):
        raise _invalid(f"Attribute '{name}' field `class` must be a type name or a callable", name)

    return AttributeSpec(type_tag=type_tag, mandatory=mandatory, min_count=min_count, ref=ref)


def parse_schema(raw: Mapping[str, Any] | None, defaults: Mapping[str, Any] | None = None) -> AttributeSchema:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise SchemaViolation("Attribute declarations must be a mapping", code=ERROR_CODE_INVALID_SCHEMA)
    if defaults is not None and not isinstance(defaults, Mapping):
        raise SchemaViolation("Attribute defaults must be a mapping", code=ERROR_CODE_INVALID_SCHEMA)
    attributes = {str(name): parse_attribute_spec(details, name=str(name)) for name, details in raw.items()}
    return AttributeSchema(attributes=attributes, defaults=dict(defaults or {}))


EMPTY_SCHEMA = AttributeSchema()


__all__ = [
    "EMPTY_SCHEMA",
    "AttributeSchema",
    "AttributeSpec",
    "TypeRef",
    "parse_attribute_spec",
    "parse_schema",
]
