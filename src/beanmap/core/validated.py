from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from beanmap.constants import ARRAY_SEPARATOR
from beanmap.core.bean import Bean
from beanmap.core.coercion import coerce_attribute
from beanmap.core.collection import BeanCollection
from beanmap.core.errors import (
    ERROR_CODE_MANDATORY_MISSING,
    ERROR_CODE_MANDATORY_NULL,
    ERROR_CODE_MIN_COUNT,
    SchemaViolation,
)
from beanmap.core.schema import EMPTY_SCHEMA, AttributeSchema, parse_schema


def _element_count(value: Any, type_tag: str) -> int:
    """Number of elements ``value`` holds once coerced under ``type_tag``.

    A lone value becomes a one-element collection; a joined ``array`` string
    counts its separated parts.
    """
    if isinstance(value, (list, tuple, BeanCollection)):
        return len(value)
    if type_tag == "array" and isinstance(value, str):
        return len(value.split(ARRAY_SEPARATOR)) if value else 0
    return 1


class ValidatedBean(Bean):
    """Bean whose attributes are validated and coerced against a schema.

    Declare the schema once on the subclass, either as an
    :class:`AttributeSchema` or as a plain mapping that is parsed when the
    class is created::

        class Store(ValidatedBean):
            attribute_schema = {
                "id": {"mandatory": True, "type": "string"},
                "name": {"mandatory": False, "type": "string"},
            }
            attribute_defaults = {"name": "N/A"}

    Construction derives the attribute list from the schema, merges defaults
    and the raw payload, validates mandatory attributes and minimum counts
    (when ``auto_validate`` is set), then coerces every stored attribute.  It
    either returns a fully coerced bean or raises :class:`SchemaViolation`.
    """

    __slots__ = ()

    attribute_schema: ClassVar[AttributeSchema] = EMPTY_SCHEMA
    strict_assignment: ClassVar[bool] = True
    auto_validate: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = cls.__dict__.get("attribute_schema")
        if declared is not None and not isinstance(declared, AttributeSchema):
            if not isinstance(declared, Mapping):
                raise TypeError(f"{cls.__name__}.attribute_schema must be an AttributeSchema or a mapping")
            cls.attribute_schema = parse_schema(declared, cls.__dict__.get("attribute_defaults"))

    def __init__(self, attributes: Any = None, include_version: bool = True) -> None:
        super().__init__(attributes, include_version)
        if self.auto_validate:
            self.validate_or_fail()
        self.format_attributes()

    @classmethod
    def _declared_keys(cls) -> tuple[str, ...]:
        names = cls.attribute_schema.names
        if len(names) > len(cls.available_attributes):
            return names
        return cls.available_attributes

    @classmethod
    def _declared_defaults(cls) -> Mapping[str, Any]:
        return cls.attribute_schema.defaults or cls.attribute_defaults

    def validate_or_fail(self) -> None:
        owner = type(self).__name__
        store = self.to_map()
        for name, spec in self.attribute_schema.items():
            present = name in store
            value = store.get(name)

            if spec.mandatory:
                if not present:
                    raise SchemaViolation(
                        f"Invalid data. Mandatory '{name}' attribute is not defined for {owner}",
                        code=ERROR_CODE_MANDATORY_MISSING,
                        key=name,
                        bean=owner,
                    )
                if value is None:
                    raise SchemaViolation(
                        f"Invalid data. {owner}.'{name}' must have a value (null provided and no default set)",
                        code=ERROR_CODE_MANDATORY_NULL,
                        key=name,
                        bean=owner,
                    )

            if spec.countable and spec.min_count and value is not None:
                minimum = spec.min_count
                if _element_count(value, spec.type_tag) < minimum:
                    raise SchemaViolation(
                        f"Invalid data. {owner}.'{name}' attribute of type {spec.type_tag} "
                        f"must have at least {minimum} elements",
                        code=ERROR_CODE_MIN_COUNT,
                        key=name,
                        bean=owner,
                    )

    def assign(self, key: str, value: Any) -> None:
        self.to_map()[key] = coerce_attribute(
            key,
            value,
            self.attribute_schema.spec_for(key),
            owner=type(self).__name__,
        )

    def format_attributes(self) -> ValidatedBean:
        """Re-run every stored attribute through :meth:`assign`."""
        for key, value in list(self.to_map().items()):
            self.assign(key, value)
        return self


__all__ = ["ValidatedBean"]
