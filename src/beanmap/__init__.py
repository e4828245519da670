"""beanmap: declarative attribute mapping and validation for untyped payloads."""
from __future__ import annotations

from beanmap.core import (
    AttributeSchema,
    AttributeSpec,
    Bean,
    BeanAccessible,
    BeanCollection,
    SchemaViolation,
    ValidatedBean,
    coerce_attribute,
    parse_attribute_spec,
    parse_schema,
    register_bean,
    registered_types,
    resolve_factory,
    unregister_bean,
)

__version__ = "0.1.0"

__all__ = [
    "AttributeSchema",
    "AttributeSpec",
    "Bean",
    "BeanAccessible",
    "BeanCollection",
    "SchemaViolation",
    "ValidatedBean",
    "__version__",
    "coerce_attribute",
    "parse_attribute_spec",
    "parse_schema",
    "register_bean",
    "registered_types",
    "resolve_factory",
    "unregister_bean",
]
