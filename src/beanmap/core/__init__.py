"""beanmap core: attribute schemas, bean containers and the coercion engine.

Everything here is a pure in-memory transform.  The core raises
:class:`~beanmap.core.errors.SchemaViolation` and never logs; it has no
dependency on typer, yaml, or any I/O.
"""
from __future__ import annotations

from beanmap.core.bean import Bean, BeanAccessible
from beanmap.core.coercion import coerce_attribute
from beanmap.core.collection import BeanCollection
from beanmap.core.errors import SchemaViolation
from beanmap.core.registry import register_bean, registered_types, resolve_factory, unregister_bean
from beanmap.core.schema import AttributeSchema, AttributeSpec, parse_attribute_spec, parse_schema
from beanmap.core.validated import ValidatedBean

__all__ = [
    "AttributeSchema",
    "AttributeSpec",
    "Bean",
    "BeanAccessible",
    "BeanCollection",
    "SchemaViolation",
    "ValidatedBean",
    "coerce_attribute",
    "parse_attribute_spec",
    "parse_schema",
    "register_bean",
    "registered_types",
    "resolve_factory",
    "unregister_bean",
]
