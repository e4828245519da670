from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from beanmap.core.errors import ERROR_CODE_UNKNOWN_TYPE, SchemaViolation

BeanFactory = Callable[..., Any]
F = TypeVar("F", bound=BeanFactory)

# Build functions keyed by type name. Filled at import time, read afterwards.
_FACTORIES: dict[str, BeanFactory] = {}


def register_bean(name: str | None = None, *, replace: bool = False) -> Callable[[F], F]:
    """Register a bean class (or any build function) under ``name``.

    Attribute specs may then reference the type by name instead of by object.
    """

    def decorator(factory: F) -> F:
        key = name or getattr(factory, "__name__", None)
        if not key:
            raise ValueError("register_bean requires a name for anonymous factories")
        existing = _FACTORIES.get(key)
        if existing is not None and existing is not factory and not replace:
            raise ValueError(f"Bean type '{key}' is already registered")
        _FACTORIES[key] = factory
        return factory

    return decorator


def unregister_bean(name: str) -> None:
    _FACTORIES.pop(name, None)


def registered_types() -> dict[str, BeanFactory]:
    return dict(_FACTORIES)


def resolve_factory(ref: BeanFactory | str) -> BeanFactory:
    if isinstance(ref, str):
        factory = _FACTORIES.get(ref)
        if factory is None:
            raise SchemaViolation(f"Unknown bean type '{ref}'", code=ERROR_CODE_UNKNOWN_TYPE)
        return factory
    if not callable(ref):
        raise SchemaViolation(f"Bean type reference {ref!r} is not callable", code=ERROR_CODE_UNKNOWN_TYPE)
    return ref


__all__ = [
    "BeanFactory",
    "register_bean",
    "registered_types",
    "resolve_factory",
    "unregister_bean",
]
