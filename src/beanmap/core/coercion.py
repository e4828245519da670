from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import Any, cast

from beanmap.constants import ARRAY_SEPARATOR, MAX_NESTING_DEPTH, YES_VALUES
from beanmap.core.bean import Bean
from beanmap.core.collection import BeanCollection
from beanmap.core.errors import (
    ERROR_CODE_MANDATORY_NULL,
    ERROR_CODE_MISSING_REFERENCE,
    ERROR_CODE_NESTING_TOO_DEEP,
    SchemaViolation,
)
from beanmap.core.registry import resolve_factory
from beanmap.core.schema import AttributeSpec, TypeRef

Handler = Callable[[Any, AttributeSpec], Any]

_PASSTHROUGH = AttributeSpec()

_nesting_depth: ContextVar[int] = ContextVar("beanmap_nesting_depth", default=0)


@contextmanager
def _nested_construction() -> Iterator[None]:
    depth = _nesting_depth.get() + 1
    if depth > MAX_NESTING_DEPTH:
        raise SchemaViolation(
            f"Nested bean construction exceeded {MAX_NESTING_DEPTH} levels (cyclic payload?)",
            code=ERROR_CODE_NESTING_TOO_DEEP,
        )
    token = _nesting_depth.set(depth)
    try:
        yield
    finally:
        _nesting_depth.reset(token)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, BeanCollection))


def _build(ref: TypeRef, payload: Any) -> Any:
    factory = resolve_factory(ref)
    if isinstance(factory, type) and isinstance(payload, factory):
        return payload
    with _nested_construction():
        return factory(payload)


def _positional(value: Any) -> dict[str, Any]:
    if _is_sequence(value):
        return {str(index): item for index, item in enumerate(value)}
    return {"0": value}


def _wrap_object(value: Any, ref: TypeRef | None) -> Any:
    if isinstance(value, (Bean, SimpleNamespace)):
        return value
    payload = value if isinstance(value, Mapping) else _positional(value)
    if ref is None:
        with _nested_construction():
            return Bean(payload, include_version=False)
    return _build(ref, payload)


def _to_text(value: Any, spec: AttributeSpec) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _to_lower(value: Any, spec: AttributeSpec) -> str:
    return _to_text(value, spec).lower()


def _to_upper(value: Any, spec: AttributeSpec) -> str:
    return _to_text(value, spec).upper()


def _to_int(value: Any, spec: AttributeSpec) -> int:
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return int(float(text))
    return int(value)


def _to_float(value: Any, spec: AttributeSpec) -> float:
    return float(value)


def _to_bool(value: Any, spec: AttributeSpec) -> bool:
    return bool(value)


def _yes_no(value: Any, spec: AttributeSpec) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).upper() in YES_VALUES


def _two_decimals(value: Any, spec: AttributeSpec) -> str:
    return f"{float(value):.2f}"


def _time_hhmm(value: Any, spec: AttributeSpec) -> str:
    return _to_text(value, spec)[:5]


def _to_utc_datetime(value: Any, spec: AttributeSpec) -> datetime | None:
    if not value or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        text = value.isoformat() if isinstance(value, date) else str(value).strip()
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _join_array(value: Any, spec: AttributeSpec) -> Any:
    if _is_sequence(value):
        return ARRAY_SEPARATOR.join("" if item is None else str(item) for item in value)
    return value


def _array_array(value: Any, spec: AttributeSpec) -> Any:
    return value if _is_sequence(value) else []


def _object(value: Any, spec: AttributeSpec) -> Any:
    return _wrap_object(value, spec.ref)


def _array_object(value: Any, spec: AttributeSpec) -> Any:
    if not _is_sequence(value):
        return value
    return [_wrap_object(item, spec.ref) for item in value]


def _class(value: Any, spec: AttributeSpec) -> Any:
    # coerce_attribute rejects a missing ref before dispatching here.
    return _build(cast(TypeRef, spec.ref), value)


def _collection(value: Any, spec: AttributeSpec) -> BeanCollection:
    if isinstance(value, BeanCollection):
        return value
    if spec.ref is None:
        return BeanCollection(value if _is_sequence(value) else [value])
    if _is_sequence(value):
        return BeanCollection(_build(spec.ref, item) for item in value)
    if isinstance(value, Mapping):
        return BeanCollection([_build(spec.ref, value)])
    return BeanCollection([value])


def _passthrough(value: Any, spec: AttributeSpec) -> Any:
    return value


_HANDLERS: dict[str, Handler] = {
    "string": _to_text,
    "lowercase": _to_lower,
    "string_lowercase": _to_lower,
    "uppercase": _to_upper,
    "string_uppercase": _to_upper,
    "int": _to_int,
    "int_timestamp": _to_int,
    "float": _to_float,
    "money": _to_float,
    "bool": _to_bool,
    "boolean": _to_bool,
    "yes_no_as_boolean": _yes_no,
    "string_percent": _two_decimals,
    "string_currency": _two_decimals,
    "string_time24_hhmm": _time_hhmm,
    "date": _to_text,
    "date_iso8601": _to_text,
    "date_iso8601_carbon_utc": _to_utc_datetime,
    "array": _join_array,
    "array_array": _array_array,
    "object": _object,
    "array_object": _array_object,
    "class": _class,
    "collection": _collection,
}


def _describe(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, default=str)
        except ValueError:
            return repr(value)
    return repr(value)


def coerce_attribute(key: str, value: Any, spec: AttributeSpec | None = None, *, owner: str = "Bean") -> Any:
    """Convert ``value`` into the representation ``spec`` declares for ``key``.

    A ``None`` value short-circuits: it is rejected for mandatory attributes
    and returned unchanged otherwise.  Failures raised by nested construction
    are re-raised as :class:`SchemaViolation`.  A violation that already names
    its attribute propagates unchanged; one without a key is re-raised under
    ``{owner}.'{key}'`` with its code kept.
    """
    spec = spec or _PASSTHROUGH

    if value is None:
        if spec.mandatory:
            raise SchemaViolation(
                f"Invalid mandatory attribute '{key}' for {owner}: null value set",
                code=ERROR_CODE_MANDATORY_NULL,
                key=key,
                bean=owner,
            )
        return None

    if spec.type_tag == "class" and spec.ref is None:
        raise SchemaViolation(
            f"Null class reference provided for key '{key}' in {owner}",
            code=ERROR_CODE_MISSING_REFERENCE,
            key=key,
            bean=owner,
        )

    handler = _HANDLERS.get(spec.type_tag, _passthrough)
    try:
        return handler(value, spec)
    except SchemaViolation as exc:
        if exc.key is not None:
            raise
        raise SchemaViolation(
            f"{owner}.'{key}': {exc.message}",
            code=exc.code,
            key=key,
            bean=owner,
        ) from exc
    except Exception as exc:
        raise SchemaViolation(
            f"{owner} raised '{exc}' for key '{key}'. Value: {_describe(value)}",
            key=key,
            bean=owner,
        ) from exc


__all__ = ["coerce_attribute"]
