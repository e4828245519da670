from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from beanmap.bag import ParameterBag
from beanmap.constants import BEAN_VERSION, VERSION_FIELD
from beanmap.core.errors import ERROR_CODE_INVALID_SCHEMA, SchemaViolation
from beanmap.core.registry import register_bean
from beanmap.core.schema import parse_schema
from beanmap.core.validated import ValidatedBean

logger = logging.getLogger(__name__)

_TYPE_KEYS = {"attributes", "defaults", "strict", "auto_validate", "version_field", "version"}


def _invalid(message: str, *, type_name: str | None = None) -> SchemaViolation:
    return SchemaViolation(message, code=ERROR_CODE_INVALID_SCHEMA, bean=type_name)


def _load_yaml(path: Path) -> dict[str, Any]:
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise _invalid(f"Schema file must be a mapping: {path}")
    return loaded


def _ensure_mapping(raw: Any, *, field_name: str, type_name: str) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise _invalid(f"{type_name}.{field_name} must be a mapping", type_name=type_name)
    return raw


def _resolve_local_refs(
    attributes: Mapping[str, Any],
    local: Mapping[str, type[ValidatedBean]],
) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for name, details in attributes.items():
        if isinstance(details, Mapping):
            ref = details.get("class", details.get("ref"))
            if isinstance(ref, str) and ref in local:
                details = {key: value for key, value in details.items() if key not in ("class", "ref")}
                details["class"] = local[ref]
        resolved[str(name)] = details
    return resolved


def _new_type(type_name: str, block: ParameterBag) -> type[ValidatedBean]:
    version_field = block.get("version_field", VERSION_FIELD)
    if version_field is not None and not isinstance(version_field, str):
        raise _invalid(f"{type_name}.version_field must be a string or null", type_name=type_name)
    bean_version = block.get("version")
    namespace: dict[str, Any] = {
        "__slots__": (),
        "__module__": __name__,
        "__qualname__": type_name,
        "strict_assignment": block.get_boolean("strict", True),
        "auto_validate": block.get_boolean("auto_validate", True),
        "version_field": version_field or None,
        "bean_version": BEAN_VERSION if bean_version is None else str(bean_version),
    }
    return type(type_name, (ValidatedBean,), namespace)


def build_bean_types(
    data: Mapping[str, Any],
    *,
    source: str = "<memory>",
    register: bool = True,
) -> dict[str, type[ValidatedBean]]:
    """Create one :class:`ValidatedBean` subclass per entry of ``data["types"]``.

    ``class`` references naming another type of the same document bind to
    that type directly; any other name is left for the registry to resolve.
    """
    types_raw = data.get("types")
    if not isinstance(types_raw, Mapping) or not types_raw:
        raise _invalid(f"{source}: schema document requires a non-empty `types` mapping")

    blocks: dict[str, ParameterBag] = {}
    for raw_name, raw_block in types_raw.items():
        type_name = str(raw_name)
        if not isinstance(raw_block, Mapping):
            raise _invalid(f"{source}: type {type_name} must be a mapping", type_name=type_name)
        unknown = sorted(str(key) for key in raw_block if key not in _TYPE_KEYS)
        if unknown:
            raise _invalid(
                f"{source}: type {type_name} has unsupported keys: {', '.join(unknown)}",
                type_name=type_name,
            )
        blocks[type_name] = ParameterBag.value_of(raw_block)

    # Classes first so self and forward references can bind to them.
    created = {type_name: _new_type(type_name, block) for type_name, block in blocks.items()}

    for type_name, block in blocks.items():
        attributes = _ensure_mapping(block.get("attributes"), field_name="attributes", type_name=type_name)
        defaults = _ensure_mapping(block.get("defaults"), field_name="defaults", type_name=type_name)
        try:
            schema = parse_schema(_resolve_local_refs(attributes, created), defaults)
        except SchemaViolation as exc:
            exc.bean = exc.bean or type_name
            raise
        created[type_name].attribute_schema = schema
        logger.debug("Built bean type %s with %d attributes from %s", type_name, len(schema), source)

    if register:
        for type_name, bean_type in created.items():
            register_bean(type_name, replace=True)(bean_type)
    return created


def load_bean_types(path: Path, *, register: bool = True) -> dict[str, type[ValidatedBean]]:
    logger.debug("Loading bean types from %s", path)
    return build_bean_types(_load_yaml(path), source=str(path), register=register)


__all__ = ["build_bean_types", "load_bean_types"]
