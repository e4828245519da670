from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from types import SimpleNamespace
from typing import Any


def _normalize_float(value: float) -> float | str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def to_plain(value: Any) -> Any:
    """Reduce a bean graph to mappings, lists and JSON scalars.

    Beans are mappings, so nested beans fall out of the mapping branch with
    their attribute order preserved.
    """
    if isinstance(value, Mapping):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, SimpleNamespace):
        return {str(key): to_plain(item) for key, item in vars(value).items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [to_plain(item) for item in value]
    if isinstance(value, float):
        return _normalize_float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if value is None or isinstance(value, (str, int, bool)):
        return value
    return str(value)


def dumps(value: Any, *, indent: int | None = None) -> str:
    return json.dumps(to_plain(value), indent=indent)


def canonical_dumps(value: Any) -> str:
    return json.dumps(to_plain(value), sort_keys=True, separators=(",", ":"), ensure_ascii=True)


__all__ = ["canonical_dumps", "dumps", "to_plain"]
