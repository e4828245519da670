from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from beanmap.core.bean import Bean
from beanmap.core.canonical import canonical_dumps, dumps, to_plain
from beanmap.core.collection import BeanCollection


def test_to_plain_reduces_bean_graphs() -> None:
    inner = Bean({"x": 1}, include_version=False)
    value = {
        "bean": inner,
        "items": BeanCollection([inner, None]),
        "when": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "price": Decimal("1.50"),
        "record": SimpleNamespace(a=1),
        "raw": b"bytes",
        "nan": float("nan"),
        "tuple": (1, 2),
    }

    assert to_plain(value) == {
        "bean": {"x": 1},
        "items": [{"x": 1}, None],
        "when": "2024-01-02T03:04:05+00:00",
        "price": "1.50",
        "record": {"a": 1},
        "raw": "bytes",
        "nan": "NaN",
        "tuple": [1, 2],
    }


def test_to_plain_stringifies_unknown_objects() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "opaque"

    assert to_plain([Opaque()]) == ["opaque"]


def test_dumps_matches_standard_encoder() -> None:
    payload = {"b": "ü", "a": [1, 2.5, True, None]}
    assert dumps(payload) == json.dumps(payload)
    assert dumps(payload, indent=2) == json.dumps(payload, indent=2)


def test_canonical_serialization_is_stable() -> None:
    left = {"b": 2, "a": [3, {"z": 0, "y": 1}]}
    right = {"a": [3, {"y": 1, "z": 0}], "b": 2}
    assert canonical_dumps(left) == canonical_dumps(right)
    assert canonical_dumps(left) == '{"a":[3,{"y":1,"z":0}],"b":2}'
