from __future__ import annotations

from beanmap.core.errors import (
    ERROR_CODE_COERCION_FAILED,
    ERROR_CODE_MANDATORY_NULL,
    VALID_ERROR_CODES,
    SchemaViolation,
)


def test_error_codes_are_stable() -> None:
    assert ERROR_CODE_MANDATORY_NULL == "MANDATORY_NULL"
    assert ERROR_CODE_COERCION_FAILED == "COERCION_FAILED"
    assert len(VALID_ERROR_CODES) == 9


def test_schema_violation_is_a_value_error() -> None:
    error = SchemaViolation("boom")
    assert isinstance(error, ValueError)
    assert str(error) == "boom"
    assert error.code == ERROR_CODE_COERCION_FAILED


def test_schema_violation_to_dict_includes_known_context() -> None:
    error = SchemaViolation("Invalid data", code=ERROR_CODE_MANDATORY_NULL, key="id", bean="Store")

    assert error.to_dict() == {
        "code": "MANDATORY_NULL",
        "message": "Invalid data",
        "key": "id",
        "bean": "Store",
    }


def test_schema_violation_to_dict_omits_unknown_context() -> None:
    assert SchemaViolation("boom").to_dict() == {"code": "COERCION_FAILED", "message": "boom"}
