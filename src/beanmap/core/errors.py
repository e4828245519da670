from __future__ import annotations

from typing import Any

ERROR_CODE_UNDECLARED_ATTRIBUTE = "UNDECLARED_ATTRIBUTE"
ERROR_CODE_MANDATORY_MISSING = "MANDATORY_MISSING"
ERROR_CODE_MANDATORY_NULL = "MANDATORY_NULL"
ERROR_CODE_MIN_COUNT = "MIN_COUNT"
ERROR_CODE_MISSING_REFERENCE = "MISSING_REFERENCE"
ERROR_CODE_UNKNOWN_TYPE = "UNKNOWN_TYPE"
ERROR_CODE_COERCION_FAILED = "COERCION_FAILED"
ERROR_CODE_NESTING_TOO_DEEP = "NESTING_TOO_DEEP"
ERROR_CODE_INVALID_SCHEMA = "INVALID_SCHEMA"

VALID_ERROR_CODES = {
    ERROR_CODE_UNDECLARED_ATTRIBUTE,
    ERROR_CODE_MANDATORY_MISSING,
    ERROR_CODE_MANDATORY_NULL,
    ERROR_CODE_MIN_COUNT,
    ERROR_CODE_MISSING_REFERENCE,
    ERROR_CODE_UNKNOWN_TYPE,
    ERROR_CODE_COERCION_FAILED,
    ERROR_CODE_NESTING_TOO_DEEP,
    ERROR_CODE_INVALID_SCHEMA,
}


class SchemaViolation(ValueError):
    """Raised for every validation or coercion failure.

    ``key`` names the offending attribute and ``bean`` the owning type when
    they are known; both also appear in the message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = ERROR_CODE_COERCION_FAILED,
        key: str | None = None,
        bean: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.key = key
        self.bean = bean

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.key is not None:
            payload["key"] = self.key
        if self.bean is not None:
            payload["bean"] = self.bean
        return payload


__all__ = [
    "ERROR_CODE_COERCION_FAILED",
    "ERROR_CODE_INVALID_SCHEMA",
    "ERROR_CODE_MANDATORY_MISSING",
    "ERROR_CODE_MANDATORY_NULL",
    "ERROR_CODE_MIN_COUNT",
    "ERROR_CODE_MISSING_REFERENCE",
    "ERROR_CODE_NESTING_TOO_DEEP",
    "ERROR_CODE_UNDECLARED_ATTRIBUTE",
    "ERROR_CODE_UNKNOWN_TYPE",
    "VALID_ERROR_CODES",
    "SchemaViolation",
]
