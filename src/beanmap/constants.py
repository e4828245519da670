from __future__ import annotations

# Version literal injected into beans that declare a version field.
BEAN_VERSION = "1"
VERSION_FIELD = "version"

ARRAY_SEPARATOR = "|"

# Upper bound on nested bean construction; guards against cyclic payloads.
MAX_NESTING_DEPTH = 64

TYPE_TAG_DEFAULT = "default"

TYPE_TAGS = {
    "string",
    "lowercase",
    "uppercase",
    "string_lowercase",
    "string_uppercase",
    "int",
    "int_timestamp",
    "float",
    "money",
    "bool",
    "boolean",
    "yes_no_as_boolean",
    "string_percent",
    "string_currency",
    "string_time24_hhmm",
    "date",
    "date_iso8601",
    "date_iso8601_carbon_utc",
    "array",
    "array_array",
    "object",
    "array_object",
    "class",
    "collection",
    TYPE_TAG_DEFAULT,
}

# Tags whose values are counted against `min_count`.
COUNTABLE_TYPE_TAGS = {"collection", "array"}

YES_VALUES = {"YES", "Y", "SI", "S"}

EXIT_SUCCESS = 0
EXIT_INVALID = 1
EXIT_INTERNAL_ERROR = 2
