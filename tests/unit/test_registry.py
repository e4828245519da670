from __future__ import annotations

from collections.abc import Iterator

import pytest

from beanmap.core.bean import Bean
from beanmap.core.errors import ERROR_CODE_UNKNOWN_TYPE, SchemaViolation
from beanmap.core.registry import register_bean, registered_types, resolve_factory, unregister_bean


@pytest.fixture
def cleanup() -> Iterator[list[str]]:
    names: list[str] = []
    yield names
    for name in names:
        unregister_bean(name)


def test_register_bean_uses_class_name_by_default(cleanup: list[str]) -> None:
    @register_bean()
    class RegistryDefaultName(Bean):
        pass

    cleanup.append("RegistryDefaultName")
    assert resolve_factory("RegistryDefaultName") is RegistryDefaultName
    assert registered_types()["RegistryDefaultName"] is RegistryDefaultName


def test_register_bean_accepts_plain_build_functions(cleanup: list[str]) -> None:
    @register_bean("registry-upper")
    def build(payload: object) -> str:
        return str(payload).upper()

    cleanup.append("registry-upper")
    assert resolve_factory("registry-upper")("abc") == "ABC"


def test_register_bean_rejects_duplicates_unless_replacing(cleanup: list[str]) -> None:
    class First(Bean):
        pass

    class Second(Bean):
        pass

    register_bean("registry-dup")(First)
    cleanup.append("registry-dup")
    register_bean("registry-dup")(First)

    with pytest.raises(ValueError, match="already registered"):
        register_bean("registry-dup")(Second)

    register_bean("registry-dup", replace=True)(Second)
    assert resolve_factory("registry-dup") is Second


def test_unregister_bean_is_idempotent() -> None:
    register_bean("registry-gone")(Bean)
    unregister_bean("registry-gone")
    unregister_bean("registry-gone")
    assert "registry-gone" not in registered_types()


def test_resolve_factory_rejects_unknown_names_and_non_callables() -> None:
    with pytest.raises(SchemaViolation, match="Unknown bean type 'registry-missing'") as excinfo:
        resolve_factory("registry-missing")
    assert excinfo.value.code == ERROR_CODE_UNKNOWN_TYPE

    with pytest.raises(SchemaViolation, match="not callable"):
        resolve_factory(42)  # type: ignore[arg-type]


def test_resolve_factory_passes_callables_through() -> None:
    assert resolve_factory(Bean) is Bean
