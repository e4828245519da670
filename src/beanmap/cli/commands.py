from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
import yaml

from beanmap.constants import EXIT_INTERNAL_ERROR, EXIT_INVALID, EXIT_SUCCESS
from beanmap.core.canonical import canonical_dumps
from beanmap.core.errors import SchemaViolation
from beanmap.core.validated import ValidatedBean
from beanmap.loader import load_bean_types
from beanmap.traces import format_exception_trace

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        from beanmap import __version__

        typer.echo(f"beanmap {__version__}")
        raise typer.Exit()


app = typer.Typer(add_completion=False, help="Map and validate untyped payloads against bean schemas")


@app.callback(invoke_without_command=True)
def _main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _fail(message: str, exc: BaseException, exit_code: int) -> typer.Exit:
    typer.echo(message, err=True)
    logger.debug("%s", format_exception_trace(exc))
    return typer.Exit(exit_code)


def _load_types(schema_file: Path) -> dict[str, type[ValidatedBean]]:
    try:
        return load_bean_types(schema_file)
    except (OSError, yaml.YAMLError, SchemaViolation) as exc:
        raise _fail(f"ERROR: cannot load schema {schema_file}: {exc}", exc, EXIT_INTERNAL_ERROR) from exc


def _read_payload(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    loaded = yaml.safe_load(text) if path.suffix.lower() in {".yaml", ".yml"} else json.loads(text)
    if not isinstance(loaded, dict):
        raise ValueError(f"Payload must be an object: {path}")
    return loaded


@app.command()
def check(
    schema_file: Path = typer.Argument(..., help="YAML file declaring bean types"),
    payload_file: Path = typer.Argument(..., help="JSON or YAML payload to map"),
    type_name: str = typer.Option(..., "--type", "-t", help="Bean type to build from the payload"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON output."),
    canonical: bool = typer.Option(False, "--canonical", help="Emit sorted, compact JSON."),
) -> None:
    """Build a bean from a payload and print its serialized form."""
    types = _load_types(schema_file)
    bean_type = types.get(type_name)
    if bean_type is None:
        known = ", ".join(types)
        typer.echo(f"ERROR: unknown type '{type_name}'. Declared types: {known}", err=True)
        raise typer.Exit(EXIT_INTERNAL_ERROR)

    try:
        payload = _read_payload(payload_file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise _fail(f"ERROR: cannot read payload {payload_file}: {exc}", exc, EXIT_INTERNAL_ERROR) from exc

    try:
        bean = bean_type(payload)
    except SchemaViolation as exc:
        raise _fail(f"INVALID: {exc}", exc, EXIT_INVALID) from exc

    logger.debug("Built %s with %d attributes", type_name, len(bean))
    typer.echo(canonical_dumps(bean) if canonical else bean.to_json(indent=2 if pretty else None))
    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def describe(schema_file: Path = typer.Argument(..., help="YAML file declaring bean types")) -> None:
    """List declared bean types and their attributes."""
    types = _load_types(schema_file)
    for type_name, bean_type in types.items():
        schema = bean_type.attribute_schema
        flags = "strict" if bean_type.strict_assignment else "lenient"
        typer.echo(f"{type_name} ({flags}, version field: {bean_type.version_field or '-'})")
        for name, spec in schema.items():
            details = spec.to_dict()
            parts = [f"type={details['type']}"]
            if spec.mandatory:
                parts.append("mandatory")
            if "min_count" in details:
                parts.append(f"min_count={details['min_count']}")
            if "class" in details:
                parts.append(f"class={details['class']}")
            if name in schema.defaults:
                parts.append(f"default={json.dumps(schema.defaults[name], default=str)}")
            typer.echo(f"  {name}: {' '.join(parts)}")
    raise typer.Exit(EXIT_SUCCESS)


def main() -> None:
    app()


__all__ = ["app", "main"]
