from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from destructure.config import get_global_naming
from destructure.destructuring import destructure
from destructure.exceptions import UsageError
from destructure.fingerprint import fingerprint_hex, fingerprint_keys
from destructure.host import StateCell
from destructure.record_cache import RecordAccessorCache
from destructure.schema import (
    AccessorNamingConfig,
    AccessorPlanEntryDTO,
    AccessorPlanReport,
    FingerprintReport,
)
from destructure.shape import RecordShape, SequenceShape, classify_shape
from destructure.site import AccessorSlot

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _emit(report: FingerprintReport | AccessorPlanReport) -> None:
    typer.echo(json.dumps(report.model_dump(), indent=2, sort_keys=True))


def _load_composite(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON payload: {exc}") from exc


def _resolve_naming(prefix: str | None) -> AccessorNamingConfig:
    if prefix is None:
        return get_global_naming()
    try:
        return AccessorNamingConfig(prefix=prefix)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--prefix") from exc


def build_accessor_plan(
    composite: object,
    *,
    naming: AccessorNamingConfig,
) -> AccessorPlanReport:
    cell = StateCell(composite)
    slot = AccessorSlot()
    match classify_shape(composite):
        case SequenceShape() as shape:
            destructure(slot, composite, cell.set_state, naming=naming)
            return AccessorPlanReport(
                kind=shape.kind.value,
                size=shape.length,
                accessors=[
                    AccessorPlanEntryDTO(position=position, accessor=f"element[{position}]")
                    for position in range(shape.length)
                ],
            )
        case RecordShape() as shape:
            destructure(slot, composite, cell.set_state, naming=naming)
            cache: RecordAccessorCache = slot.cache  # type: ignore[assignment]
            return AccessorPlanReport(
                kind=shape.kind.value,
                size=len(shape.keys),
                fingerprint=fingerprint_hex(fingerprint_keys(shape.keys)),
                accessors=[
                    AccessorPlanEntryDTO(key=entry.key, accessor=entry.accessor_name)
                    for entry in cache.entries.values()
                ],
            )


@app.command("fingerprint")
def fingerprint_command(
    keys: List[str] = typer.Argument(..., help="Field identifiers to fingerprint."),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON report."),
) -> None:
    """Print the order-independent fingerprint of a key set."""
    unique = list(dict.fromkeys(keys))
    value = fingerprint_keys(unique)
    if as_json:
        _emit(FingerprintReport(keys=unique, fingerprint=value, hex=fingerprint_hex(value)))
        return
    typer.echo(fingerprint_hex(value))


@app.command("accessors")
def accessors_command(
    path: Path = typer.Argument(..., help="JSON document holding an array or object."),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Accessor name prefix."),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON report."),
) -> None:
    """Show the accessors derived for a JSON array or object."""
    composite = _load_composite(path)
    naming = _resolve_naming(prefix)
    try:
        report = build_accessor_plan(composite, naming=naming)
    except UsageError as exc:
        details = ", ".join(
            f"{key}={value}" for key, value in exc.context_payload.items()
        )
        message = f"{exc} ({details})" if details else str(exc)
        raise typer.BadParameter(message, param_hint="PATH") from exc
    if as_json:
        _emit(report)
        return
    for entry in report.accessors:
        if entry.key is None:
            typer.echo(f"{entry.position}: {entry.accessor}")
        else:
            typer.echo(f"{entry.key} -> {entry.accessor}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
