# health_reporter/cli.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import structlog
from dotenv import load_dotenv

from .config import get_settings
from .envelope import dehydrate, harmonize, load_record
from .errors import HealthKitError
from .identifiers import Kind, identifiers_for
from .units import Dimension, Unit

load_dotenv()

app = typer.Typer(no_args_is_help=True, help="health-reporter CLI")
log = structlog.get_logger()


# ---------- helpers ----------

def _read_records(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"{path} is not valid JSON: {e}")
    return data if isinstance(data, list) else [data]


def _check_one(data: Any, kind: Optional[str]) -> None:
    record = load_record(data, kind)
    again = harmonize(dehydrate(record))
    if again.to_dict() != record.to_dict():
        raise HealthKitError("record changed after dehydrate + harmonize")


# ---------- commands ----------

@app.command("diag")
def diag() -> None:
    """Show the effective settings."""
    settings = get_settings()
    typer.echo(f"TIMEZONE: {settings.TIMEZONE}")
    typer.echo(f"WORKOUT_EVENT_POLICY: {settings.WORKOUT_EVENT_POLICY}")


@app.command("kinds")
def kinds() -> None:
    """List record kinds and the identifiers each accepts."""
    for kind in Kind:
        ids = identifiers_for(kind)
        typer.echo(f"{kind.value}: {len(ids)} identifier(s)")
        for identifier in ids:
            typer.echo(f"  {identifier}")


@app.command("units")
def units() -> None:
    """List supported unit strings per dimension."""
    for dimension in Dimension:
        symbols = [u.symbol for u in Unit if u.dimension is dimension]
        typer.echo(f"{dimension.value}: {', '.join(symbols)}")


@app.command()
def check(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON record or list of records"),
    kind: Optional[str] = typer.Option(
        None,
        help="Kind key for every record, e.g. statistics; default: resolved from identifier",
    ),
) -> None:
    """Dehydrate and re-harmonize portable records, reporting each one."""
    if kind is not None:
        try:
            kind = Kind.make(kind).value
        except HealthKitError as e:
            raise typer.BadParameter(e.message)
    failures = 0
    for index, data in enumerate(_read_records(path)):
        try:
            _check_one(data, kind)
        except HealthKitError as e:
            failures += 1
            log.error("check_failed", index=index, error=e.message, field=e.field)
            typer.echo(f"[ERR] #{index}: {type(e).__name__}: {e.message}")
            continue
        typer.echo(f"[OK] #{index}")
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
