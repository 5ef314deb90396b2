"""Command-line interface for hepref."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import httpx
import structlog
import typer
from rich.console import Console
from rich.table import Table

from hepref.errors import InvalidReference, ResolutionError
from hepref.logconfig import configure_logging
from hepref.models import ResourceReference
from hepref.services import (
    RecordCache,
    ReferenceResolver,
    expected_record_location,
    expected_resource_location,
    layout_for,
    record_endpoint,
)
from hepref.settings import Settings, get_settings

console = Console()
app = typer.Typer(help="hepref – HEPData reference resolver")
logger = structlog.get_logger(__name__)

_state: dict[str, bool] = {"verbose": False}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug events to stderr"),
) -> None:
    _state["verbose"] = verbose


def _load_settings(cache_root: Optional[Path]) -> Settings:
    settings = Settings.load()
    configure_logging("DEBUG" if _state["verbose"] else settings.log_level)
    if cache_root is not None:
        settings = settings.model_copy(update={"cache_root": cache_root.expanduser()})
    settings.ensure_directories()
    return settings


def _parse_reference(text: str) -> ResourceReference:
    try:
        return ResourceReference.parse(text)
    except (InvalidReference, ResolutionError) as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def resolve(
    reference: str = typer.Argument(..., help="Reference, e.g. hepdata:12345:v1/Table 1"),
    cache_root: Optional[Path] = typer.Option(None, help="Override the cache root"),
    json_output: bool = typer.Option(False, "--json", help="Output the result as JSON"),
) -> None:
    """Resolve a reference to a local file, downloading the record if needed."""
    settings = _load_settings(cache_root)
    ref = _parse_reference(reference)
    try:
        with httpx.Client(timeout=settings.timeout, follow_redirects=True) as client:
            path = ReferenceResolver(client, settings).resolve(ref, settings.cache_root)
    except ResolutionError as exc:
        logger.error("resolve.failed", ref=str(ref), error=str(exc))
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if json_output:
        typer.echo(json.dumps({"reference": str(ref), "path": str(path)}))
        return
    typer.echo(str(path))


@app.command()
def locate(
    reference: str = typer.Argument(..., help="Reference to inspect"),
    cache_root: Optional[Path] = typer.Option(None, help="Override the cache root"),
) -> None:
    """Show where a reference would live in the cache, without any network."""
    settings = _load_settings(cache_root)
    ref = _parse_reference(reference)
    entry = RecordCache(settings.cache_root).entry(ref)
    table = Table(title=str(ref))
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    table.add_row("Record directory", str(expected_record_location(ref, settings.cache_root)))
    table.add_row("Resource", str(expected_resource_location(ref, settings.cache_root)))
    table.add_row("Endpoint", record_endpoint(ref, settings.base_url))
    table.add_row("Cache state", entry.state.value)
    table.add_row("Hit", str(entry.hit_path) if entry.hit_path else "-")
    if layout_for(ref).versioned and not ref.is_versioned:
        table.add_row("Note", "unversioned; resolve will look up the latest version")
    console.print(table)


@app.command()
def cached(
    cache_root: Optional[Path] = typer.Option(None, help="Override the cache root"),
) -> None:
    """List records already unpacked in the cache."""
    settings = _load_settings(cache_root)
    records = list(RecordCache(settings.cache_root).records())
    if not records:
        console.print("[yellow]No cached records found.")
        return
    table = Table(title=f"Cached records ({settings.cache_root})")
    table.add_column("Source")
    table.add_column("Record")
    table.add_column("Version")
    table.add_column("Path", overflow="fold")
    for record in records:
        table.add_row(
            record.reftype.value,
            record.recordid,
            str(record.recordvers) if record.recordvers else "-",
            str(record.path),
        )
    console.print(table)


@app.command()
def config(
    json_output: bool = typer.Option(False, "--json", help="Output settings as JSON"),
) -> None:
    """Display the resolved settings."""
    settings = get_settings()
    if json_output:
        typer.echo(settings.model_dump_json(indent=2))
        return
    table = Table(title="hepref Settings")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def doctor() -> None:
    """Environment checks (Python, deps, cache root)."""
    checks: list[tuple[str, bool, str]] = []
    checks.append(("python>=3.10", sys.version_info >= (3, 10), sys.version))
    for mod in ("httpx", "pydantic", "structlog"):
        try:
            module = __import__(mod)
            ver = getattr(module, "__version__", "unknown")
            checks.append((f"{mod} import", True, ver))
        except ImportError as exc:  # pragma: no cover
            checks.append((f"{mod} import", False, str(exc)))
    settings = get_settings()
    cache_root = settings.cache_root
    try:
        probe = cache_root / ".hepref_doctor"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
        checks.append(("cache_root writable", True, str(cache_root)))
    except OSError as exc:  # pragma: no cover
        checks.append(("cache_root writable", False, str(exc)))

    passed = True
    for name, ok, note in checks:
        status = "[green]OK[/green]" if ok else "[red]FAIL[/red]"
        console.print(f"{status} {name} ({note})")
        passed = passed and ok
    if not passed:
        raise typer.Exit(code=1)
    console.print("[green]Doctor checks passed.[/green]")


if __name__ == "__main__":  # pragma: no cover
    app()
