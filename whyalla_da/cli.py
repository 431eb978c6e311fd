"""Command-line interface for the Whyalla development application scraper."""

from __future__ import annotations

import json
from contextlib import closing
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer

from .parser import Layout
from .runtime import build_runtime

app = typer.Typer(add_completion=False, help="Whyalla development application scraper")


@app.command("run")
def run_command() -> None:
    """Scrape the development register and store new applications."""
    runtime = build_runtime()
    with closing(runtime):
        inserted = runtime.loader.run()
        typer.echo(f"Complete, {inserted} application(s) inserted")


@app.command("parse")
def parse_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local PDF file"),
    url: Optional[str] = typer.Option(None, "--url", help="Information URL recorded for each application"),
    layout: Optional[Layout] = typer.Option(None, "--layout", help="Document layout"),
    store: bool = typer.Option(False, "--store", help="Also insert the applications into the database"),
) -> None:
    """Parse a local PDF and print one JSON object per application."""
    runtime = build_runtime()
    with closing(runtime):
        applications = runtime.loader.parse_file(path, url, layout)
        for application in applications:
            typer.echo(json.dumps(asdict(application), ensure_ascii=False))
        if store:
            runtime.database.ensure_schema()
            inserted = runtime.loader.store(applications)
            typer.echo(f"{inserted} application(s) inserted", err=True)


@app.command("query")
def query_command(
    reference: str = typer.Argument(..., help="Council reference, e.g. 123/456"),
) -> None:
    runtime = build_runtime()
    with closing(runtime):
        runtime.database.ensure_schema()
        row = runtime.database.fetch_application(reference)
        if not row:
            raise typer.Exit(code=1)
        typer.echo(json.dumps(row, ensure_ascii=False))


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
