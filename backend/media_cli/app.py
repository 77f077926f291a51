"""Command line interface for the Mediashelf API."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from backend.media_core import ConfigurationError, load_catalog

from .client import create_client


DEFAULT_API_BASE = "http://localhost:8000"

app = typer.Typer(help="Browse the Mediashelf catalog through the API service.")
catalog_app = typer.Typer(help="List catalog items and category rows.")
app.add_typer(catalog_app, name="catalog")


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the Mediashelf API service.",
        show_default=True,
        envvar="MEDIASHELF_API_BASE",
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def health(api_base: str = _api_base_option()) -> None:
    """Call the /health endpoint and pretty-print the response."""

    with create_client(api_base) as client:
        response = client.get("/health")
        response.raise_for_status()
        _echo_json(response.json())


@catalog_app.command("list")
def list_catalog(
    category: Optional[str] = typer.Option(None, help="Only list items in this category."),
    api_base: str = _api_base_option(),
) -> None:
    """Display catalog items in configured order."""

    params: dict[str, str] = {}
    if category is not None:
        params["category"] = category

    with create_client(api_base) as client:
        response = client.get("/catalog", params=params)
        response.raise_for_status()
        _echo_json(response.json())


@catalog_app.command("categories")
def list_categories(api_base: str = _api_base_option()) -> None:
    """Display one row per category with its items."""

    with create_client(api_base) as client:
        response = client.get("/catalog/categories")
        response.raise_for_status()
        _echo_json(response.json())


@app.command()
def search(
    query: str = typer.Argument("", help="Title fragment to match; empty lists everything."),
    category: Optional[str] = typer.Option(None, help="Restrict matching to one category."),
    api_base: str = _api_base_option(),
) -> None:
    """Search catalog titles without regard to case."""

    params: dict[str, str] = {"q": query}
    if category is not None:
        params["category"] = category

    with create_client(api_base) as client:
        response = client.get("/search", params=params)
        response.raise_for_status()
        _echo_json(response.json())


@app.command()
def show(
    item_id: str = typer.Argument(..., help="Catalog item identifier."),
    api_base: str = _api_base_option(),
) -> None:
    """Show a single catalog item."""

    with create_client(api_base) as client:
        response = client.get(f"/catalog/{item_id}")
        if response.status_code == 404:
            typer.echo(f"Content '{item_id}' not found.", err=True)
            raise typer.Exit(code=1)
        response.raise_for_status()
        _echo_json(response.json())


@app.command()
def validate(
    path: Path = typer.Argument(..., help="Catalog JSON file to check."),
) -> None:
    """Load a catalog file locally and report whether it is consistent."""

    try:
        store = load_catalog(path)
    except ConfigurationError as exc:
        typer.echo(f"Invalid catalog: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _echo_json(
        {
            "path": str(path),
            "items": len(store),
            "categories": {name: len(store.by_category(name)) for name in store.categories},
        }
    )
