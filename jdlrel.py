#!/usr/bin/env python3
"""
jdlrel CLI - Command-line interface for checking schema relationships.
"""

import json
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from jdl_relations.adapters import JsonSchemaAdapter
from jdl_relations.core import Relationship, RelationshipError, RelationshipType
from jdl_relations.stores import RelationshipStore

app = typer.Typer(help="jdlrel - Relationship checks for JDL-style schemas")
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; --verbose shows debug output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def validate(
    data_path: str = typer.Option("schema.json", "--data", "-d", help="Path to schema JSON file"),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as failures"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Validate every relationship of a schema and report duplicates."""
    configure_logging(verbose)
    relationships = load_relationships(data_path)

    store = RelationshipStore()
    table = Table(title="Relationships", show_header=True)
    table.add_column("Identity", style="magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Status", style="white")

    failures = 0
    warnings: list[str] = []
    for relationship in relationships:
        emitted: list[str] = []
        try:
            store.add(relationship, diagnostics=emitted.append)
        except RelationshipError as e:
            failures += 1
            table.add_row(relationship.identity(), relationship.type.value, f"[red]✗ {escape(str(e))}[/red]")
            continue

        if emitted:
            warnings.extend(emitted)
            table.add_row(relationship.identity(), relationship.type.value, f"[yellow]! {escape(emitted[0])}[/yellow]")
        else:
            table.add_row(relationship.identity(), relationship.type.value, "[green]✓[/green]")

    console.print(table)

    if failures or (strict and warnings):
        console.print(f"[red]{failures} invalid, {len(warnings)} warning(s)[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] {store.size()} relationships valid, {len(warnings)} warning(s)")


@app.command()
def render(
    data_path: str = typer.Option("schema.json", "--data", "-d", help="Path to schema JSON file"),
):
    """Print the canonical schema text of every relationship."""
    configure_logging(False)
    for relationship in load_relationships(data_path):
        console.print(relationship.render(), markup=False, highlight=False)


@app.command()
def info(
    data_path: str = typer.Option("schema.json", "--data", "-d", help="Path to schema JSON file"),
):
    """Show information about the relationships of a schema."""
    configure_logging(False)
    relationships = load_relationships(data_path)

    types = {kind: 0 for kind in RelationshipType}
    entities = set()
    for relationship in relationships:
        types[relationship.type] += 1
        entities.add(relationship.from_entity.name)
        entities.add(relationship.to_entity.name)

    table = Table(title="Schema Information", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Data Source", data_path)
    table.add_row("Total Relationships", str(len(relationships)))
    table.add_row("Related Entities", str(len(entities)))
    for kind, count in types.items():
        table.add_row(kind.value, str(count))

    console.print(table)


def load_relationships(data_path: str) -> list[Relationship]:
    """Load relationships from a schema file, exiting on construction errors."""
    try:
        adapter = JsonSchemaAdapter(data_path=data_path)
        return adapter.load_relationships()
    except FileNotFoundError:
        console.print(f"[red]Error: {data_path} does not exist[/red]")
        raise typer.Exit(code=1)
    except (RelationshipError, json.JSONDecodeError, ValidationError) as e:
        # pydantic messages carry [brackets] that rich would read as markup
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
