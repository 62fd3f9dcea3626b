"""CLI for entitystore."""

import logging
import sys
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import default_store_root, load_store_config
from .errors import EntityStoreError
from .storage import DiskEntityStore, EntityStore, make_entity_store, make_entity_store_from_config
from .utils import humanize_size

app = typer.Typer(help="""\
Inspect and maintain a content-addressed entity store: the body store
of an HTTP cache. Bodies are addressed by the SHA-1 digest of their
content.""")

console = Console()
err_console = Console(stderr=True)


class _State:
    store_uri: Optional[str] = None
    config_path: Optional[Path] = None


state = _State()


@app.callback()
def main(
    store: Optional[str] = typer.Option(
        None, "--store", "-s", help="Store URI, e.g. file:/var/cache/entities"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Select the store all commands operate on."""
    state.store_uri = store
    state.config_path = config
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def require_store() -> EntityStore:
    """Build the selected store.

    Precedence: --store, then ENTITYSTORE_URI / config file, then an on-disk
    store in the user cache directory.

    Raises:
        typer.Exit: If the store cannot be configured
    """
    try:
        if state.store_uri:
            return make_entity_store(state.store_uri)
        config = load_store_config(state.config_path)
        if "uri" not in config.model_fields_set:
            return DiskEntityStore(default_store_root())
        return make_entity_store_from_config(config)
    except (EntityStoreError, ImportError) as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)


def require_disk_store() -> DiskEntityStore:
    store = require_store()
    if not isinstance(store, DiskEntityStore):
        err_console.print(f"[red]✗[/red] {type(store).__name__} is not an on-disk store")
        raise typer.Exit(1)
    return store


def _read_chunks(source: Path) -> Iterator[bytes]:
    if str(source) == "-":
        stream = sys.stdin.buffer
        yield from iter(lambda: stream.read(8192), b"")
        return
    with source.open("rb") as f:
        yield from iter(lambda: f.read(8192), b"")


@app.command()
def write(
    source: Path = typer.Argument(..., help="File to store, or - for stdin"),
):
    """Store a body and print its digest."""
    store = require_store()
    if str(source) != "-" and not source.is_file():
        err_console.print(f"[red]✗[/red] File not found: {source}")
        raise typer.Exit(1)
    try:
        digest, size = store.write(_read_chunks(source))
    except OSError as e:
        err_console.print(f"[red]✗[/red] Write failed: {e}")
        raise typer.Exit(1)
    console.print(f"{digest} [dim]({humanize_size(size)})[/dim]", highlight=False)


@app.command()
def read(digest: str = typer.Argument(..., help="Entity digest")):
    """Write an entity's content to stdout."""
    store = require_store()
    body = store.open(digest)
    if body is None:
        err_console.print(f"[red]✗[/red] No entity {digest}")
        raise typer.Exit(1)
    for chunk in body:
        typer.echo(chunk, nl=False)


@app.command()
def exist(digest: str = typer.Argument(..., help="Entity digest")):
    """Exit 0 if an entity exists, 1 otherwise."""
    store = require_store()
    if store.exist(digest):
        console.print(f"[green]✓[/green] {digest}", highlight=False)
        return
    console.print(f"[yellow]-[/yellow] {digest} not found", highlight=False)
    raise typer.Exit(1)


@app.command()
def purge(digest: str = typer.Argument(..., help="Entity digest")):
    """Remove an entity. Purging a missing entity succeeds."""
    store = require_store()
    try:
        store.purge(digest)
    except EntityStoreError as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Purged {digest}", highlight=False)


@app.command()
def path(digest: str = typer.Argument(..., help="Entity digest")):
    """Print the on-disk path of an entity."""
    store = require_disk_store()
    if not store.exist(digest):
        err_console.print(f"[red]✗[/red] No entity {digest}")
        raise typer.Exit(1)
    typer.echo(str(store.path_for(digest)))


@app.command()
def cleanup(
    max_age_hours: float = typer.Option(
        1.0, "--max-age-hours", help="Only remove temp files older than this"
    ),
):
    """Remove temp files left by interrupted writes to an on-disk store."""
    store = require_disk_store()
    removed = store.cleanup_temp_files(max_age_hours)
    console.print(f"[green]✓[/green] Removed {removed} stale temp files", highlight=False)


@app.command(name="list")
def list_entities():
    """List entities in an on-disk store."""
    store = require_disk_store()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Digest")
    table.add_column("Size", justify="right")

    count = 0
    total = 0
    for digest in store.iter_digests():
        size = store.path_for(digest).stat().st_size
        table.add_row(digest, humanize_size(size))
        count += 1
        total += size

    if not count:
        console.print(f"[dim]No entities in {store.root}[/dim]")
        return
    console.print(table)
    console.print(f"[dim]{count} entities, {humanize_size(total)}[/dim]")


if __name__ == "__main__":
    app()
