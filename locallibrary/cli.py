import os
import subprocess
import sys
import webbrowser
from typing import Optional

import typer
from rich.console import Console

from locallibrary.catalog import Catalog
from locallibrary.config import settings
from locallibrary.populate import populate
from locallibrary.ui_helpers import print_list_result, print_stats_result, set_output_mode

console = Console()

app = typer.Typer(help="Local Library CLI")

# Database file chosen with --db; None means the configured default
_state = {"db_file": None}


def _catalog() -> Catalog:
    return Catalog(db_file=_state["db_file"])


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="SQLite database file (default: LIBRARY_DB_FILE or locallibrary.db)",
    ),
):
    """Global options for every command."""
    if output:
        set_output_mode(output)
    _state["db_file"] = db


@app.command("initdb")
def cli_initdb():
    """Create the catalog tables."""
    catalog = _catalog()
    print(f"Database initialized at {catalog.db_file}")


@app.command("populate")
def cli_populate(force: bool = typer.Option(False, "--force", help="Add the sample records even if the catalog is not empty")):
    """Load sample authors, genres, books and copies."""
    catalog = _catalog()
    if not force and (catalog.count_authors() or catalog.count_books()):
        print("Catalog already contains data; use --force to add the sample records anyway.")
        raise typer.Exit(code=1)
    stats = populate(catalog)
    print("Sample data added.")
    print_stats_result(stats)


@app.command("stats")
def cli_stats():
    """Show record counts."""
    print_stats_result(_catalog().get_statistics())


@app.command("list")
def cli_list():
    """List all books with their authors."""
    print_list_result(_catalog().list_books())


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, "--host", help="Interface to bind"),
    port: int = typer.Option(settings.api_port, "--port", help="Port to listen on"),
    open_browser: bool = typer.Option(False, "--open", help="Open the catalog in a web browser"),
):
    """Start the web UI with uvicorn."""
    url = f"http://{host}:{port}/catalog/"
    print(f"Starting web UI on {url}")
    if open_browser:
        try:
            webbrowser.open(url)
        except webbrowser.Error as e:
            console.print(f"[yellow]Could not open a browser: {e}[/]")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "locallibrary.api:app",
        "--host", host,
        "--port", str(port),
    ]
    env = dict(os.environ)
    if _state["db_file"]:
        env["LIBRARY_DB_FILE"] = _state["db_file"]
    try:
        subprocess.run(args, env=env)
    except KeyboardInterrupt:
        print("Server stopped.")


if __name__ == "__main__":
    app()
