import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Environment variable controlling CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LOCALLIBRARY_CLI_OUTPUT"

STAT_LABELS = {
    "book_count": "Books",
    "book_instance_count": "Copies",
    "book_instance_available_count": "Copies available",
    "author_count": "Authors",
    "genre_count": "Genres",
}

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def print_list_result(books: List[Any]) -> None:
    """Print books according to the current output mode.
    - plain: 'Title by Author' lines, or 'No books in library.'
    - json: array of id, title, author
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    def author_name(book) -> str:
        return book.author.name if book.author else ""

    if mode == "json":
        payload = [{"id": b.id, "title": b.title, "author": author_name(b)} for b in books]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        for b in books:
            table.add_row(str(b.id), b.title, author_name(b))
        _console.print(table)
    else:
        for b in books:
            print(f"{b.title} by {author_name(b)}")


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print catalog counts according to the current output mode."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {stats.get(key, 0)}" for key, label in STAT_LABELS.items())
        _console.print(Panel.fit(content, title="Catalog", border_style="blue"))
    else:
        for key, label in STAT_LABELS.items():
            print(f"{label}: {stats.get(key, 0)}")
