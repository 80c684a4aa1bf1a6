"""
Command-line entry point for the pasterbar clipboard history watcher.

Commands:
    watch    Record clipboard changes until interrupted.
    history  Show stored entries, newest first.
    clear    Delete every stored entry.
    copy     Put a stored entry back onto the clipboard.
    info     Show data locations and the number of stored entries.
"""

import time
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pasterbar_core.config import (
    AppSettings,
    ClipboardWatcherSettings,
    HistoryStoreSettings,
    LoggingSettings,
    get_settings,
)
from pasterbar_core.constants import ClipboardType
from pasterbar_core.logger import configure_logging
from pasterbar_core.store import HistoryStore
from pasterbar_services.clipboard import SystemClipboard
from pasterbar_services.feed import Snapshot
from pasterbar_services.manager import ClipboardManager

console = Console(
    color_system="auto",
    highlight=False,
)

app = typer.Typer(name="pasterbar", help="Clipboard history watcher.", no_args_is_help=True)

PREVIEW_WIDTH = 60


def _store() -> HistoryStore:
    return HistoryStore(get_settings(HistoryStoreSettings))


def _preview(text: str) -> str:
    line = " ".join(text.split())
    if len(line) > PREVIEW_WIDTH:
        return line[: PREVIEW_WIDTH - 1] + "…"
    return line


def _type_style(kind: ClipboardType) -> str:
    match kind:
        case ClipboardType.TEXT:
            return "green"
        case ClipboardType.IMAGE:
            return "magenta"
        case ClipboardType.FILE:
            return "cyan"


@app.command(name="watch", help="Record clipboard changes until interrupted.")
def watch(
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Stop after this many seconds."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print new entries."),
):
    configure_logging(get_settings(LoggingSettings))
    manager = ClipboardManager(
        clipboard=SystemClipboard(),
        store=_store(),
        settings=get_settings(ClipboardWatcherSettings),
    )
    # None until the first snapshot sets the baseline.
    last_seen: dict[str, Optional[int]] = {"id": None}

    def announce(snapshot: Snapshot) -> None:
        newest_id = snapshot[0].id if snapshot else 0
        baseline = last_seen["id"]
        last_seen["id"] = newest_id
        if baseline is None or newest_id <= baseline or quiet:
            return
        newest = snapshot[0]
        style = _type_style(newest.type)
        console.print(
            f"[bold {style}]{newest.type.value:>5}[/bold {style}] {_preview(newest.display_name)}"
        )

    manager.subscribe(announce)
    console.print("[bold green]Watching clipboard... (Ctrl+C to stop)[/bold green]")
    started = time.monotonic()
    try:
        with manager:
            while duration is None or time.monotonic() - started < duration:
                time.sleep(0.1)
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Stopped.[/bold yellow]")


@app.command(name="history", help="Show stored entries, newest first.")
def history(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Maximum entries to show."),
    kind: Optional[ClipboardType] = typer.Option(
        None, "--type", "-t", help="Only show entries of this type."
    ),
):
    store = _store()
    try:
        entries = store.query_all()
    finally:
        store.close()
    if kind is not None:
        entries = [e for e in entries if e.type is kind]
    if not entries:
        console.print("[dim]No clipboard history.[/dim]")
        return

    table = Table(title="Clipboard History")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Type")
    table.add_column("Content")
    table.add_column("Copied At", style="dim")
    for entry in entries[:limit]:
        style = _type_style(entry.type)
        table.add_row(
            str(entry.id),
            f"[{style}]{entry.type.value}[/{style}]",
            _preview(entry.display_name),
            entry.created_at.strftime("%Y-%m-%d %H:%M:%S") if entry.created_at else "",
        )
    console.print(table)


@app.command(name="clear", help="Delete every stored entry.")
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
):
    if not yes:
        typer.confirm("Delete all clipboard history?", abort=True)
    store = _store()
    try:
        cleared = store.clear_all()
    finally:
        store.close()
    if not cleared:
        console.print("[bold red]Error:[/bold red] Could not clear clipboard history.")
        raise typer.Exit(code=1)
    console.print("[bold green]Clipboard history cleared.[/bold green]")


@app.command(name="copy", help="Put a stored entry back onto the clipboard.")
def copy(entry_id: int = typer.Argument(..., help="ID shown by `pasterbar history`.")):
    store = _store()
    try:
        entry = store.get(entry_id)
        if entry is None:
            console.print(f"[bold red]Error:[/bold red] No entry with ID {entry_id}.")
            raise typer.Exit(code=1)
        manager = ClipboardManager(
            clipboard=SystemClipboard(),
            store=store,
            settings=get_settings(ClipboardWatcherSettings),
        )
        if not manager.copy_to_clipboard(entry):
            console.print(f"[bold red]Error:[/bold red] Could not copy entry {entry_id}.")
            raise typer.Exit(code=1)
    finally:
        store.close()
    console.print(f"[bold green]Copied {entry.type.value} entry {entry_id}.[/bold green]")


@app.command(name="info", help="Show data locations and the number of stored entries.")
def info():
    app_settings = get_settings(AppSettings)
    watcher_settings = get_settings(ClipboardWatcherSettings)
    store_settings = get_settings(HistoryStoreSettings)
    log_settings = get_settings(LoggingSettings)
    store = _store()
    try:
        available = store.available
        count = store.count()
    finally:
        store.close()

    console.print(f"[bold cyan]Environment:[/bold cyan] {app_settings.environment}")
    console.print(f"[bold cyan]Data directory:[/bold cyan] {app_settings.app_root}")
    console.print(f"[bold cyan]Database:[/bold cyan] {store_settings.database_path}")
    console.print(f"[bold cyan]Images:[/bold cyan] {watcher_settings.image_directory}")
    console.print(f"[bold cyan]Log file:[/bold cyan] {log_settings.log_file}")
    if available:
        console.print(f"[bold cyan]Entries:[/bold cyan] {count}")
    else:
        console.print("[bold red]Entries:[/bold red] database unavailable")


def entry():
    """Entry point for the pasterbar command."""
    app()


if __name__ == "__main__":
    entry()
