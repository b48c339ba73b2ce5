"""Bibliography-related CLI helpers."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from citesmith.core.entries import EntryStore


def build_entry_table(store: EntryStore) -> Table:
    table = Table(
        title="Bibliography Entries",
        box=box.SIMPLE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Code", style="bold green", no_wrap=True)
    table.add_column("Index", justify="right")
    table.add_column("Authors", overflow="fold")
    table.add_column("Title", overflow="fold")
    table.add_column("Year", justify="right")

    for entry in store.all_entries_in_load_order():
        index = "—" if entry.explicit_index is None else str(entry.explicit_index)
        table.add_row(entry.code, index, ", ".join(entry.authors), entry.title, entry.year)
    return table


def print_bibliography_overview(store: EntryStore, console: Console | None = None) -> None:
    console = console or Console()
    if not len(store):
        console.print("[dim]No entries found.[/]")
        return
    console.print(build_entry_table(store))
