from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from petstore_seed.domain.models import SeedSummary

COMPLETION_MESSAGE = "MongoDB initialization completed successfully!"


def format_summary(summary: SeedSummary) -> List[str]:
    """
    Render the plain-text summary printed after a successful seed.

    One count line per fixture collection, labelled by fixture kind so a
    renamed collection still reads e.g. ``Pets count: 5``.
    """
    lines = [
        COMPLETION_MESSAGE,
        f"Database: {summary.database}",
        f"Collections created: {', '.join(summary.collections)}",
    ]
    for name, count in summary.counts.items():
        label = summary.kinds.get(name, name)
        lines.append(f"{label.capitalize()} count: {count}")
    return lines


def print_status(
    database: str,
    counts: Mapping[str, int],
    indexes: Mapping[str, Dict[str, bool]],
    console: Optional[Console] = None,
) -> None:
    """
    Render per-collection document counts and indexes as a rich table.

    Unique indexes are marked with an asterisk.
    """
    console = console or Console()

    if not counts:
        console.print("[yellow]No collections to display.[/yellow]")
        return

    table = Table(
        title=f"PetStore seed status\n[dim]Database: {database}[/dim]",
        box=box.ROUNDED,
        caption="* unique index",
    )
    table.add_column("Collection", style="cyan", no_wrap=True)
    table.add_column("Documents", justify="right", style="magenta")
    table.add_column("Indexes", style="green")

    for name, count in counts.items():
        collection_indexes = indexes.get(name, {})
        index_str = ", ".join(
            f"{index}*" if unique else index for index, unique in collection_indexes.items()
        )
        table.add_row(name, f"{count:,}", index_str or "-")

    console.print(table)


__all__ = ["COMPLETION_MESSAGE", "format_summary", "print_status"]
