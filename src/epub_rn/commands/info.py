"""Info command implementation."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from epub_rn.core.epub_reader import EpubReader


def execute_info(epub_path: Path, console: Console) -> None:
    """Display metadata, spine and table of contents without converting."""
    reader = EpubReader(epub_path)
    manifest = reader.manifest
    spine = reader.spine
    toc = reader.toc

    info_lines = [
        f"[bold]{reader.metadata_field('title') or 'Untitled'}[/]",
        "",
        f"[dim]Author:[/] {reader.metadata_field('creator') or 'Unknown'}",
        f"[dim]Language:[/] {reader.metadata_field('language') or 'Unknown'}",
        f"[dim]Publisher:[/] {reader.metadata_field('publisher') or 'Unknown'}",
        f"[dim]Resources:[/] {len(manifest)}",
        f"[dim]Spine items:[/] {len(spine)}",
        f"[dim]TOC entries:[/] {len(toc)}",
    ]

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )

    # Spine table
    console.print()
    table = Table(title="Spine", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", style="white")
    table.add_column("Path", style="white")
    table.add_column("Type", style="dim")
    table.add_column("Linear", justify="center")

    for index, item in enumerate(spine):
        entry = manifest.get(item.idref)
        table.add_row(
            str(index),
            item.idref,
            entry.path if entry else "-",
            entry.mime_type if entry else "missing",
            "yes" if item.linear else "no",
        )

    console.print(table)
    console.print()
