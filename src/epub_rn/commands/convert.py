"""Convert command implementation."""

import re
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_rn.config import ConvertConfig
from epub_rn.core.extractor import convert_epub
from epub_rn.core.output_writer import OutputWriter, format_file_size, to_json
from epub_rn.models.book import BookDocument


def get_default_output_dir(epub_path: Path) -> Path:
    """Get default output directory based on the EPUB filename."""
    stem = epub_path.stem
    # Clean up the filename for directory name
    clean_stem = re.sub(r"[^\w\s-]", "", stem).strip()
    clean_stem = re.sub(r"[-\s]+", "_", clean_stem)
    return epub_path.parent / f"{clean_stem}_rn"


def count_nodes(book: BookDocument) -> int:
    """Count every node in every chapter tree."""
    total = 0
    stack = [chapter.content for chapter in book.chapters]
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(getattr(node, "children", []))
    return total


def build_summary(book: BookDocument, output_path: Path | None = None) -> list[str]:
    """Summary lines shown after a conversion."""
    meta = book.metadata
    lines = [
        f"[bold]{meta.title or 'Untitled'}[/]",
        f"[dim]Author:[/] {meta.author or 'Unknown'}",
        f"[dim]Language:[/] {meta.language or 'Unknown'}",
        "",
        f"[dim]Chapters:[/] {len(book.chapters)} of {book.structure.spine_count} spine items",
        f"[dim]Nodes:[/] {count_nodes(book):,}",
        f"[dim]Style keys:[/] {len(book.styles)}",
        f"[dim]Images:[/] {len(book.images)}",
        f"[dim]TOC entries:[/] {book.structure.toc_count}",
    ]
    if output_path is not None:
        lines.append("")
        lines.append(f"[dim]Output:[/] {output_path}")
        lines.append(f"[dim]Size:[/] {format_file_size(output_path)}")
    return lines


def execute_convert(
    epub_path: Path,
    config: ConvertConfig,
    to_stdout: bool,
    quiet: bool,
    console: Console,
) -> Path | None:
    """Execute the convert command.

    Returns the written JSON path, or None when printing to stdout.
    """
    if to_stdout:
        book = convert_epub(epub_path, html_parser=config.html_parser)
        # Plain print so the JSON isn't wrapped or highlighted
        print(to_json(book, config.indent))
        return None

    if not quiet:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Converting EPUB...", total=None)
            book = convert_epub(epub_path, html_parser=config.html_parser)
    else:
        book = convert_epub(epub_path, html_parser=config.html_parser)

    writer = OutputWriter(config.output_dir, config.file_name, config.indent)
    output_path = writer.write(book)

    if not quiet:
        console.print()
        console.print(
            Panel(
                "\n".join(build_summary(book, output_path)),
                title="Complete",
                border_style="green",
            )
        )

    return output_path
