"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from epub_rn.commands.convert import execute_convert, get_default_output_dir
from epub_rn.config import ConvertConfig
from epub_rn.core.output_writer import OutputWriter

app = typer.Typer(
    name="epub-rn",
    help="Convert EPUB files into React Native renderable JSON.",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def check_epub(epub_path: Path) -> None:
    if epub_path.suffix.lower() != ".epub":
        console.print(f"[red]Unsupported file format: {epub_path.suffix}[/]")
        console.print("[dim]Supported formats: .epub[/]")
        raise typer.Exit(1)


@app.command()
def convert(
    epub_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: {book_name}_rn/)",
        ),
    ] = None,
    file_name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Name of the JSON file",
        ),
    ] = OutputWriter.DEFAULT_FILE_NAME,
    indent: Annotated[
        int,
        typer.Option(
            "--indent",
            help="JSON indentation, 0 for compact output",
            min=0,
        ),
    ] = 2,
    html_parser: Annotated[
        str,
        typer.Option(
            "--parser",
            help="BeautifulSoup tree builder (lxml or html.parser)",
        ),
    ] = "lxml",
    to_stdout: Annotated[
        bool,
        typer.Option(
            "--stdout",
            help="Print the JSON instead of writing a file",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Convert an EPUB into a single self-contained JSON document."""
    check_epub(epub_path)
    setup_logging(verbose)

    config = ConvertConfig(
        output_dir=output_dir or get_default_output_dir(epub_path),
        file_name=file_name,
        indent=indent or None,
        html_parser=html_parser,
    )

    try:
        execute_convert(
            epub_path=epub_path,
            config=config,
            to_stdout=to_stdout,
            quiet=quiet,
            console=console,
        )
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    epub_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display book metadata and spine without converting."""
    check_epub(epub_path)

    try:
        from epub_rn.commands.info import execute_info

        execute_info(epub_path, console)
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
