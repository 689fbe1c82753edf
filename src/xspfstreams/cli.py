"""Command-line interface for xspf-streams."""

import json
import sys
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings, setup_logging
from .parser import StreamDescriptor, get_parser


app = typer.Typer(help="Extract playable streams from XSPF playlists")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Extract playable streams from XSPF playlists."""
    settings = Settings.from_env()
    setup_logging("DEBUG" if verbose else settings.log_level)


def load_streams(playlist_path: Path) -> List[StreamDescriptor]:
    """Parse a playlist file, exiting with an error message on failure."""
    try:
        parser = get_parser(playlist_path)
        return parser.parse_file(playlist_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error parsing playlist: {e}[/red]")
        sys.exit(1)


def format_duration(duration: float) -> str:
    """Render a duration in seconds as m:ss, or '-' when unknown."""
    if duration < 0:
        return "-"
    minutes, seconds = divmod(int(duration), 60)
    return f"{minutes}:{seconds:02d}"


@app.command()
def list_streams(
    playlist_path: Path = typer.Argument(..., help="Path to XSPF playlist file"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, urls"),
):
    """List all streams in a playlist file."""
    streams = load_streams(playlist_path)

    if format == "json":
        console.print_json(json.dumps([stream.to_dict() for stream in streams], indent=2))

    elif format == "urls":
        for stream in streams:
            console.print(stream.stream_url, markup=False, highlight=False, soft_wrap=True)

    else:  # table format (default)
        table = Table(title=f"Streams in {playlist_path.name}")
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Title", style="green")
        table.add_column("URL", style="magenta", overflow="fold")
        table.add_column("Duration", style="yellow")
        table.add_column("Bitrate")
        table.add_column("Type")

        for i, stream in enumerate(streams, 1):
            table.add_row(
                str(i),
                stream.title or "-",
                stream.stream_url,
                format_duration(stream.duration),
                str(stream.bitrate) if stream.bitrate is not None else "-",
                stream.mime_type or "-",
            )

        console.print(table)
        console.print(f"\n[cyan]Total streams: {len(streams)}[/cyan]")


@app.command()
def metas(
    playlist_path: Path = typer.Argument(..., help="Path to XSPF playlist file"),
):
    """Show the annotation metadata of each stream."""
    streams = load_streams(playlist_path)

    for i, stream in enumerate(streams, 1):
        console.print(f"[cyan]{i}.[/cyan] {stream.stream_url}", highlight=False)
        if not stream.metas:
            console.print("  [yellow]No metadata[/yellow]")
            continue

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="magenta")
        table.add_column("Value", style="green")
        for key, value in stream.metas.items():
            table.add_row(key, value)
        console.print(table)


if __name__ == "__main__":
    app()
