# src/pocketscholar/cli/app.py
"""Command-line interface for PocketScholar.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import logging
import os

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.panel import Panel
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install pocketscholar[cli]"
    ) from e

from pocketscholar import __version__
from pocketscholar.commands import (
    ProgressUpdate,
    config_cmd,
    delete,
    ingest,
    list_cmd,
    query,
    status,
)
from pocketscholar.commands.base import ConfirmRequest, FileIngestResult, IngestReport
from pocketscholar.config import load_env_file

app = typer.Typer(
    name="pocketscholar",
    help="PocketScholar - ask questions about your own documents.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"pocketscholar {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging (retrieval scores, prompt sizes).",
    ),
) -> None:
    """PocketScholar - ask questions about your own documents."""
    load_env_file()
    _configure_logging(verbose)


@app.command()
def ingest_cmd(
    path: str = typer.Argument(..., help="File or directory to ingest"),
    document_id: str = typer.Option(
        None,
        "--id",
        help="Custom document id (single files only, default: absolute path)",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Disable progress bars",
    ),
) -> None:
    """Ingest a file or directory into the document store."""
    show_progress = not plain and not no_progress and console.is_terminal

    if show_progress:
        _ingest_with_progress(path, document_id, data_dir, config_file)
    else:
        _ingest_simple(path, document_id, data_dir, config_file, plain)


def _ingest_with_progress(
    path: str,
    document_id: str | None,
    data_dir: str | None,
    config_file: str | None,
) -> None:
    """Ingest with Rich progress bars."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.fields[stage]:>12}", justify="right"),
        BarColumn(bar_width=20),
        TextColumn("{task.fields[progress_text]}", style="cyan"),
        TextColumn("{task.description}", style="dim"),
        console=console,
    ) as progress:
        files_task = progress.add_task("", total=None, stage="Files", progress_text="")
        stage_task = progress.add_task("", total=100, stage="", visible=False, progress_text="")

        total_files = 0

        def on_file_start(filepath: str, index: int, total: int) -> None:
            nonlocal total_files
            total_files = total
            progress.update(
                files_task,
                description=os.path.basename(filepath),
                completed=index,
                total=total,
                progress_text=f"{index + 1}/{total}",
            )

        def on_progress(update: ProgressUpdate) -> None:
            if update.total > 1:
                progress.update(
                    stage_task,
                    visible=True,
                    stage=update.stage.value,
                    progress_text=f"{update.percentage}%",
                    description=f"({update.current}/{update.total})",
                    total=update.total,
                    completed=update.current,
                )
            else:
                progress.update(
                    stage_task,
                    visible=True,
                    stage=update.stage.value,
                    progress_text="",
                    description=update.message or "",
                    total=None,
                )

        def on_file_complete(file_result: FileIngestResult) -> None:
            progress.update(stage_task, visible=False)

        result = ingest.ingest(
            path=path,
            data_dir=data_dir,
            config_path=config_file,
            document_id=document_id,
            on_progress=on_progress,
            on_file_start=on_file_start,
            on_file_complete=on_file_complete,
        )

        progress.update(files_task, completed=total_files, progress_text="Done", description="")

    _render_ingest_result(result, plain=False)


def _ingest_simple(
    path: str,
    document_id: str | None,
    data_dir: str | None,
    config_file: str | None,
    plain: bool,
) -> None:
    """Ingest with simple console output."""

    def on_file_complete(file_result: FileIngestResult) -> None:
        if plain:
            return
        if file_result.failed:
            console.print(f"[red]Failed {file_result.filepath}: {file_result.reason}[/red]")
        else:
            console.print(
                f"[green]Ingested {file_result.filepath} ({file_result.chunks} chunks)[/green]"
            )

    result = ingest.ingest(
        path=path,
        data_dir=data_dir,
        config_path=config_file,
        document_id=document_id,
        on_file_complete=on_file_complete,
    )

    _render_ingest_result(result, plain=plain)


def _render_ingest_result(result: IngestReport, plain: bool) -> None:
    """Render ingest result to console."""
    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if result.files_processed == 0 and result.files_failed == 0:
        console.print(result.error or "Nothing to ingest.")
        return

    summary = f"Ingested {result.files_processed} files ({result.total_chunks} chunks)"
    if plain:
        console.print(summary)
        if result.total_zero_vectors:
            console.print(f"{result.total_zero_vectors} chunks have no embedding")
        for filepath, reason in result.errors:
            console.print(f"Failed {filepath}: {reason}")
    else:
        console.print()
        console.print(f"[green]{summary}[/green]")
        if result.total_zero_vectors:
            console.print(
                f"[yellow]{result.total_zero_vectors} chunks have no embedding; "
                "check the embedding provider[/yellow]"
            )
        if result.files_failed:
            console.print(f"[dim]{result.files_failed} files failed[/dim]")


ingest_cmd.__name__ = "ingest"
app.registered_commands[0].name = "ingest"


@app.command()
def ask_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    k: int = typer.Option(
        None,
        "--k",
        "-k",
        help="Number of chunks to retrieve",
    ),
    document: list[str] = typer.Option(
        None,
        "--document",
        "-D",
        help="Restrict the search to this document id (repeatable)",
    ),
    min_similarity: float = typer.Option(
        None,
        "--min-similarity",
        help="Minimum relevance score for a chunk to be used",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        "-r",
        help="Show retrieved passages without generating an answer",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Ask a question about the ingested documents."""
    result = query.query(
        question=question,
        data_dir=data_dir,
        config_path=config_file,
        k=k,
        document_ids=document or None,
        min_similarity=min_similarity,
        raw=raw,
    )

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if raw:
        _render_passages(result.passages, plain)
        return

    if plain:
        console.print(f"Answer: {result.answer}")
    else:
        console.print(Panel(result.answer or "", title="Answer", border_style="green"))

    if not result.sources:
        return

    console.print()
    if plain:
        console.print("Sources:")
        for i, source in enumerate(result.sources, 1):
            console.print(
                f"  [{i}] {source.document_id} p.{source.page_number} (score: {source.score:.3f})"
            )
    else:
        console.print("[bold]Sources:[/bold]")
        for i, source in enumerate(result.sources, 1):
            console.print(
                f"  [{i}] [cyan]{source.document_id}[/cyan] p.{source.page_number} "
                f"[dim](score: {source.score:.3f})[/dim]"
            )


def _render_passages(passages: list, plain: bool) -> None:
    if not passages:
        if plain:
            console.print("No results found.")
        else:
            console.print("[yellow]No results found.[/yellow]")
        return

    for i, passage in enumerate(passages, 1):
        preview = passage.text[:100].replace("\n", " ")
        if len(passage.text) > 100:
            preview += "..."
        if plain:
            console.print(
                f"  [{i}] {passage.document_id} p.{passage.page_number} "
                f"(score: {passage.score:.3f})"
            )
            console.print(f"      {preview}")
        else:
            console.print(
                f"  [{i}] [cyan]{passage.document_id}[/cyan] p.{passage.page_number} "
                f"[dim](score: {passage.score:.3f})[/dim]"
            )
            console.print(f"      [dim]{preview}[/dim]")


ask_cmd.__name__ = "ask"


@app.command(name="list")
def list_documents_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """List all ingested documents."""
    result = list_cmd.list_documents(data_dir=data_dir, config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if not result.documents:
        if plain:
            console.print("No documents ingested.")
        else:
            console.print("[dim]No documents ingested.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Documents ({len(result.documents)}):")
        for doc in result.documents:
            console.print(f"  {doc.document_id} ({doc.page_count} pages, {doc.chunk_count} chunks)")
    else:
        table = Table(title=f"Documents ({len(result.documents)})")
        table.add_column("Document", style="cyan")
        table.add_column("Pages", justify="right")
        table.add_column("Chunks", justify="right")

        for doc in result.documents:
            table.add_row(doc.document_id, str(doc.page_count), str(doc.chunk_count))

        console.print(table)


@app.command()
def status_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        help="Show chunk counts per document",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show store statistics."""
    result = status.status(data_dir=data_dir, config_path=config_file, detailed=detailed)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if result.total_documents == 0:
        if plain:
            console.print("No documents found.")
        else:
            console.print("[dim]No documents found. Run 'pocketscholar ingest' first.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print("Store Status:")
        console.print(f"  Data directory: {result.data_dir}")
        console.print(f"  Documents: {result.total_documents}")
        console.print(f"  Chunks: {result.total_chunks}")

        if detailed and result.documents:
            console.print()
            for doc in result.documents:
                console.print(
                    f"  {doc.document_id}: {doc.page_count} pages, {doc.chunk_count} chunks"
                )
    else:
        table = Table(title="Store Status")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")

        table.add_row("Data directory", result.data_dir)
        table.add_row("Documents", str(result.total_documents))
        table.add_row("Chunks", str(result.total_chunks))

        console.print(table)

        if detailed and result.documents:
            console.print()
            detail_table = Table(title="Chunks by Document")
            detail_table.add_column("Document", style="cyan")
            detail_table.add_column("Pages", justify="right")
            detail_table.add_column("Chunks", justify="right", style="green")

            for doc in result.documents:
                detail_table.add_row(doc.document_id, str(doc.page_count), str(doc.chunk_count))

            console.print(detail_table)


status_cmd.__name__ = "status"


def _cli_confirm(plain: bool):
    def confirm(request: ConfirmRequest) -> bool:
        if request.details:
            if plain:
                console.print(request.details)
            else:
                console.print(f"[yellow]{request.details}[/yellow]")
        return typer.confirm(request.message)

    return confirm


@app.command()
def delete_cmd(
    document_id: str = typer.Argument(..., help="Document id to delete"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Delete a document and all its chunks."""
    result = delete.delete(
        document_id=document_id,
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else _cli_confirm(plain),
    )

    if not result.success:
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        if plain:
            console.print(f"Error: {result.error}")
        else:
            console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if plain:
        console.print(f"Deleted {result.chunks_deleted} chunks from {document_id}")
    else:
        console.print(f"[green]Deleted {result.chunks_deleted} chunks from {document_id}[/green]")


delete_cmd.__name__ = "delete"


@app.command()
def clear_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Delete every document, e.g. after switching embedding models."""
    result = delete.clear(
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else _cli_confirm(plain),
    )

    if not result.success:
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if plain:
        console.print(f"Deleted {result.chunks_deleted} chunks")
    else:
        console.print(f"[green]Deleted {result.chunks_deleted} chunks[/green]")


clear_cmd.__name__ = "clear"


@app.command()
def config_cmd_handler(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file, data_dir=data_dir)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title="PocketScholar Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("provider", result.provider, "yaml" if result.config_path else "default")
    if result.provider == "litellm":
        table.add_row("llm_model", result.llm_model or "(not set)", "")
        table.add_row("embedding_model", result.embedding_model or "(not set)", "")
    table.add_row("data_dir", result.data_dir, "")

    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")


config_cmd_handler.__name__ = "config"
