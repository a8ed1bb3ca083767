"""CLI interface for the Paper Condenser."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from condenser.batch import analyze_documents
from condenser.config import Settings
from condenser.errors import CondenserError
from condenser.importance import importance
from condenser.loaders import load_text
from condenser.model_info import KNOWN_MODELS
from condenser.pipeline import CompressionPipeline
from condenser.providers import PROVIDER_INFO, get_provider, is_provider_configured
from condenser.sections import classify_sections

app = typer.Typer(
    name="condense",
    help="Fit long research papers into an LLM context window.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every compression step."),
) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )


def _read(source: Path) -> str:
    try:
        return load_text(source)
    except (OSError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def _pipeline(provider: str | None, model: str | None) -> CompressionPipeline:
    try:
        settings = Settings.from_env()
        llm = get_provider(provider or settings.provider, model or settings.model)
    except (CondenserError, ImportError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    return CompressionPipeline(llm, settings=settings)


@app.command()
def sections(
    source: Path = typer.Argument(help="Text, markdown or PDF file."),
    model: str | None = typer.Option(None, "--model", "-m", help="Model used for token counting."),
) -> None:
    """Show how a document splits into sections."""
    text = _read(source)
    found = classify_sections(text, model)

    table = Table(title=f"Sections in {source.name}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Lines", justify="right", style="dim")
    table.add_column("Tokens", justify="right")
    table.add_column("Keep", justify="right")

    for i, section in enumerate(found, start=1):
        table.add_row(
            str(i),
            section.type.value,
            section.title,
            f"{section.start_line + 1}-{section.end_line + 1}",
            f"{section.token_count:,}",
            f"{importance(section.type):.0%}",
        )

    console.print(table)
    console.print(f"Total: [cyan]{sum(s.token_count for s in found):,}[/cyan] tokens")


@app.command()
def compress(
    source: Path = typer.Argument(help="Text, markdown or PDF file."),
    budget: int | None = typer.Option(
        None,
        "--budget",
        "-b",
        min=1,
        help="Target size in tokens (defaults to the model's available input budget).",
    ),
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="LLM provider (defaults to CONDENSER_PROVIDER or openai).",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model ID override (uses provider default if omitted).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write output to a markdown file instead of stdout.",
    ),
) -> None:
    """Compress a document to fit a token budget."""
    text = _read(source)
    pipeline = _pipeline(provider, model)
    target = budget or pipeline.available_tokens
    before = pipeline.count(text)

    console.print(
        Panel(
            f"[bold]Paper Condenser[/bold]\n"
            f"Source: {source}\n"
            f"Provider: {pipeline.provider.name} ({pipeline.model})\n"
            f"Budget: {target:,} tokens (document: {before:,})",
            border_style="cyan",
        )
    )

    if before <= target:
        console.print("[green]Document already fits, nothing to do.[/green]")
        result = text
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Compressing...", total=None)
            result = asyncio.run(pipeline.compress(text, target))
            progress.update(task, description="[green]Compressed!")

        after = pipeline.count(result)
        console.print(f"{before:,} → [cyan]{after:,}[/cyan] tokens ({1 - after / before:.1%} smaller)")

    if output:
        output.write_text(result, encoding="utf-8")
        console.print(f"\n[green]Saved to {output}[/green]")
    else:
        console.print()
        console.print(Markdown(result))


@app.command()
def analyze(
    sources: list[Path] = typer.Argument(help="Papers to analyse (text, markdown or PDF)."),
    provider: str | None = typer.Option(None, "--provider", "-p", help="LLM provider."),
    model: str | None = typer.Option(None, "--model", "-m", help="Model ID override."),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        min=1,
        help="Papers analysed at once (defaults to CONDENSER_MAX_CONCURRENT or 3).",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Write one <name>.analysis.md per paper into this directory.",
    ),
) -> None:
    """Write an in-depth analysis of each paper, compressing long ones first."""
    pipeline = _pipeline(provider, model)
    documents = [(source.stem, _read(source)) for source in sources]
    limit = concurrency or pipeline.settings.max_concurrent

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Analysing...", total=len(documents))
        results = asyncio.run(
            analyze_documents(
                documents,
                pipeline,
                max_concurrent=limit,
                on_done=lambda _: progress.advance(task),
            )
        )

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    for result in results:
        if not result.success:
            console.print(f"[red]✗ {result.doc_id}: {result.error}[/red]")
            continue
        if output_dir:
            path = output_dir / f"{result.doc_id}.analysis.md"
            path.write_text(result.content or "", encoding="utf-8")
            console.print(f"[green]✓ {result.doc_id}[/green] → {path}")
        else:
            console.print(Panel(Markdown(result.content or ""), title=result.doc_id))

    failed = sum(1 for r in results if not r.success)
    if failed:
        raise typer.Exit(1)


@app.command()
def providers() -> None:
    """List available LLM providers and their configuration status."""
    table = Table(title="Available Providers")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Default Model", style="dim")
    table.add_column("Free?", justify="center")
    table.add_column("Status", justify="center")

    for info in PROVIDER_INFO.values():
        if info.api_key_env is None:
            status = "[green]Ready[/green]"
        elif is_provider_configured(info.name):
            status = "[green]Configured[/green]"
        else:
            status = f"[yellow]Set {info.api_key_env}[/yellow]"

        free = "[green]Yes[/green]" if info.free else "[dim]No[/dim]"

        table.add_row(info.name, info.description, info.default_model, free, status)

    console.print(table)
    console.print(
        "\n[dim]Use --provider/-p with the compress command, e.g.:[/dim]"
        "\n  condense compress paper.pdf --provider groq"
    )


@app.command()
def models() -> None:
    """Show the context limits of known models."""
    table = Table(title="Known Models")
    table.add_column("Model", style="cyan", no_wrap=True)
    table.add_column("Context", justify="right")
    table.add_column("Max Output", justify="right")
    table.add_column("$/1K in", justify="right", style="dim")
    table.add_column("$/1K out", justify="right", style="dim")

    for info in KNOWN_MODELS.values():
        table.add_row(
            info.name,
            f"{info.max_context_tokens:,}",
            f"{info.max_output_tokens:,}",
            f"{info.cost_per_1k_input}" if info.cost_per_1k_input is not None else "-",
            f"{info.cost_per_1k_output}" if info.cost_per_1k_output is not None else "-",
        )

    console.print(table)
    console.print("[dim]Unknown models are treated as 32,768 context / 4,096 output.[/dim]")


if __name__ == "__main__":
    app()
