"""CLI entry point for Confract."""

import asyncio
import logging
import sys
from datetime import datetime

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import load_config
from .errors import ConfractError

console = Console()


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Confract - turn pasted text into structured, deduplicated documents."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _get_config(ctx) -> dict:
    return load_config(ctx.obj.get("config_path"))


def _get_store(config):
    from .vault.store import DocumentStore
    return DocumentStore(config["store_path"])


def _get_engine(config):
    from .engine import Engine
    return Engine.from_config(config)


def _read_input(source) -> str:
    if source:
        return source.read()
    if sys.stdin.isatty():
        console.print("[dim]Paste content, then press Ctrl-D:[/]")
    return sys.stdin.read()


def _can_prompt(source) -> bool:
    """True when a confirmation can still be read once the input is in."""
    return source is not None or sys.stdin.isatty()


def _require_document(store, doc_id):
    doc = store.get(doc_id)
    if doc is None:
        console.print(f"[red]Document not found: {doc_id}[/]")
        sys.exit(1)
    return doc


def _print_sections(sections) -> None:
    for section in sections:
        table = Table(title=f"{section.emoji} {section.title}", title_justify="left", show_header=False)
        table.add_column("Item", style="cyan")
        table.add_column("Note", style="dim", max_width=70)
        for item in section.items:
            name = f"{item.name} [green](new)[/]" if item.is_new else item.name
            table.add_row(name, item.note)
        console.print(table)


def _print_log(entries) -> None:
    if not entries:
        console.print("[dim]Nothing consolidated.[/]")
        return
    table = Table(title="Consolidation Log")
    table.add_column("#", style="dim", width=3)
    table.add_column("Removed", style="yellow")
    table.add_column("Kept As", style="cyan")
    table.add_column("Reason")
    table.add_column("Section", style="dim")
    for i, e in enumerate(entries):
        table.add_row(str(i), e.removed, e.kept_as, e.reason, e.section)
    console.print(table)


@cli.command()
@click.argument("source", type=click.File("r"), required=False)
@click.option("--into", "into_id", default=None, help="Merge into this document instead of detecting")
@click.option("--auto/--no-auto", default=True, help="Merge on a high match, ask on a medium one")
@click.option("--dry-run", is_flag=True, help="Show the result without saving")
@click.pass_context
def process(ctx, source, into_id, auto, dry_run):
    """Structure pasted text from SOURCE (or stdin) and file it."""
    from .models import now_ms
    from .vault.merge import create_document, merge, push_version

    config = _get_config(ctx)
    store = _get_store(config)
    engine = _get_engine(config)
    text = _read_input(source)

    target = None
    if into_id:
        target = _require_document(store, into_id)
    else:
        docs = store.list_documents()
        if docs:
            match = asyncio.run(engine.detect_match(text, docs))
            console.print(f"[blue]{match.confidence} confidence:[/] {match.reason}")
            candidate = next((d for d in docs if d.id == match.match_id), None)
            if auto and candidate is not None:
                if match.confidence == "high":
                    target = candidate
                elif match.confidence == "medium" and _can_prompt(source) and click.confirm(
                    f'Merge into "{candidate.title}"?', default=False
                ):
                    target = candidate

    try:
        result = asyncio.run(engine.process(text, target))
    except ConfractError as e:
        console.print(f"[red]Processing failed: {e}[/]")
        sys.exit(1)

    console.print(f"\n[bold]{result.emoji} {result.title}[/] [dim]({result.detected_type})[/]")
    _print_sections(result.sections)
    _print_log(result.consolidation_log)

    if target is not None:
        label = f"Before merge: {datetime.now():%Y-%m-%d %H:%M}"
        max_versions = config.get("versions", {}).get("max_versions", 20)
        doc = merge(push_version(target, label, max_versions), result)
        verb = "Merged into"
    else:
        now = now_ms()
        while store.get(f"doc_{now}") is not None:
            now += 1
        doc = create_document(result, now)
        verb = "Created"

    if dry_run:
        console.print(f"[yellow]Dry run: would have {verb.lower()} '{doc.title}'[/]")
        return

    store.save(doc)
    console.print(
        f"[green]✓ {verb} '{doc.title}' ({doc.id}): "
        f"{result.new_additions_count} new, {result.overlap_count} consolidated[/]"
    )


@cli.command()
@click.argument("source", type=click.File("r"), required=False)
@click.pass_context
def detect(ctx, source):
    """Show which stored document SOURCE (or stdin) belongs to."""
    config = _get_config(ctx)
    docs = _get_store(config).list_documents()
    engine = _get_engine(config)

    match = asyncio.run(engine.detect_match(_read_input(source), docs))
    console.print(f"Match:      {match.match_id or '-'}")
    console.print(f"Confidence: {match.confidence}")
    console.print(f"Reason:     {match.reason}")


@cli.command("list")
@click.pass_context
def list_documents(ctx):
    """List stored documents."""
    docs = _get_store(_get_config(ctx)).list_documents()
    if not docs:
        console.print("[yellow]No documents yet. Run 'confract process'.[/]")
        return

    table = Table(title="Documents")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Type")
    table.add_column("Items", justify="right", style="green")
    table.add_column("Updated", style="dim")
    for doc in docs:
        items = sum(len(s.items) for s in doc.sections)
        updated = datetime.fromtimestamp(doc.updated / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(doc.id, f"{doc.emoji} {doc.title}", doc.detected_type, str(items), updated)
    console.print(table)


@cli.command()
@click.argument("doc_id")
@click.option("--format", "fmt", type=click.Choice(["markdown", "text", "json"]), default="markdown")
@click.pass_context
def show(ctx, doc_id, fmt):
    """Print a document as markdown, plain text or JSON."""
    from .vault.templates import render_json, render_markdown, render_text

    doc = _require_document(_get_store(_get_config(ctx)), doc_id)
    if fmt == "json":
        click.echo(render_json(doc))
    elif fmt == "text":
        click.echo(render_text(doc))
    else:
        click.echo(render_markdown(doc.title, doc.sections))


@cli.command()
@click.argument("doc_id")
@click.pass_context
def log(ctx, doc_id):
    """Show what was consolidated into a document."""
    doc = _require_document(_get_store(_get_config(ctx)), doc_id)
    _print_log(doc.consolidation_log)


@cli.command()
@click.argument("doc_id")
@click.argument("name")
@click.pass_context
def restore(ctx, doc_id, name):
    """Put a consolidated item back into a document."""
    from .vault.merge import restore_item

    store = _get_store(_get_config(ctx))
    doc = restore_item(_require_document(store, doc_id), name)
    store.save(doc)
    console.print(f"[green]✓ '{name}' restored[/]")


@cli.command()
@click.argument("doc_id")
@click.pass_context
def versions(ctx, doc_id):
    """List saved versions of a document."""
    doc = _require_document(_get_store(_get_config(ctx)), doc_id)
    if not doc.versions:
        console.print("[dim]No versions yet.[/]")
        return

    table = Table(title=f"Versions of {doc.title}")
    table.add_column("#", style="dim", width=3)
    table.add_column("Label", style="cyan")
    table.add_column("Saved", style="dim")
    for i, v in enumerate(doc.versions):
        table.add_row(str(i), v.label, datetime.fromtimestamp(v.ts / 1000).strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@cli.command()
@click.argument("doc_id")
@click.argument("index", type=int)
@click.pass_context
def revert(ctx, doc_id, index):
    """Revert a document to version INDEX."""
    from .vault.merge import revert as revert_document

    config = _get_config(ctx)
    store = _get_store(config)
    doc = _require_document(store, doc_id)
    try:
        doc = revert_document(doc, index, config.get("versions", {}).get("max_versions", 20))
    except IndexError as e:
        console.print(f"[red]{e}[/]")
        sys.exit(1)
    store.save(doc)
    console.print(f"[green]✓ Reverted to version {index}[/]")


@cli.command()
@click.argument("doc_id")
@click.pass_context
def delete(ctx, doc_id):
    """Delete a stored document."""
    if _get_store(_get_config(ctx)).delete(doc_id):
        console.print(f"[green]✓ Deleted {doc_id}[/]")
    else:
        console.print(f"[yellow]Document not found: {doc_id}[/]")


@cli.command()
@click.pass_context
def health(ctx):
    """Load the embedding model and report readiness."""
    config = _get_config(ctx)
    engine = _get_engine(config)
    try:
        engine.provider.load()
    except ConfractError as e:
        console.print(f"[red]✗ {e}[/]")
        sys.exit(1)

    for key, value in engine.health().items():
        console.print(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
