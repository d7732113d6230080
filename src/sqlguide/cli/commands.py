"""CLI commands for the SQL study guide.

Commands:
- show: Display one topic (id or unique id prefix)
- list: List topics, optionally filtered by category
- search: Search titles and memory tricks
- categories: Show categories with topic counts
- quiz: Practise the common exam questions
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from sqlguide.config.app_config import load_app_config
from sqlguide.core.catalog import (
    AmbiguousTopicIdError,
    ReferenceCatalog,
    TopicNotFoundError,
    load_catalog,
)
from sqlguide.core.guide_parser import GuideFormatError
from sqlguide.core.models import Category, InvalidCategoryError, TopicEntry, parse_category

app = typer.Typer(
    name="sqlguide",
    help="SQL study guide: views, keys, indexes, joins and aggregates.",
    no_args_is_help=True,
)

console = Console()


def _load_catalog_or_exit() -> ReferenceCatalog:
    """Load the catalog, or exit with the load error."""
    try:
        return load_catalog()
    except FileNotFoundError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except GuideFormatError as e:
        console.print(f"[red]✗ Invalid guide: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _parse_category_or_exit(value: str) -> Category:
    try:
        return parse_category(value)
    except InvalidCategoryError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def _topics_table(entries: list[TopicEntry], title: str | None = None) -> Table:
    table = Table(show_header=True, header_style="bold", title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category", style="magenta")
    table.add_column("Memory trick", style="dim")

    for entry in entries:
        table.add_row(
            entry.id,
            escape(entry.title),
            entry.category.value,
            escape(_truncate(entry.memory_trick or "")),
        )
    return table


def _print_entry(entry: TopicEntry) -> None:
    """Render a full topic entry."""
    console.print(
        Panel(
            f"[bold]{escape(entry.title)}[/bold]  [magenta]{entry.category.value}[/magenta]",
            title=f"[cyan]{entry.id}[/cyan]",
            expand=False,
        )
    )
    if entry.example_query is not None:
        console.print(Syntax(entry.example_query, "sql", theme="ansi_dark", word_wrap=True))
    else:
        console.print("[dim]No example query in the guide[/dim]")

    if entry.explanation:
        console.print()
        for point in entry.explanation:
            console.print(f"  • {escape(point)}")

    if entry.memory_trick is not None:
        console.print(f"\n[yellow]Memory trick:[/yellow] {escape(entry.memory_trick)}")

    if entry.has_question:
        console.print(f"\n[blue]Common question:[/blue] {escape(entry.common_question)}")
        console.print(f"[green]Answer:[/green] {escape(entry.common_answer)}")


@app.command()
def show(
    topic_id: str = typer.Argument(
        ..., help="Topic ID (e.g., 'inner-join') or unique prefix"
    ),
) -> None:
    """Show a topic with its example query, notes and memory trick."""
    catalog = _load_catalog_or_exit()

    try:
        resolved_id = catalog.resolve_id(topic_id)
    except TopicNotFoundError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        console.print("  Try: sqlguide search <text>")
        raise typer.Exit(code=1)
    except AmbiguousTopicIdError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    _print_entry(catalog.get_by_id(resolved_id))


@app.command(name="list")
def list_topics(
    category: str | None = typer.Option(
        None, "--category", "-c", help="Filter by category (View, Constraint, Index, DML, Query, Join, Aggregate)"
    ),
) -> None:
    """List topics in guide order."""
    catalog = _load_catalog_or_exit()

    if category is None:
        entries = list(catalog)
        title = f"{len(entries)} topics"
    else:
        wanted = _parse_category_or_exit(category)
        entries = catalog.list_by_category(wanted)
        title = f"{wanted.value}: {len(entries)} topics"

    if not entries:
        console.print("[yellow]⚠ No topics in this category[/yellow]")
        return

    console.print(_topics_table(entries, title=title))


@app.command()
def search(
    text: str = typer.Argument(..., help="Text to look for in titles and memory tricks"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum results to show"),
) -> None:
    """Search topics by title or memory trick (case-insensitive)."""
    catalog = _load_catalog_or_exit()
    max_results = limit or load_app_config().search.max_results

    results = catalog.search(text)
    if not results:
        console.print(f"[yellow]⚠ No topics match '{escape(text)}'[/yellow]")
        return

    shown = results[:max_results]
    console.print(_topics_table(shown, title=f"Results for '{escape(text)}'"))
    if len(results) > len(shown):
        console.print(f"[dim]... {len(results) - len(shown)} more (use --limit)[/dim]")


@app.command()
def categories() -> None:
    """Show categories with their number of topics."""
    catalog = _load_catalog_or_exit()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Topics", justify="right")

    for category, count in catalog.category_counts().items():
        table.add_row(category.value, str(count))

    console.print(table)


@app.command()
def quiz(
    category: str | None = typer.Option(None, "--category", "-c", help="Only questions from this category"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum number of questions"),
) -> None:
    """Practise the common exam questions.

    Each question is shown, the answer is revealed on Enter, and you mark
    whether you got it right. A score is printed at the end.
    """
    catalog = _load_catalog_or_exit()

    wanted = _parse_category_or_exit(category) if category is not None else None
    questions = catalog.list_questions(wanted)
    if limit is not None:
        questions = questions[:limit]

    if not questions:
        console.print("[yellow]⚠ No questions available[/yellow]")
        raise typer.Exit(code=1)

    correct = 0
    total = len(questions)
    for num, entry in enumerate(questions, start=1):
        console.print(
            Panel(
                escape(entry.common_question),
                title=f"[bold]Question {num}/{total}[/bold] · {escape(entry.title)}",
                expand=False,
            )
        )
        typer.prompt("Press Enter to reveal the answer", default="", show_default=False)
        console.print(f"[green]Answer:[/green] {escape(entry.common_answer)}")
        if entry.memory_trick is not None:
            console.print(f"[dim]Memory trick: {escape(entry.memory_trick)}[/dim]")

        if typer.confirm("Did you get it right?", default=False):
            correct += 1
        console.print()

    ratio = correct / total
    color = "green" if ratio >= 0.5 else "red"
    console.print(f"[bold]Score:[/bold] [{color}]{correct}/{total} ({ratio:.0%})[/{color}]")


if __name__ == "__main__":
    app()
