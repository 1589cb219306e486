"""Status command for displaying feed content statistics."""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from feedcomposer.database.queries import get_content_stats
from feedcomposer.utils.formatting import format_file_size, format_number, format_relative_time

console = Console()


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show database and feed content status."""
    from feedcomposer.config import get_settings

    settings = get_settings()
    stats = get_content_stats(review_status=settings.feed.review_status)

    console.print()
    console.print(Panel.fit("[bold]feedcomposer Status[/bold]", border_style="blue"))
    console.print()

    db_path = settings.database.path
    db_size = db_path.stat().st_size if db_path.exists() else 0

    console.print(f"[bold]Database:[/bold] {db_path}")
    console.print(f"[dim]Size: {format_file_size(db_size)}[/dim]")
    console.print()

    totals_table = Table(title="Content", show_header=True, header_style="bold cyan")
    totals_table.add_column("Metric", style="dim")
    totals_table.add_column("Value", justify="right")

    totals_table.add_row("Reviews", format_number(stats["reviews_total"]))
    totals_table.add_row(
        f"Reviews in feed ({settings.feed.review_status})",
        format_number(stats["reviews_visible"]),
    )
    totals_table.add_row("Complaints", format_number(stats["complaints_total"]))
    totals_table.add_row("Companies", format_number(stats["companies_total"]))
    totals_table.add_row("Users", format_number(stats["users_total"]))
    totals_table.add_row(
        "Latest item",
        format_relative_time(stats["latest_item_at"]) if stats["latest_item_at"] else "Never",
    )

    console.print(totals_table)
    console.print()

    if stats["by_category"]:
        category_table = Table(title="Feed by Category", show_header=True, header_style="bold cyan")
        category_table.add_column("Category", style="dim")
        category_table.add_column("Reviews", justify="right")
        category_table.add_column("Complaints", justify="right")

        for row in stats["by_category"]:
            category_table.add_row(row["category"], str(row["reviews"]), str(row["complaints"]))

        console.print(category_table)
        console.print()

    console.print(
        f"[bold]Source priority:[/bold] {' > '.join(settings.feed.source_priority)} "
        f"[dim](chunk size {settings.feed.chunk_size})[/dim]"
    )
    console.print()
