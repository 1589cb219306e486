"""Feed command for reading pages of the unified activity feed."""

import json
import re

import click
from rich.console import Console
from rich.table import Table

from feedcomposer.config import get_settings
from feedcomposer.exceptions import FeedComposerError
from feedcomposer.feed import MergedPage, get_feed
from feedcomposer.sources.items import ReviewItem
from feedcomposer.utils.formatting import format_relative_time, truncate_text
from feedcomposer.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(raw: str | int | None) -> int | None:
    """Read the leading integer of ``raw`` (``"12abc"`` and ``"2.5"`` give 12 and 2)."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


def clamp_feed_params(
    page_raw: str | int | None,
    limit_raw: str | int | None,
    default_limit: int,
    max_limit: int,
) -> tuple[int, int]:
    """
    Turn raw request values into a valid (page, limit) pair.

    Missing, unparsable or zero values fall back to page 1 and ``default_limit``;
    the result is then clamped to ``page >= 1`` and ``1 <= limit <= max_limit``.
    """
    page = _parse_int(page_raw)
    limit = _parse_int(limit_raw)

    if not page:
        page = 1
    if not limit:
        limit = default_limit

    return max(1, page), min(max_limit, max(1, limit))


def _render_page(result: MergedPage) -> None:
    pagination = result.pagination

    table = Table(
        title=f"Activity feed (page {pagination.page} of {pagination.total_pages})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("When", style="dim")
    table.add_column("Kind")
    table.add_column("Title")
    table.add_column("Company")
    table.add_column("Author")
    table.add_column("Score/Status", justify="right")

    for item in result.items:
        if isinstance(item, ReviewItem):
            kind = "[green]review[/green]"
            detail = f"{item.overall_score:.1f}"
        else:
            kind = "[red]complaint[/red]"
            detail = item.status

        table.add_row(
            format_relative_time(item.created_at),
            kind,
            truncate_text(item.title, 40),
            item.company.name if item.company else "-",
            item.author.username,
            detail,
        )

    console.print(table)
    console.print(
        f"[dim]{len(result.items)} of {pagination.total} items, "
        f"{pagination.limit} per page[/dim]"
    )


@click.command()
@click.option("--page", "page_raw", default=None, help="Page number (1-based)")
@click.option("--limit", "limit_raw", default=None, help="Items per page")
@click.option("--category", default=None, help="Only items about companies in this category")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON response envelope")
@click.pass_context
def feed(
    ctx: click.Context,
    page_raw: str | None,
    limit_raw: str | None,
    category: str | None,
    as_json: bool,
) -> None:
    """Show one page of the merged review and complaint feed."""
    settings = get_settings()
    page, limit = clamp_feed_params(
        page_raw,
        limit_raw,
        default_limit=settings.feed.default_limit,
        max_limit=settings.feed.max_limit,
    )

    try:
        result = get_feed(page, limit, category=category)
    except FeedComposerError as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.error(f"Feed request failed (page={page}, limit={limit}): {e}")
        raise click.Abort() from e

    logger.info(
        f"Served feed page {page} (limit {limit}, category={category}): "
        f"{len(result.items)}/{result.pagination.total} items"
    )

    if as_json:
        click.echo(json.dumps(result.to_response(), indent=2))
        return

    if not result.items:
        console.print("[yellow]No items on this page.[/yellow]")
        console.print(
            f"[dim]Total items: {result.pagination.total}, "
            f"pages: {result.pagination.total_pages}[/dim]"
        )
        return

    _render_page(result)
