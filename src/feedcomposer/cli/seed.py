"""Seed command for filling the database with demo content."""

import click
from rich.console import Console

from feedcomposer.database.queries import clear_all_content, get_companies
from feedcomposer.database.sample_data import generate_sample_content, insert_sample_content
from feedcomposer.exceptions import FeedComposerError
from feedcomposer.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


@click.command()
@click.option("--reviews", type=click.IntRange(min=0), default=40, help="Reviews to create")
@click.option("--complaints", type=click.IntRange(min=0), default=25, help="Complaints to create")
@click.option("--users", type=click.IntRange(min=1), default=8, help="Authors to create")
@click.option("--seed", "seed_value", type=int, default=None, help="Random seed for repeatable data")
@click.option("--clear", is_flag=True, help="Delete existing reviews and complaints first")
@click.pass_context
def seed(
    ctx: click.Context,
    reviews: int,
    complaints: int,
    users: int,
    seed_value: int | None,
    clear: bool,
) -> None:
    """Insert demo users, reviews, complaints and engagement."""
    try:
        if clear:
            reviews_deleted, complaints_deleted = clear_all_content()
            console.print(
                f"[dim]Cleared {reviews_deleted} reviews and {complaints_deleted} complaints[/dim]"
            )

        companies = get_companies()
        content = generate_sample_content(
            companies,
            review_count=reviews,
            complaint_count=complaints,
            user_count=users,
            seed=seed_value,
        )
        insert_sample_content(content)
    except FeedComposerError as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.error(f"Seeding failed: {e}")
        raise click.Abort() from e

    logger.info(
        f"Seeded {len(content.reviews)} reviews and {len(content.complaints)} complaints "
        f"across {len(companies)} companies"
    )
    console.print(
        f"[green]✓[/green] Inserted {len(content.users)} users, "
        f"{len(content.reviews)} reviews, {len(content.complaints)} complaints"
    )
    console.print(
        f"[dim]{len(content.comments)} comments, {len(content.reactions)} reactions, "
        f"{len(content.votes)} votes[/dim]"
    )
