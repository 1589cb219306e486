"""Main CLI entry point for feedcomposer."""

import click
from rich.console import Console

from feedcomposer import __version__
from feedcomposer.cli.feed import feed
from feedcomposer.cli.seed import seed
from feedcomposer.cli.status import status
from feedcomposer.config import get_settings
from feedcomposer.database.connection import database_exists, initialize_database
from feedcomposer.utils.logging import setup_logging_from_settings

console = Console()


@click.group()
@click.version_option(__version__, prog_name="feedcomposer")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """
    feedcomposer - Unified activity feed over reviews and complaints.

    Merges the platform's content collections into one newest-first,
    paginated feed.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_logging_from_settings(get_settings().logging, verbose=verbose)

    if not database_exists():
        console.print("[dim]Initializing database...[/dim]")
        initialize_database(populate_defaults=True)
        console.print("[green]✓[/green] Database initialized with default companies")


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Initialize or reinitialize the database with defaults."""
    from feedcomposer.database.connection import reset_database

    if database_exists():
        if not click.confirm("Database already exists. This will delete all content. Continue?"):
            console.print("[yellow]Cancelled.[/yellow]")
            return

        reset_database()
        console.print("[green]✓[/green] Database reset with default companies")
    else:
        initialize_database(populate_defaults=True)
        console.print("[green]✓[/green] Database initialized with default companies")


@cli.command()
@click.option("--check", is_flag=True, help="Show migration status only")
@click.option("--version", "target_version", type=int, help="Migrate to specific version")
@click.pass_context
def migrate(ctx: click.Context, check: bool, target_version: int | None) -> None:
    """Run database migrations."""
    from feedcomposer.database.migrations import (
        get_pending_migrations,
        migration_status,
    )
    from feedcomposer.database.migrations import (
        migrate as run_migrate,
    )

    if check:
        info = migration_status()
        console.print(f"Current version: [cyan]{info['current_version']}[/cyan]")
        console.print(f"Latest version:  [cyan]{info['latest_version']}[/cyan]")
        console.print(f"Applied:         [green]{info['applied']}[/green]")
        console.print(f"Pending:         [yellow]{info['pending']}[/yellow]")

        pending = get_pending_migrations()
        if pending:
            console.print("\n[bold]Pending migrations:[/bold]")
            for m in pending:
                console.print(f"  v{m.version}: {m.name}")
        return

    count = run_migrate(target_version=target_version)
    if count > 0:
        console.print(f"[green]✓[/green] Applied {count} migration(s)")
    else:
        console.print("[dim]Database is up to date[/dim]")


cli.add_command(feed)
cli.add_command(seed)
cli.add_command(status)


if __name__ == "__main__":
    cli()
