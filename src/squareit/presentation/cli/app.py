"""``squareit`` command line.

Operator commands that run outside the API process: schema creation,
account statistics and generation of deployment secrets.
"""

import asyncio
import secrets
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.panel import Panel

from squareit.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from squareit_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

T = TypeVar("T")

app = typer.Typer(
    name="squareit",
    help="SquareIt operator commands",
    no_args_is_help=True,
)
db_app = typer.Typer(name="db", help="Database schema", no_args_is_help=True)
accounts_app = typer.Typer(
    name="accounts",
    help="Account statistics",
    no_args_is_help=True,
)
secrets_app = typer.Typer(
    name="secrets",
    help="Deployment secrets",
    no_args_is_help=True,
)
for sub_app in (db_app, accounts_app, secrets_app):
    app.add_typer(sub_app)

console = Console()


def _run_with_engine(job: Callable[[], Awaitable[T]]) -> T:
    """Run ``job`` and dispose the shared engine afterwards."""

    async def _main() -> T:
        try:
            return await job()
        finally:
            await get_engine().dispose()

    return asyncio.run(_main())


async def _count_active_accounts() -> int:
    async with get_session_maker()() as session:
        return await AccountRepositorySQLAlchemy(session).count_active()


@db_app.command("init")
def init_db() -> None:
    """Create missing tables; existing tables are left alone."""
    _run_with_engine(create_tables)
    console.print("[bold green]Database schema is up to date[/bold green]")


@accounts_app.command("count")
def count_accounts() -> None:
    """Print the number of confirmed, non-deleted accounts."""
    count = _run_with_engine(_count_active_accounts)
    console.print(f"Active accounts: [bold cyan]{count}[/bold cyan]")


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Print a fresh database password for the .env file."""
    value = secrets.token_urlsafe(32)
    console.print(
        Panel(
            f"[cyan]POSTGRES_PASSWORD[/cyan]={value}",
            title="Add to config/.env (Docker) or config/.env.dev (local)",
            subtitle="[yellow]never commit this value[/yellow]",
        ),
    )


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
